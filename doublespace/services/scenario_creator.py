"""
Declaration entry point: picks a strategy, then creates the scenario.

    creator.mock(subject).fetch(1, 2).returns("row")
    creator.stub().probe(subject, "fetch")
    creator.do_not_call(subject).delete()

A callable passed under the block keyword (``block=`` by default) is the
scenario's implementation: it becomes ``returns(block=...)``, or
``after_call(...)`` when the scenario is probed.

    creator.stub(subject).fetch(1, block=lambda key: f"row {key}")

A creator is single use: it carries one strategy (and optionally the probe
modifier) for the scenario it creates.
"""
import logging
from typing import Any, Optional

from doublespace.core.exceptions.base import ConfigurationError
from doublespace.engine.scenario import Strategy
from doublespace.engine.scenario_definition import ScenarioDefinition

logger = logging.getLogger(__name__)


class _NoSubject:
    def __repr__(self):
        return "<no subject>"


NO_SUBJECT = _NoSubject()


class ScenarioMethodProxy:
    """Turns ``proxy.method_name(*args, **kwargs)`` into a scenario declaration."""

    def __init__(self, creator: "ScenarioCreator", subject: Any):
        self._creator = creator
        self._subject = subject

    def __getattr__(self, method_name: str):
        if method_name.startswith("__"):
            raise AttributeError(method_name)

        def create_scenario(*args, **kwargs) -> ScenarioDefinition:
            return self._creator.create(self._subject, method_name, *args, **kwargs)

        return create_scenario


class ScenarioCreator:
    def __init__(self, space):
        self.space = space
        self.strategy: Optional[Strategy] = None
        self.probe_enabled = False
        self.subject: Any = NO_SUBJECT

    # ---- Strategies ----

    def mock(self, subject: Any = NO_SUBJECT, method_name: Optional[str] = None):
        return self._add_strategy(Strategy.MOCK, subject, method_name)

    def stub(self, subject: Any = NO_SUBJECT, method_name: Optional[str] = None):
        return self._add_strategy(Strategy.STUB, subject, method_name)

    def do_not_call(self, subject: Any = NO_SUBJECT, method_name: Optional[str] = None):
        if self.probe_enabled:
            raise ConfigurationError("Scenarios cannot be probed when using do_not_call strategy")
        return self._add_strategy(Strategy.DO_NOT_CALL, subject, method_name)

    dont_call = do_not_call
    do_not_allow = do_not_call
    dont_allow = do_not_call

    def probe(self, subject: Any = NO_SUBJECT, method_name: Optional[str] = None):
        if self.strategy is Strategy.DO_NOT_CALL:
            raise ConfigurationError("Scenarios cannot be probed when using do_not_call strategy")
        self.probe_enabled = True
        return self._subject_or_self(subject, method_name)

    def _add_strategy(self, strategy: Strategy, subject: Any, method_name: Optional[str]):
        if self.strategy is not None:
            raise ConfigurationError(f"This Scenario already has a {self.strategy.value} strategy")
        self.strategy = strategy
        return self._subject_or_self(subject, method_name)

    def _subject_or_self(self, subject: Any, method_name: Optional[str]):
        if subject is NO_SUBJECT:
            return self
        if method_name is None:
            return ScenarioMethodProxy(self, subject)
        return self.create(subject, method_name)

    # ---- Creation ----

    def create(self, subject: Any, method_name: str, *args, **kwargs) -> ScenarioDefinition:
        if self.strategy is None:
            raise ConfigurationError("This Scenario has no strategy")

        self.subject = subject
        # the block keyword carries the implementation, never an expected argument
        block = kwargs.pop(self.space.settings.BLOCK_KEYWORD, None)
        double = self.space.double_for(subject, method_name)
        scenario = self.space.create_scenario(double)
        scenario.strategy = self.strategy
        scenario.probe = self.probe_enabled
        definition = scenario.definition

        if args or kwargs:
            definition.with_args(*args, **kwargs)
        else:
            definition.with_any_args()
            scenario.arguments_declared = False

        if self.strategy is Strategy.MOCK:
            definition.once()
        elif self.strategy is Strategy.STUB:
            definition.any_number_of_times()
        else:
            definition.never()

        if self.probe_enabled:
            definition.implemented_by_original_method()
            if block is not None:
                definition.after_call(block)
        elif block is not None:
            definition.returns(block=block)

        logger.debug(f"Declared {scenario!r} on {subject!r}")
        return definition
