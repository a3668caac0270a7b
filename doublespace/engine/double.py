"""
A Double owns every Scenario declared against one (subject, method) pair and
picks the one that handles each intercepted call.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence

from doublespace.core.exceptions.base import (
    ConfigurationError,
    ScenarioNotFoundError,
    TimesCalledError,
)
from doublespace.engine.call_log import CallLogMixin
from doublespace.engine.scenario import Scenario, Strategy
from doublespace.expectations.argument_expectations import format_call
from doublespace.infrastructure.interception.method_interceptor import (
    find_original_method,
    invoke_original,
)

if TYPE_CHECKING:
    from doublespace.engine.space import Space

logger = logging.getLogger(__name__)


class Double(CallLogMixin):
    def __init__(self, space: "Space", subject: Any, method_name: str):
        super().__init__()
        self.space = space
        self.subject = subject
        self.method_name = method_name
        self.scenarios: List[Scenario] = []
        # captured before any proxy is installed over it
        self.original_method: Optional[Callable] = find_original_method(subject, method_name)

    def register_scenario(self, scenario: Scenario) -> None:
        self.scenarios.append(scenario)

    # ---- Selection ----

    def find_scenario_to_attempt(self, args: Sequence = (), kwargs: Mapping = None) -> Optional[Scenario]:
        exact_matches = [s for s in self.scenarios if s.exact_match(args, kwargs)]
        wildcard_matches = [s for s in self.scenarios if s.wildcard_match(args, kwargs)]

        for candidates in (exact_matches, wildcard_matches):
            for scenario in candidates:
                if not scenario.is_terminal():
                    return scenario

        # every candidate is exhausted; attempting one raises TimesCalledError
        if exact_matches:
            return exact_matches[0]
        if wildcard_matches:
            return wildcard_matches[0]
        return None

    # ---- Dispatch ----

    def call(self, args: Sequence = (), kwargs: Mapping = None, block: Optional[Callable] = None) -> Any:
        args, kwargs = tuple(args), dict(kwargs or {})
        self._record_call(self.method_name, args, kwargs)

        scenario = self.find_scenario_to_attempt(args, kwargs)
        if scenario is None:
            raise ScenarioNotFoundError(self._scenario_not_found_message(args, kwargs))

        logger.debug(f"{format_call(self.method_name, args, kwargs)} dispatched to {scenario!r}")
        return self.attempt(scenario, args, kwargs, block)

    def attempt(self, scenario: Scenario, args: tuple, kwargs: Dict[str, Any], block: Optional[Callable]) -> Any:
        matcher = scenario.times_matcher
        if matcher is None and scenario.strategy is not None:
            raise ConfigurationError(
                f"{scenario.formatted_name()} has a {scenario.strategy.value} strategy "
                f"but no times called expectation"
            )

        if scenario.strategy is Strategy.DO_NOT_CALL or (matcher is not None and scenario.is_terminal()):
            scenario.times_called += 1
            raise TimesCalledError.for_count(matcher, scenario.times_called)

        if scenario.ordered:
            self.space.verify_ordered(scenario)

        scenario.times_called += 1
        if scenario.ordered:
            self.space.ordering.advance_if_exhausted(scenario)

        return scenario.definition.resolve(args, kwargs, block)

    # ---- Collaboration with the interception layer ----

    def attach_block(self, kwargs: Mapping, block: Optional[Callable]) -> Dict[str, Any]:
        kwargs = dict(kwargs or {})
        if block is not None:
            kwargs[self.space.settings.BLOCK_KEYWORD] = block
        return kwargs

    def invoke_original(self, args: Sequence = (), kwargs: Mapping = None, block: Optional[Callable] = None) -> Any:
        return invoke_original(
            self.subject, self.method_name, self.original_method, args, self.attach_block(kwargs, block)
        )

    # ---- Verification ----

    def unsatisfied_scenarios(self) -> List[Scenario]:
        return [s for s in self.scenarios if not s.is_satisfied()]

    def _scenario_not_found_message(self, args: tuple, kwargs: Dict[str, Any]) -> str:
        message = f"No scenario for {format_call(self.method_name, args, kwargs)}"
        if not self.scenarios:
            return message
        expected = "\n".join(f"- {scenario.formatted_name()}" for scenario in self.scenarios)
        return f"{message}\nDeclared scenarios:\n{expected}"

    def __repr__(self):
        return f"<Double {self.method_name} on {self.subject!r} ({len(self.scenarios)} scenarios)>"
