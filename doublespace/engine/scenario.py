"""
A Scenario is one declared expectation for calls to a (subject, method) pair.

It only carries state. Declaration goes through its
:class:`~doublespace.engine.scenario_definition.ScenarioDefinition` and call
dispatch through the owning :class:`~doublespace.engine.double.Double`.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple

from doublespace.expectations.argument_expectations import ArgumentExpectation
from doublespace.expectations.times_called import TimesCalledMatcher

if TYPE_CHECKING:
    from doublespace.engine.double import Double
    from doublespace.engine.scenario_definition import ScenarioDefinition


class Strategy(str, Enum):
    MOCK = "mock"
    STUB = "stub"
    DO_NOT_CALL = "do_not_call"


class _Unset:
    def __repr__(self):
        return "<unset>"

    def __bool__(self):
        return False


UNSET = _Unset()


class Scenario:
    def __init__(self, double: "Double", sequence_number: int = 0):
        self.double = double
        self.sequence_number = sequence_number

        self.argument_expectation: Optional[ArgumentExpectation] = None
        # False while the expectation is only a creator default
        self.arguments_declared = False
        self.times_matcher: Optional[TimesCalledMatcher] = None
        self.strategy: Optional[Strategy] = None
        self.probe = False
        self.ordered = False
        self.times_called = 0

        # implementation chain
        self.return_value: Any = UNSET
        self.return_block: Optional[Callable] = None
        self.yield_values: Optional[Tuple[Any, ...]] = None
        self.after_call_block: Optional[Callable] = None
        self.implementation: Optional[Callable] = None
        self.use_original_method = False

        # set by ScenarioDefinition.__init__
        self.definition: Optional["ScenarioDefinition"] = None

    @property
    def method_name(self) -> str:
        return self.double.method_name

    @property
    def subject(self) -> Any:
        return self.double.subject

    @property
    def space(self):
        return self.double.space

    def is_terminal(self) -> bool:
        return self.times_matcher is not None and self.times_matcher.is_terminal(self.times_called)

    def is_satisfied(self) -> bool:
        return self.times_matcher is None or self.times_matcher.is_satisfied(self.times_called)

    def exact_match(self, args=(), kwargs=None) -> bool:
        return self.argument_expectation is not None and self.argument_expectation.exact_match(args, kwargs)

    def wildcard_match(self, args=(), kwargs=None) -> bool:
        return self.argument_expectation is not None and self.argument_expectation.wildcard_match(args, kwargs)

    @property
    def expected_arguments(self) -> Tuple[Any, ...]:
        if self.argument_expectation is None:
            return ()
        return self.argument_expectation.expected_arguments

    def formatted_name(self) -> str:
        if self.argument_expectation is None:
            return f"{self.method_name}(<no argument expectation>)"
        return self.argument_expectation.describe(self.method_name)

    def __repr__(self):
        strategy = self.strategy.value if self.strategy else "scenario"
        return f"<{strategy} {self.formatted_name()} #{self.sequence_number}>"
