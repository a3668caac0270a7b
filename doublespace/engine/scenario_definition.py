"""
Fluent configuration surface of a Scenario.

Every setter mutates the underlying :class:`Scenario` and returns the same
definition, so declarations chain::

    definition.with_args(1, 2).twice().returns("baz").ordered()

The definition also decides, at call time, which step of the implementation
chain produces the value handed back to the caller (:meth:`resolve`).
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from doublespace.core.exceptions.base import ConfigurationError
from doublespace.engine.scenario import UNSET, Scenario
from doublespace.expectations.argument_expectations import (
    AnyArgumentExpectation,
    ArgumentEqualityExpectation,
    ArgumentExpectation,
    no_argument_expectation,
)
from doublespace.expectations.times_called import (
    AnyTimesMatcher,
    AtLeastMatcher,
    AtMostMatcher,
    IntegerMatcher,
    TimesCalledMatcher,
)

logger = logging.getLogger(__name__)


def _call_flexibly(block: Callable, args: Sequence, kwargs: Mapping) -> Any:
    """Call ``block`` with the call's arguments, or with none if it declares no parameters."""
    try:
        parameters = inspect.signature(block).parameters
    except (TypeError, ValueError):
        return block(*args, **kwargs)
    if not parameters:
        return block()
    return block(*args, **kwargs)


class ScenarioDefinition:
    def __init__(self, scenario: Scenario):
        self.scenario = scenario
        scenario.definition = self

    # ---- Argument expectations ----

    def with_args(self, *args, **kwargs) -> "ScenarioDefinition":
        return self._set_argument_expectation(ArgumentEqualityExpectation(args=args, kwargs=kwargs))

    def with_no_args(self) -> "ScenarioDefinition":
        return self._set_argument_expectation(no_argument_expectation())

    def with_any_args(self) -> "ScenarioDefinition":
        return self._set_argument_expectation(AnyArgumentExpectation())

    def _set_argument_expectation(self, expectation: ArgumentExpectation) -> "ScenarioDefinition":
        if self.scenario.arguments_declared and self._strict_arguments():
            raise ConfigurationError("This Scenario already has an argument expectation")
        self.scenario.argument_expectation = expectation
        self.scenario.arguments_declared = True
        return self

    def _strict_arguments(self) -> bool:
        settings = getattr(self.scenario.space, "settings", None)
        return bool(settings and settings.STRICT_ARGUMENT_EXPECTATIONS)

    # ---- Times called expectations ----

    def never(self) -> "ScenarioDefinition":
        return self._set_times_matcher(IntegerMatcher, 0)

    def once(self) -> "ScenarioDefinition":
        return self._set_times_matcher(IntegerMatcher, 1)

    def twice(self) -> "ScenarioDefinition":
        return self._set_times_matcher(IntegerMatcher, 2)

    def times(self, n) -> "ScenarioDefinition":
        if isinstance(n, TimesCalledMatcher):
            self.scenario.times_matcher = n
            return self
        return self._set_times_matcher(IntegerMatcher, n)

    def at_least(self, n: int) -> "ScenarioDefinition":
        return self._set_times_matcher(AtLeastMatcher, n)

    def at_most(self, n: int) -> "ScenarioDefinition":
        return self._set_times_matcher(AtMostMatcher, n)

    def any_number_of_times(self) -> "ScenarioDefinition":
        self.scenario.times_matcher = AnyTimesMatcher()
        return self

    def _set_times_matcher(self, matcher_class, n) -> "ScenarioDefinition":
        try:
            self.scenario.times_matcher = matcher_class(n)
        except ValidationError as e:
            raise ConfigurationError(
                f"Times called expectation must be a non-negative integer, got {n!r}"
            ) from e
        return self

    # ---- Ordering ----

    def ordered(self) -> "ScenarioDefinition":
        self.scenario.ordered = True
        self.scenario.space.register_ordered(self.scenario)
        return self

    # ---- Implementation chain ----

    def returns(self, value: Any = UNSET, block: Optional[Callable] = None) -> "ScenarioDefinition":
        if value is not UNSET and block is not None:
            raise ConfigurationError("returns cannot accept both an argument and a block")
        if block is not None:
            self.scenario.return_block = block
            self.scenario.return_value = UNSET
        else:
            self.scenario.return_value = None if value is UNSET else value
            self.scenario.return_block = None
        return self

    def yields(self, *values) -> "ScenarioDefinition":
        self.scenario.yield_values = values
        return self

    def after_call(self, block: Optional[Callable] = None) -> "ScenarioDefinition":
        if block is None or not callable(block):
            raise ConfigurationError("after_call expects a block")
        self.scenario.after_call_block = block
        return self

    def implemented_by(self, implementation: Callable) -> "ScenarioDefinition":
        if not callable(implementation):
            raise ConfigurationError("implemented_by expects a callable")
        self.scenario.implementation = implementation
        self.scenario.use_original_method = False
        return self

    def implemented_by_original_method(self) -> "ScenarioDefinition":
        self.scenario.implementation = None
        self.scenario.use_original_method = True
        return self

    # ---- Queries ----

    @property
    def argument_expectation(self) -> Optional[ArgumentExpectation]:
        return self.scenario.argument_expectation

    @property
    def times_matcher(self) -> Optional[TimesCalledMatcher]:
        return self.scenario.times_matcher

    @property
    def expected_arguments(self) -> Tuple[Any, ...]:
        return self.scenario.expected_arguments

    @property
    def method_name(self) -> str:
        return self.scenario.method_name

    def is_exact_match(self, *args, **kwargs) -> bool:
        return self.scenario.exact_match(args, kwargs)

    def is_wildcard_match(self, *args, **kwargs) -> bool:
        return self.scenario.wildcard_match(args, kwargs)

    def is_terminal(self) -> bool:
        return self.scenario.is_terminal()

    def is_ordered(self) -> bool:
        return self.scenario.ordered

    # ---- Resolution ----

    def resolve(self, args: Sequence = (), kwargs: Mapping = None, block: Optional[Callable] = None) -> Any:
        """Run the implementation chain for one call and return the final value."""
        scenario = self.scenario
        kwargs = dict(kwargs or {})

        if scenario.implementation is not None or scenario.use_original_method:
            value = self._call_implementation(args, kwargs, block)
        else:
            yielded = UNSET
            if block is not None and scenario.yield_values is not None:
                yielded = block(*scenario.yield_values)

            if scenario.return_value is not UNSET:
                value = scenario.return_value
            elif scenario.return_block is not None:
                value = _call_flexibly(scenario.return_block, args, kwargs)
            elif yielded is not UNSET:
                value = yielded
            else:
                value = None

        if scenario.after_call_block is not None:
            value = scenario.after_call_block(value)
        return value

    def _call_implementation(self, args: Sequence, kwargs: Dict[str, Any], block: Optional[Callable]) -> Any:
        if self.scenario.use_original_method:
            logger.debug(f"Falling back to original {self.scenario.method_name} for {self.scenario!r}")
            return self.scenario.double.invoke_original(args, kwargs, block)
        return self.scenario.implementation(*args, **self.scenario.double.attach_block(kwargs, block))
