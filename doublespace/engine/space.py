"""
The Space is the registry every double, scenario and ordering constraint of
one test lives in.

It is the root the interception layer talks to: a proxy hands it "a call
happened with these arguments" through :meth:`Space.dispatch` and gets back
either the value to produce or a raised error. One Space is created per test
and reset at the test boundary.
"""
from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from doublespace.core.config import Settings, settings as default_settings
from doublespace.core.exceptions.base import (
    ScenarioNotFoundError,
    TimesCalledError,
    VerificationError,
)
from doublespace.engine.double import Double
from doublespace.engine.ordering import OrderingQueue
from doublespace.engine.scenario import Scenario
from doublespace.engine.scenario_definition import ScenarioDefinition
from doublespace.expectations.argument_expectations import format_call
from doublespace.infrastructure.interception.method_interceptor import MethodInterceptor

logger = logging.getLogger(__name__)


class Space:
    def __init__(self, settings: Optional[Settings] = None, interceptor: Optional[MethodInterceptor] = None):
        self.settings = settings or default_settings
        self.interceptor = interceptor
        self.doubles: Dict[Tuple[int, str], Double] = {}
        self.ordering = OrderingQueue()
        self._sequence = itertools.count()

    # ---- Registry ----

    def double_for(self, subject: Any, method_name: str) -> Double:
        key = (id(subject), method_name)
        double = self.doubles.get(key)
        if double is None:
            double = Double(self, subject, method_name)
            # registered only once the proxy is in place
            if self.interceptor is not None:
                self.interceptor.install(double)
            self.doubles[key] = double
            logger.debug(f"Created double for {method_name} on {subject!r}")
        return double

    def find_double(self, subject: Any, method_name: str) -> Optional[Double]:
        return self.doubles.get((id(subject), method_name))

    def create_scenario(self, double: Double) -> Scenario:
        scenario = Scenario(double, sequence_number=next(self._sequence))
        ScenarioDefinition(scenario)
        double.register_scenario(scenario)
        return scenario

    # ---- Ordering ----

    @property
    def ordered_scenarios(self) -> List[Scenario]:
        return list(self.ordering.scenarios)

    def register_ordered(self, scenario: Scenario) -> None:
        self.ordering.register(scenario)

    def verify_ordered(self, scenario: Scenario) -> None:
        self.ordering.verify(scenario)

    # ---- Dispatch ----

    def dispatch(self, subject: Any, method_name: str, args: Sequence = (), kwargs: Mapping = None,
                 block: Optional[Callable] = None) -> Any:
        double = self.find_double(subject, method_name)
        if double is None:
            raise ScenarioNotFoundError(
                f"No double registered for {format_call(method_name, args, kwargs)} on {subject!r}"
            )
        return double.call(args, kwargs, block)

    # ---- Verification & teardown ----

    def verify(self) -> None:
        failures: List[TimesCalledError] = []
        for double in self.doubles.values():
            for scenario in double.unsatisfied_scenarios():
                failures.append(
                    TimesCalledError.for_count(
                        scenario.times_matcher, scenario.times_called, scenario.formatted_name()
                    )
                )

        if failures:
            logger.info(f"Verification failed for {len(failures)} scenario(s)")
            raise VerificationError(failures)
        logger.info(f"Verified {len(self.doubles)} double(s)")

    def reset(self) -> None:
        if self.interceptor is not None:
            self.interceptor.restore_all()
        self.doubles = {}
        self.ordering.clear()
        self._sequence = itertools.count()
        logger.info("Space reset")

    def verify_and_reset(self) -> None:
        try:
            self.verify()
        finally:
            self.reset()
