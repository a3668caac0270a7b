from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from doublespace.core.exceptions.base import OrderingViolationError

if TYPE_CHECKING:
    from doublespace.engine.scenario import Scenario

logger = logging.getLogger(__name__)


class OrderingQueue:
    """Global sequence of ordered scenarios and a cursor over it.

    Scenarios are kept in the order ``ordered()`` was declared. The scenario
    at the cursor is the only ordered scenario that may be invoked next; the
    cursor moves past it once it becomes terminal.
    """

    def __init__(self):
        self.scenarios: List["Scenario"] = []
        self.cursor = 0

    def __contains__(self, scenario) -> bool:
        return any(s is scenario for s in self.scenarios)

    def __len__(self) -> int:
        return len(self.scenarios)

    def register(self, scenario: "Scenario") -> None:
        if scenario not in self:
            self.scenarios.append(scenario)

    @property
    def expected(self) -> Optional["Scenario"]:
        if self.cursor < len(self.scenarios):
            return self.scenarios[self.cursor]
        return None

    @property
    def remaining(self) -> List["Scenario"]:
        return self.scenarios[self.cursor:]

    def verify(self, scenario: "Scenario") -> None:
        matcher = scenario.times_matcher
        if matcher is None or not matcher.bounded:
            raise OrderingViolationError(
                f"Ordered Scenarios cannot have a non-terminal times called expectation: {scenario.formatted_name()}"
            )

        expected = self.expected
        if expected is not scenario:
            expected_name = expected.formatted_name() if expected is not None else "no further ordered scenarios"
            message = f"{scenario.formatted_name()} called out of order\nExpected {expected_name}"
            if self.remaining:
                message += "\nRemaining ordered scenarios:\n" + "\n".join(
                    f"- {s.formatted_name()}" for s in self.remaining
                )
            raise OrderingViolationError(message)

    def advance_if_exhausted(self, scenario: "Scenario") -> None:
        if self.expected is scenario and scenario.is_terminal():
            self.cursor += 1
            logger.debug(f"Ordered scenario {scenario!r} exhausted, cursor at {self.cursor}")

    def clear(self) -> None:
        self.scenarios = []
        self.cursor = 0
