"""
Times-called matchers.

A matcher answers three questions about a scenario's call counter:

* ``accepts(count)``: would a counter value of ``count`` still be legal;
* ``is_satisfied(count)``: is the expectation met for verification;
* ``is_terminal(count)``: may no further calls legally occur.

Matchers are immutable value objects, so two independently constructed
matchers with the same cardinality compare equal.
"""
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class TimesCalledMatcher(BaseModel):
    model_config = ConfigDict(frozen=True)

    # whether the matcher can ever become terminal
    bounded: ClassVar[bool] = False

    def accepts(self, count: int) -> bool:
        raise NotImplementedError

    def is_satisfied(self, count: int) -> bool:
        raise NotImplementedError

    def is_terminal(self, count: int) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.describe()


class IntegerMatcher(TimesCalledMatcher):
    """Exactly ``times`` calls."""

    bounded: ClassVar[bool] = True
    times: int = Field(ge=0, strict=True)

    def __init__(self, times: int, **data):
        super().__init__(times=times, **data)

    def accepts(self, count: int) -> bool:
        return count <= self.times

    def is_satisfied(self, count: int) -> bool:
        return count == self.times

    def is_terminal(self, count: int) -> bool:
        return count >= self.times

    def describe(self) -> str:
        return f"{self.times} times"


class AtLeastMatcher(TimesCalledMatcher):
    times: int = Field(ge=0, strict=True)

    def __init__(self, times: int, **data):
        super().__init__(times=times, **data)

    def accepts(self, count: int) -> bool:
        return True

    def is_satisfied(self, count: int) -> bool:
        return count >= self.times

    def is_terminal(self, count: int) -> bool:
        return False

    def describe(self) -> str:
        return f"at least {self.times} times"


class AtMostMatcher(TimesCalledMatcher):
    bounded: ClassVar[bool] = True
    times: int = Field(ge=0, strict=True)

    def __init__(self, times: int, **data):
        super().__init__(times=times, **data)

    def accepts(self, count: int) -> bool:
        return count <= self.times

    def is_satisfied(self, count: int) -> bool:
        return count <= self.times

    def is_terminal(self, count: int) -> bool:
        return count >= self.times

    def describe(self) -> str:
        return f"at most {self.times} times"


class AnyTimesMatcher(TimesCalledMatcher):
    def accepts(self, count: int) -> bool:
        return True

    def is_satisfied(self, count: int) -> bool:
        return True

    def is_terminal(self, count: int) -> bool:
        return False

    def describe(self) -> str:
        return "any number of times"
