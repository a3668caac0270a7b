"""
Custom exception classes for the doublespace engine.
"""
from typing import List, Optional


class DoubleSpaceError(Exception):
    """Base exception for all doublespace exceptions"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


class ConfigurationError(DoubleSpaceError):
    """Invalid scenario declaration"""
    pass


class ScenarioNotFoundError(DoubleSpaceError):
    """No declared scenario matches the call"""
    pass


class OrderingViolationError(DoubleSpaceError):
    """Ordered scenario invoked out of sequence"""
    pass


class OriginalMethodMissingError(DoubleSpaceError):
    """Subject has neither the original method nor a __getattr__ fallback"""
    pass


class TimesCalledError(DoubleSpaceError):
    """Scenario called a number of times its expectation does not allow"""

    def __init__(self, message: str, error_code: str = None, matcher=None, times_called: Optional[int] = None):
        super().__init__(message, error_code)
        self.matcher = matcher
        self.times_called = times_called

    @classmethod
    def for_count(cls, matcher, times_called: int, subject_description: str = None) -> "TimesCalledError":
        message = f"Called {times_called} times.\nExpected {matcher.describe()}."
        if subject_description:
            message = f"{subject_description}\n{message}"
        return cls(message, matcher=matcher, times_called=times_called)


class VerificationError(TimesCalledError):
    """One or more scenarios were not satisfied at verification time"""

    def __init__(self, failures: List[TimesCalledError]):
        message = "\n\n".join(failure.message for failure in failures)
        super().__init__(message)
        self.failures = failures
