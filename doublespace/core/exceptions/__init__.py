from doublespace.core.exceptions.base import (
    ConfigurationError,
    DoubleSpaceError,
    OrderingViolationError,
    OriginalMethodMissingError,
    ScenarioNotFoundError,
    TimesCalledError,
    VerificationError,
)

__all__ = [
    "ConfigurationError",
    "DoubleSpaceError",
    "OrderingViolationError",
    "OriginalMethodMissingError",
    "ScenarioNotFoundError",
    "TimesCalledError",
    "VerificationError",
]
