from doublespace.core.exceptions.base import (
    ConfigurationError,
    DoubleSpaceError,
    OrderingViolationError,
    OriginalMethodMissingError,
    ScenarioNotFoundError,
    TimesCalledError,
    VerificationError,
)
from doublespace.engine.double import Double
from doublespace.engine.scenario import Scenario, Strategy
from doublespace.engine.scenario_definition import ScenarioDefinition
from doublespace.engine.space import Space
from doublespace.expectations.argument_matchers import (
    anything,
    boolean,
    duck_type,
    is_a,
    numeric,
    regex,
    satisfy,
)
from doublespace.infrastructure.interception.method_interceptor import MethodInterceptor
from doublespace.services.dsl import DoubleSpaceDSL
from doublespace.services.scenario_creator import ScenarioCreator

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Double",
    "DoubleSpaceDSL",
    "DoubleSpaceError",
    "MethodInterceptor",
    "OrderingViolationError",
    "OriginalMethodMissingError",
    "Scenario",
    "ScenarioCreator",
    "ScenarioDefinition",
    "ScenarioNotFoundError",
    "Space",
    "Strategy",
    "TimesCalledError",
    "VerificationError",
    "anything",
    "boolean",
    "duck_type",
    "is_a",
    "numeric",
    "regex",
    "satisfy",
]
