import logging

from dependency_injector import containers, providers

from doublespace.core.config import Settings
from doublespace.engine.space import Space
from doublespace.infrastructure.interception.method_interceptor import MethodInterceptor
from doublespace.services.dsl import DoubleSpaceDSL
from doublespace.services.scenario_creator import ScenarioCreator


def init_logging(level: str):
    """Apply the configured level to the package logger for the container's lifetime"""
    package_logger = logging.getLogger("doublespace")
    previous_level = package_logger.level
    package_logger.setLevel(level)
    yield package_logger
    package_logger.setLevel(previous_level)


class Container(containers.DeclarativeContainer):
    """Dependency injection container, one per test"""

    # Configuration
    settings = providers.Singleton(Settings)

    log_config = providers.Resource(
        init_logging,
        level=settings.provided.LOG_LEVEL.value,
    )

    # Interception
    interceptor = providers.Singleton(
        MethodInterceptor,
        block_keyword=settings.provided.BLOCK_KEYWORD,
    )

    # Engine
    space = providers.Singleton(
        Space,
        settings=settings,
        interceptor=interceptor,
    )

    # Declaration
    scenario_creator = providers.Factory(
        ScenarioCreator,
        space=space,
    )

    dsl = providers.Singleton(
        DoubleSpaceDSL,
        space=space,
        creator_factory=scenario_creator.provider,
    )
