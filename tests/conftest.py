import logging

import pytest

from doublespace.core.config import Settings
from doublespace.engine.space import Space
from doublespace.infrastructure.interception.method_interceptor import MethodInterceptor
from doublespace.services.dsl import DoubleSpaceDSL
from utils import MethodMissingSubject, Recorder, SubjectFactory

pytest_plugins = ["pytester"]


@pytest.fixture
def settings():
    """Settings with defaults, independent of the environment"""
    return Settings(_env_file=None)


@pytest.fixture
def strict_settings():
    return Settings(_env_file=None, STRICT_ARGUMENT_EXPECTATIONS=True)


@pytest.fixture
def bare_space(settings):
    """Space without interception: calls go through Space.dispatch only"""
    space = Space(settings=settings)
    yield space
    space.reset()


@pytest.fixture
def space(settings):
    """Space that installs proxies on subjects and restores them at teardown"""
    space = Space(settings=settings, interceptor=MethodInterceptor(block_keyword=settings.BLOCK_KEYWORD))
    yield space
    space.reset()


@pytest.fixture
def dsl(space):
    return DoubleSpaceDSL(space)


@pytest.fixture
def subject():
    return SubjectFactory.create_subject()


@pytest.fixture
def method_missing_subject():
    return MethodMissingSubject()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def capture_logs(caplog):
    """Capture logs for testing"""
    caplog.set_level(logging.DEBUG, logger="doublespace")
    yield caplog
