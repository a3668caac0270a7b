"""
Facade handed to test code: every declaration starts a fresh
:class:`ScenarioCreator` bound to the same Space.
"""
from typing import Any, Callable, Optional

from doublespace.expectations import argument_matchers
from doublespace.services.scenario_creator import NO_SUBJECT, ScenarioCreator


class DoubleSpaceDSL:
    def __init__(self, space, creator_factory: Optional[Callable[[], ScenarioCreator]] = None):
        self.space = space
        self._creator_factory = creator_factory or (lambda: ScenarioCreator(space))

    def _creator(self) -> ScenarioCreator:
        return self._creator_factory()

    def mock(self, subject: Any = NO_SUBJECT, method_name: Optional[str] = None):
        return self._creator().mock(subject, method_name)

    def stub(self, subject: Any = NO_SUBJECT, method_name: Optional[str] = None):
        return self._creator().stub(subject, method_name)

    def probe(self, subject: Any = NO_SUBJECT, method_name: Optional[str] = None):
        # a bare probe is a mock that also runs the original method
        return self._creator().mock().probe(subject, method_name)

    def do_not_call(self, subject: Any = NO_SUBJECT, method_name: Optional[str] = None):
        return self._creator().do_not_call(subject, method_name)

    dont_call = do_not_call
    do_not_allow = do_not_call
    dont_allow = do_not_call

    def verify(self) -> None:
        self.space.verify()

    def reset(self) -> None:
        self.space.reset()

    # argument matchers
    anything = staticmethod(argument_matchers.anything)
    is_a = staticmethod(argument_matchers.is_a)
    numeric = staticmethod(argument_matchers.numeric)
    boolean = staticmethod(argument_matchers.boolean)
    duck_type = staticmethod(argument_matchers.duck_type)
    satisfy = staticmethod(argument_matchers.satisfy)
    regex = staticmethod(argument_matchers.regex)
