import types

import pytest

from doublespace.core.exceptions.base import OriginalMethodMissingError
from doublespace.engine.space import Space
from doublespace.infrastructure.interception.method_interceptor import (
    MethodInterceptor,
    find_original_method,
    invoke_original,
)
from utils import SlottedSubject, Subject, SubjectFactory


@pytest.fixture
def interceptor():
    return MethodInterceptor()


@pytest.fixture
def intercepting_space(settings, interceptor):
    space = Space(settings=settings, interceptor=interceptor)
    yield space
    space.reset()


class TestFindOriginalMethod:
    def test_returns_bound_method(self, subject):
        original = find_original_method(subject, "foobar")
        assert original(1, 2) == [2, 1]

    def test_returns_none_when_missing(self, subject):
        assert find_original_method(subject, "does_not_exist") is None

    def test_does_not_trigger_getattr(self, method_missing_subject):
        assert find_original_method(method_missing_subject, "anything") is None


class TestInvokeOriginal:
    def test_calls_original(self, subject):
        assert invoke_original(subject, "foobar", subject.foobar, (1, 2)) == [2, 1]

    def test_falls_back_to_class_getattr(self, method_missing_subject):
        assert invoke_original(method_missing_subject, "ghost", None, (1,)) == "method_missing for ghost([1])"

    def test_falls_back_to_module_getattr(self):
        module = types.ModuleType("dynamic_module")
        module.__getattr__ = lambda name: (lambda *args: f"module {name}{args}")
        assert invoke_original(module, "ghost", None, (1,)) == "module ghost(1,)"

    def test_raises_without_fallback(self, subject):
        with pytest.raises(OriginalMethodMissingError, match="does_not_exist"):
            invoke_original(subject, "does_not_exist", None)


class TestInstallAndRestore:
    def test_instance_method_is_proxied_and_restored(self, intercepting_space, interceptor, subject):
        double = intercepting_space.double_for(subject, "foobar")
        intercepting_space.create_scenario(double).definition.with_any_args().returns("doubled")

        assert interceptor.is_installed(subject, "foobar")
        assert subject.foobar(1, 2) == "doubled"
        assert subject.foobar.__name__ == "foobar"

        interceptor.restore_all()
        assert subject.foobar(1, 2) == [2, 1]
        assert not interceptor.is_installed(subject, "foobar")

    def test_other_instances_are_untouched(self, intercepting_space, subject):
        double = intercepting_space.double_for(subject, "foobar")
        intercepting_space.create_scenario(double).definition.with_any_args().returns("doubled")
        assert Subject().foobar(1, 2) == [2, 1]

    def test_install_is_idempotent(self, interceptor, intercepting_space, subject):
        double = intercepting_space.double_for(subject, "foobar")
        interceptor.install(double)
        interceptor.restore_all()
        assert subject.foobar(1, 2) == [2, 1]

    def test_instance_attribute_is_restored(self, intercepting_space, subject):
        subject.foobar = lambda a, b: "instance level"
        double = intercepting_space.double_for(subject, "foobar")
        intercepting_space.create_scenario(double).definition.with_any_args().returns("doubled")
        assert subject.foobar(1, 2) == "doubled"
        intercepting_space.reset()
        assert subject.foobar(1, 2) == "instance level"

    def test_class_methods_are_proxied_and_restored(self, intercepting_space):
        repository = SubjectFactory.create_class_subject()
        find = intercepting_space.double_for(repository, "find")
        normalize = intercepting_space.double_for(repository, "normalize")
        intercepting_space.create_scenario(find).definition.with_args(1).returns("doubled")
        intercepting_space.create_scenario(normalize).definition.implemented_by_original_method().with_any_args()

        assert repository.find(1) == "doubled"
        assert repository().find(1) == "doubled"
        assert repository.normalize("  x ") == "x"

        intercepting_space.reset()
        assert repository.find(1) == "found 1"
        assert isinstance(vars(repository)["find"], classmethod)
        assert isinstance(vars(repository)["normalize"], staticmethod)

    def test_module_functions_are_proxied_and_restored(self, intercepting_space):
        module = types.ModuleType("doubled_module")
        module.compute = lambda value: value * 2
        double = intercepting_space.double_for(module, "compute")
        intercepting_space.create_scenario(double).definition.with_args(2).returns(100)
        assert module.compute(2) == 100
        intercepting_space.reset()
        assert module.compute(2) == 4

    def test_missing_method_proxy_is_removed(self, intercepting_space, method_missing_subject):
        double = intercepting_space.double_for(method_missing_subject, "ghost")
        intercepting_space.create_scenario(double).definition.with_any_args().returns("doubled")
        assert method_missing_subject.ghost() == "doubled"
        intercepting_space.reset()
        assert method_missing_subject.ghost(1) == "method_missing for ghost([1])"

    def test_restore_single_method(self, intercepting_space, interceptor, subject):
        intercepting_space.double_for(subject, "foobar")
        intercepting_space.double_for(subject, "greet")
        interceptor.restore(subject, "foobar")
        assert subject.foobar(1, 2) == [2, 1]
        assert interceptor.is_installed(subject, "greet")

    def test_restore_unknown_is_noop(self, interceptor, subject):
        interceptor.restore(subject, "foobar")
        assert subject.foobar(1, 2) == [2, 1]


class TestBlockKeyword:
    def test_block_keyword_is_removed_before_matching(self, intercepting_space, subject, recorder):
        double = intercepting_space.double_for(subject, "each")
        intercepting_space.create_scenario(double).definition.with_args([1, 2]).yields("item")
        subject.each([1, 2], block=recorder)
        assert recorder.received == [("item",)]

    def test_block_is_passed_back_to_original(self, intercepting_space, subject):
        double = intercepting_space.double_for(subject, "each")
        intercepting_space.create_scenario(double).definition.with_args([1, 2]).implemented_by_original_method()
        assert subject.each([1, 2], block=lambda item: item * 10) == [10, 20]

    def test_custom_block_keyword(self, settings):
        custom = settings.model_copy(update={"BLOCK_KEYWORD": "callback"})
        space = Space(settings=custom, interceptor=MethodInterceptor(block_keyword="callback"))
        try:
            target = Subject()
            double = space.double_for(target, "foobar")
            space.create_scenario(double).definition.with_args(1).yields("v").returns("done")
            received = []
            assert target.foobar(1, callback=received.append) == "done"
            assert received == ["v"]
        finally:
            space.reset()


class TestSlottedSubjects:
    def test_subject_without_dict_cannot_be_intercepted(self, intercepting_space):
        with pytest.raises(AttributeError):
            intercepting_space.double_for(SlottedSubject(), "fetch")
