from typing import Any, Dict, Mapping, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from doublespace.expectations.argument_matchers import ArgumentMatcher


def _equal(expected: Any, actual: Any) -> bool:
    return bool(expected == actual)


def _satisfies(expected: Any, actual: Any) -> bool:
    """Element comparison that lets matchers nested in lists, tuples and dicts decide."""
    if isinstance(expected, ArgumentMatcher):
        return expected.is_satisfied_by(actual)
    if isinstance(expected, (list, tuple)) and type(expected) is type(actual):
        if len(expected) != len(actual):
            return False
        return all(_satisfies(e, a) for e, a in zip(expected, actual))
    if isinstance(expected, dict) and isinstance(actual, dict):
        if expected.keys() != actual.keys():
            return False
        return all(_satisfies(value, actual[key]) for key, value in expected.items())
    return _equal(expected, actual)


def _compare(expected_args, expected_kwargs, args, kwargs, element_compare) -> bool:
    if len(args) != len(expected_args) or set(kwargs) != set(expected_kwargs):
        return False
    for expected, actual in zip(expected_args, args):
        if not element_compare(expected, actual):
            return False
    for key, expected in expected_kwargs.items():
        if not element_compare(expected, kwargs[key]):
            return False
    return True


class ArgumentExpectation(BaseModel):
    model_config = ConfigDict(frozen=True)

    def exact_match(self, args: Sequence = (), kwargs: Mapping = None) -> bool:
        raise NotImplementedError

    def wildcard_match(self, args: Sequence = (), kwargs: Mapping = None) -> bool:
        raise NotImplementedError

    def matches(self, args: Sequence = (), kwargs: Mapping = None) -> bool:
        return self.exact_match(args, kwargs) or self.wildcard_match(args, kwargs)

    @property
    def expected_arguments(self) -> Tuple[Any, ...]:
        return ()

    def describe(self, method_name: str) -> str:
        raise NotImplementedError


class ArgumentEqualityExpectation(ArgumentExpectation):
    """Matches calls whose positional and keyword arguments equal the expected ones.

    Elements are compared with the expected value's own ``__eq__``. Matchers
    from :mod:`doublespace.expectations.argument_matchers` only take part in
    wildcard matching.
    """

    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = Field(default_factory=dict)

    def exact_match(self, args: Sequence = (), kwargs: Mapping = None) -> bool:
        return _compare(self.args, self.kwargs, tuple(args), dict(kwargs or {}), _equal)

    def wildcard_match(self, args: Sequence = (), kwargs: Mapping = None) -> bool:
        args, kwargs = tuple(args), dict(kwargs or {})
        if _compare(self.args, self.kwargs, args, kwargs, _equal):
            return False
        return _compare(self.args, self.kwargs, args, kwargs, _satisfies)

    @property
    def expected_arguments(self) -> Tuple[Any, ...]:
        return self.args

    def describe(self, method_name: str) -> str:
        return format_call(method_name, self.args, self.kwargs)


class AnyArgumentExpectation(ArgumentExpectation):
    def exact_match(self, args: Sequence = (), kwargs: Mapping = None) -> bool:
        return False

    def wildcard_match(self, args: Sequence = (), kwargs: Mapping = None) -> bool:
        return True

    def describe(self, method_name: str) -> str:
        return f"{method_name}(<any arguments>)"


def no_argument_expectation() -> ArgumentEqualityExpectation:
    return ArgumentEqualityExpectation()


def _arg_to_str(arg: Any) -> str:
    if isinstance(arg, ArgumentMatcher):
        return str(arg)
    return repr(arg)


def format_call(method_name: str, args: Sequence = (), kwargs: Mapping = None) -> str:
    arg_vec = [_arg_to_str(arg) for arg in args]
    for key, value in (kwargs or {}).items():
        arg_vec.append(f"{key}={_arg_to_str(value)}")
    return "%s(%s)" % (method_name, ", ".join(arg_vec))
