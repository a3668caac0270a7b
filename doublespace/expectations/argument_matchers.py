"""
Wildcard values that can be placed inside an exact argument list.

    stub(subject).fetch(anything(), is_a(int))

A matcher is compared with ``is_satisfied_by`` instead of ``==``, so a call
that only matches through a matcher ranks as a wildcard match.
"""
import numbers
import re


class ArgumentMatcher(object):
    def is_satisfied_by(self, parameter):
        raise NotImplementedError

    def _key(self):
        return ()

    def __eq__(self, other):
        if not isinstance(other, ArgumentMatcher):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self), self._key()))

    def __repr__(self):
        return str(self)


class Anything(ArgumentMatcher):
    def is_satisfied_by(self, parameter):
        return True

    def __str__(self):
        return "anything"


class IsA(ArgumentMatcher):
    def __init__(self, cls):
        self.cls = cls

    def is_satisfied_by(self, parameter):
        return isinstance(parameter, self.cls)

    def _key(self):
        return (self.cls,)

    def __str__(self):
        return f"is_a({getattr(self.cls, '__name__', self.cls)})"


class Numeric(ArgumentMatcher):
    def is_satisfied_by(self, parameter):
        return isinstance(parameter, numbers.Number) and not isinstance(parameter, bool)

    def __str__(self):
        return "numeric"


class Boolean(ArgumentMatcher):
    def is_satisfied_by(self, parameter):
        return isinstance(parameter, bool)

    def __str__(self):
        return "boolean"


class DuckType(ArgumentMatcher):
    """Matches any value that has every one of the named attributes."""

    def __init__(self, *attribute_names):
        self.attribute_names = attribute_names

    def is_satisfied_by(self, parameter):
        return all(hasattr(parameter, name) for name in self.attribute_names)

    def _key(self):
        return self.attribute_names

    def __str__(self):
        return "duck_type(%s)" % ", ".join(self.attribute_names)


class Satisfy(ArgumentMatcher):
    def __init__(self, predicate):
        self.predicate = predicate

    def is_satisfied_by(self, parameter):
        return bool(self.predicate(parameter))

    def _key(self):
        return (self.predicate,)

    def __str__(self):
        return f"satisfy({getattr(self.predicate, '__name__', self.predicate)})"


class Regex(ArgumentMatcher):
    def __init__(self, pattern, flags=0):
        self.regex = re.compile(pattern, flags)

    def is_satisfied_by(self, parameter):
        return isinstance(parameter, str) and self.regex.search(parameter) is not None

    def _key(self):
        return (self.regex.pattern, self.regex.flags)

    def __str__(self):
        return f"regex({self.regex.pattern!r})"


def anything():
    return Anything()


def is_a(cls):
    return IsA(cls)


def numeric():
    return Numeric()


def boolean():
    return Boolean()


def duck_type(*attribute_names):
    return DuckType(*attribute_names)


def satisfy(predicate):
    return Satisfy(predicate)


def regex(pattern, flags=0):
    return Regex(pattern, flags)
