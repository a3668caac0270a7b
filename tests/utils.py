"""
Test utilities: subjects whose methods get doubled in the test suite
"""
from typing import Any, Dict, List


class Recorder:
    """Continuation that remembers every value it was yielded"""

    def __init__(self, result: Any = None):
        self.received: List[tuple] = []
        self.result = result

    def __call__(self, *values):
        self.received.append(values)
        return self.result


class Subject:
    """Plain subject with a real method"""

    def foobar(self, a, b):
        return [b, a]

    def greet(self, name, punctuation="!"):
        return f"hello {name}{punctuation}"

    def each(self, items, block=None):
        return [block(item) for item in items]


class MethodMissingSubject:
    """Subject whose undefined methods are answered by __getattr__"""

    def __getattr__(self, method_name):
        def handler(*args, **kwargs):
            return f"method_missing for {method_name}({list(args)!r})"

        return handler


class SlottedSubject:
    __slots__ = ("value",)

    def fetch(self):
        return "fetched"


class Point:
    """Domain object with its own equality"""

    def __init__(self, x, y):
        self.x = x
        self.y = y

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return (self.x, self.y) == (other.x, other.y)

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Point({self.x}, {self.y})"


class SubjectFactory:
    """Factory for creating test subjects"""

    @staticmethod
    def create_subject() -> Subject:
        return Subject()

    @staticmethod
    def create_class_subject():
        class Repository:
            calls: Dict[str, int] = {}

            @classmethod
            def find(cls, key):
                return f"found {key}"

            @staticmethod
            def normalize(value):
                return value.strip()

        return Repository
