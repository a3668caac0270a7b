from doublespace.expectations.argument_expectations import (
    AnyArgumentExpectation,
    ArgumentEqualityExpectation,
    format_call,
    no_argument_expectation,
)
from doublespace.expectations.argument_matchers import anything, is_a
from utils import Point


class TestArgumentEqualityExpectation:
    def test_exact_match_requires_same_values_in_order(self):
        expectation = ArgumentEqualityExpectation(args=(1, 2, 3))
        assert expectation.exact_match((1, 2, 3))
        assert not expectation.exact_match((1, 2))
        assert not expectation.exact_match((3, 2, 1))
        assert not expectation.exact_match(("does not match",))

    def test_keyword_arguments_must_match(self):
        expectation = ArgumentEqualityExpectation(args=(1,), kwargs={"key": "value"})
        assert expectation.matches((1,), {"key": "value"})
        assert not expectation.matches((1,), {})
        assert not expectation.matches((1,), {"key": "other"})
        assert not expectation.matches((1,), {"key": "value", "extra": 1})

    def test_delegates_to_element_equality(self):
        expectation = ArgumentEqualityExpectation(args=(Point(1, 2),))
        assert expectation.exact_match((Point(1, 2),))
        assert not expectation.exact_match((Point(2, 1),))

    def test_exact_match_is_not_wildcard_match(self):
        expectation = ArgumentEqualityExpectation(args=(1, 2))
        assert expectation.exact_match((1, 2))
        assert not expectation.wildcard_match((1, 2))

    def test_matchers_rank_as_wildcard(self):
        expectation = ArgumentEqualityExpectation(args=(anything(), is_a(int)))
        assert not expectation.exact_match(("x", 1))
        assert expectation.wildcard_match(("x", 1))
        assert expectation.matches(("x", 1))
        assert not expectation.matches(("x", "y"))

    def test_matchers_nested_in_collections(self):
        expectation = ArgumentEqualityExpectation(args=([anything(), 2],), kwargs={"opts": {"depth": is_a(int)}})
        assert expectation.matches(([1, 2],), {"opts": {"depth": 3}})
        assert not expectation.matches(([1, 3],), {"opts": {"depth": 3}})
        assert not expectation.matches(([1, 2],), {"opts": {"depth": "3"}})

    def test_structural_equality(self):
        assert ArgumentEqualityExpectation(args=(1, 2)) == ArgumentEqualityExpectation(args=(1, 2))
        assert ArgumentEqualityExpectation(args=(1, 2)) != ArgumentEqualityExpectation(args=(2, 1))
        assert ArgumentEqualityExpectation(args=(1,)) != AnyArgumentExpectation()

    def test_expected_arguments(self):
        assert ArgumentEqualityExpectation(args=(1, 2)).expected_arguments == (1, 2)


class TestNoArgumentExpectation:
    def test_matches_only_empty_calls(self):
        expectation = no_argument_expectation()
        assert expectation.matches(())
        assert expectation.exact_match((), {})
        assert not expectation.matches((1,))
        assert not expectation.matches((), {"a": 1})

    def test_is_degenerate_equality_expectation(self):
        assert no_argument_expectation() == ArgumentEqualityExpectation()


class TestAnyArgumentExpectation:
    def test_matches_anything_as_wildcard(self):
        expectation = AnyArgumentExpectation()
        for args in [(), (1,), (1, 2, 3), ("does not match",)]:
            assert expectation.wildcard_match(args)
            assert expectation.matches(args)
            assert not expectation.exact_match(args)
        assert expectation.matches((), {"key": object()})

    def test_has_no_expected_arguments(self):
        assert AnyArgumentExpectation().expected_arguments == ()


class TestFormatCall:
    def test_formats_positional_and_keyword_arguments(self):
        assert format_call("foobar", (1, "a"), {"key": None}) == "foobar(1, 'a', key=None)"

    def test_formats_matchers_by_name(self):
        assert format_call("foobar", (anything(),)) == "foobar(anything)"

    def test_describe(self):
        assert ArgumentEqualityExpectation(args=(1,)).describe("foobar") == "foobar(1)"
        assert AnyArgumentExpectation().describe("foobar") == "foobar(<any arguments>)"
