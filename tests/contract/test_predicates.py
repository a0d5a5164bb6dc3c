"""Tests for the predicate registry."""

import re

import pytest

from rulebook.contract import predicates


class TestPredicates:
    def test_filled(self):
        assert predicates.check("filled", "x")
        assert predicates.check("filled", 0)
        assert not predicates.check("filled", "")
        assert not predicates.check("filled", None)
        assert not predicates.check("filled", [])

    def test_type_predicates(self):
        assert predicates.check("int", 3)
        assert not predicates.check("int", True)
        assert predicates.check("bool", False)
        assert predicates.check("str", "x")
        assert not predicates.check("dict", [])

    def test_comparisons(self):
        assert predicates.check("gte", 18, {"num": 18})
        assert not predicates.check("gt", 18, {"num": 18})
        assert predicates.check("lt", 1, {"num": 2})
        assert predicates.check("lte", 2, {"num": 2})

    def test_size(self):
        assert predicates.check("size", "abc", {"size": 3})
        assert predicates.check("size", "abc", {"size": range(2, 5)})
        assert not predicates.check("size", "a", {"size": range(2, 5)})
        assert predicates.check("min_size", [1, 2], {"num": 2})
        assert not predicates.check("max_size", [1, 2], {"num": 1})

    def test_incomparable_values_fail(self):
        assert not predicates.check("gte", "abc", {"num": 18})
        assert not predicates.check("lt", None, {"num": 1})
        assert not predicates.check("size", 5, {"size": range(1, 3)})
        assert not predicates.check("min_size", 5, {"num": 1})
        assert not predicates.check("max_size", None, {"num": 1})
        assert not predicates.check("included_in", [1], {"list": {1, 2}})

    def test_included_in_and_format(self):
        assert predicates.check("included_in", "a", {"list": ["a", "b"]})
        assert predicates.check("format", "abc123", {"regex": r"\d+"})
        assert not predicates.check("format", 123, {"regex": r"\d+"})

    def test_unknown(self):
        with pytest.raises(KeyError):
            predicates.get("nope")


class TestPredicateTokens:
    def test_range_argument(self):
        tokens = predicates.predicate_tokens("size", "a", {"size": range(2, 5)})

        assert tokens["size_left"] == 2
        assert tokens["size_right"] == 4
        assert tokens["arg_type"] is range
        assert tokens["val_type"] is str

    def test_list_argument(self):
        tokens = predicates.predicate_tokens("included_in", "c", {"list": ["a", "b"]})
        assert tokens["list"] == "a, b"

    def test_pattern_argument(self):
        tokens = predicates.predicate_tokens("format", "x", {"regex": re.compile(r"\d+")})
        assert tokens["regex"] == r"\d+"

    def test_no_arguments(self):
        tokens = predicates.predicate_tokens("filled", None)
        assert "arg_type" not in tokens
        assert tokens["val_type"] is type(None)
