"""Tests for lookup path generation and type classification."""

import pytest

from rulebook.config import DEFAULT_LOOKUP_PATHS
from rulebook.errors import TemplateError
from rulebook.messages.lookup import LookupPathGenerator, classify


ARG_TYPES = ((range, "range"),)
VAL_TYPES = ((range, "range"), (str, "string"))


class TestClassify:
    def test_explicit_entry(self):
        assert classify(range, ARG_TYPES, "default") == "range"
        assert classify(str, VAL_TYPES, "default") == "string"

    def test_value_classified_by_type(self):
        assert classify(range(1, 3), ARG_TYPES, "default") == "range"
        assert classify("abc", VAL_TYPES, "default") == "string"

    def test_unknown_type_gets_default(self):
        assert classify(int, ARG_TYPES, "default") == "default"
        assert classify(3.5, VAL_TYPES, "other") == "other"

    def test_none_gets_default(self):
        assert classify(None, ARG_TYPES, "default") == "default"

    def test_subclass_matches(self):
        class Name(str):
            pass

        assert classify(Name, VAL_TYPES, "default") == "string"

    def test_first_match_wins(self):
        table = ((bool, "flag"), (int, "number"))
        assert classify(True, table, "default") == "flag"
        assert classify(7, table, "default") == "number"


class TestLookupPathGenerator:
    @pytest.fixture
    def tokens(self):
        return {
            "root": "errors",
            "predicate": "gte",
            "rule": "age",
            "arg_type": "default",
            "val_type": "default",
            "message_type": "failure",
        }

    def test_default_templates_in_order(self, tokens):
        paths = LookupPathGenerator(DEFAULT_LOOKUP_PATHS).generate(tokens)

        assert paths == [
            "errors.rules.age.gte.arg.default",
            "errors.rules.age.gte",
            "errors.gte.failure",
            "errors.gte.value.age.arg.default",
            "errors.gte.value.age",
            "errors.gte.value.default.arg.default",
            "errors.gte.value.default",
            "errors.gte.arg.default",
            "errors.gte",
        ]

    def test_keeps_configuration_order(self, tokens):
        generator = LookupPathGenerator(("%{root}.%{predicate}", "%{root}.rules.%{rule}"))
        assert generator.generate(tokens) == ["errors.gte", "errors.rules.age"]

    def test_duplicates_kept(self, tokens):
        generator = LookupPathGenerator(("%{root}.%{predicate}", "%{root}.%{rule}"))
        tokens["rule"] = "gte"
        assert generator.generate(tokens) == ["errors.gte", "errors.gte"]

    def test_missing_token_fails_fast(self, tokens):
        generator = LookupPathGenerator(("%{root}.%{predicate}", "%{root}.%{unknown}"))
        with pytest.raises(TemplateError):
            generator.generate(tokens)
