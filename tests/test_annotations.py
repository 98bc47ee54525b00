"""Tests for annotation clauses."""

import ast

import pytest

from surql_codegen.core.schema import FieldDefinition
from surql_codegen.languages.effect.annotations import (
    build_annotations,
    default_entry,
    escape_single_quotes,
    is_native_literal,
)


def test_no_metadata_gives_empty_clause():
    assert build_annotations(FieldDefinition(name="name", type="string")) == ""


def test_empty_description_and_default_are_ignored():
    field = FieldDefinition(name="name", type="string", description="", default_value="")
    assert build_annotations(field) == ""


def test_description_only():
    field = FieldDefinition(name="name", type="string", description="Display name")
    assert build_annotations(field) == ".annotations({ description: 'Display name' })"


def test_description_precedes_default():
    field = FieldDefinition(
        name="active", type="bool", description="Is active", default_value="true"
    )
    assert (
        build_annotations(field)
        == ".annotations({ description: 'Is active', default: true })"
    )


class TestDefaultFormatting:
    """Type-aware default value formatting."""

    def test_plain_string_is_quoted(self):
        field = FieldDefinition(name="status", type="string", default_value="now")
        assert build_annotations(field) == ".annotations({ default: 'now' })"

    def test_datetime_function_becomes_surreal_default(self):
        field = FieldDefinition(name="created", type="datetime", default_value="time::now()")
        clause = build_annotations(field)
        assert clause == ".annotations({ surrealDefault: 'time::now()' })"
        assert "default:" not in clause.replace("surrealDefault:", "")

    def test_datetime_tag_is_case_insensitive(self):
        field = FieldDefinition(name="created", type="DateTime", default_value="time::now()")
        assert default_entry(field) == "surrealDefault: 'time::now()'"

    def test_function_on_other_types_is_quoted_default(self):
        field = FieldDefinition(name="token", type="string", default_value="rand::uuid()")
        assert default_entry(field) == "default: 'rand::uuid()'"

    def test_boolean_is_unquoted(self):
        field = FieldDefinition(name="active", type="bool", default_value="true")
        assert default_entry(field) == "default: true"

    @pytest.mark.parametrize("value", ["0", "42", "-7", "3.14", "-0.5"])
    def test_numbers_are_unquoted(self, value):
        field = FieldDefinition(name="score", type="float", default_value=value)
        assert default_entry(field) == f"default: {value}"

    @pytest.mark.parametrize("value", ["1e5", "1.", ".5", "+3", "0x10"])
    def test_non_decimal_numbers_are_quoted(self, value):
        field = FieldDefinition(name="score", type="string", default_value=value)
        assert default_entry(field) == f"default: '{value}'"

    @pytest.mark.parametrize("value", ["[]", "[1, 2]", "{}", "{ a: 1 }", "'draft'", '"draft"'])
    def test_native_literals_are_kept(self, value):
        field = FieldDefinition(name="value", type="object", default_value=value)
        assert default_entry(field) == f"default: {value}"

    def test_true_like_strings_are_quoted(self):
        field = FieldDefinition(name="flag", type="string", default_value="True")
        assert default_entry(field) == "default: 'True'"

    def test_is_native_literal(self):
        assert is_native_literal("false")
        assert not is_native_literal("none")


class TestDescriptionEscaping:
    """Single quote escaping in descriptions."""

    def test_single_quote_is_escaped(self):
        field = FieldDefinition(name="name", type="string", description="User's name")
        assert build_annotations(field) == ".annotations({ description: 'User\\'s name' })"

    def test_escaped_literal_round_trips(self):
        description = "It's the owner's 'primary' key"
        field = FieldDefinition(name="key", type="string", description=description)
        literal = build_annotations(field)[len(".annotations({ description: "):-len(" })")]
        assert ast.literal_eval(literal) == description

    def test_pre_escaped_quote_is_not_escaped_twice(self):
        assert escape_single_quotes("User\\'s name") == "User\\'s name"
        assert escape_single_quotes("User\\'s name") == escape_single_quotes("User's name")

    def test_pre_escaped_input_loses_its_backslash_on_round_trip(self):
        escaped = escape_single_quotes("a\\'b")
        assert ast.literal_eval(f"'{escaped}'") == "a'b"

    def test_text_without_quotes_is_unchanged(self):
        assert escape_single_quotes("plain text") == "plain text"
