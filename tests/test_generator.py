"""Tests for class and document generation."""

import pytest

from surql_codegen.core.config import GeneratorConfig
from surql_codegen.core.generator import GeneratorError, generate_code
from surql_codegen.core.schema import FieldDefinition, Reference, TableDefinition, load_table_definitions
from surql_codegen.languages.effect import (
    EffectGenerator,
    emit_table_class,
    generate_schema_document,
)

USER_CLASS = """export class User extends Schema.Class<User>("user")({
  id: recordId("user").annotations({ description: 'Unique identifier' }),
  username: Schema.String,
  email: Schema.String,
  age: Schema.Number.pipe(Schema.int())
}) {}"""

PREAMBLE_HEAD = 'import { Schema } from "effect";'


class TestEmitTableClass:
    """Single table class emission."""

    def test_user_table(self, user_table):
        assert emit_table_class(user_table) == USER_CLASS

    def test_declared_id_is_not_synthesized(self):
        table = TableDefinition(
            name="account",
            fields=[
                FieldDefinition(name="name", type="string"),
                FieldDefinition(name="id", type="string"),
                FieldDefinition(name="balance", type="float"),
            ],
        )
        code = emit_table_class(table)

        assert "Unique identifier" not in code
        assert code.count("id:") == 1
        lines = code.split("\n")[1:-1]
        assert lines == [
            "  name: Schema.String,",
            "  id: Schema.String,",
            "  balance: Schema.Number",
        ]

    def test_synthesized_id_comes_first(self, user_table):
        lines = emit_table_class(user_table).split("\n")
        assert lines[1].startswith('  id: recordId("user")')

    def test_table_without_fields_gets_only_id(self):
        code = emit_table_class(TableDefinition(name="empty"))
        assert code == (
            'export class Empty extends Schema.Class<Empty>("empty")({\n'
            "  id: recordId(\"empty\").annotations({ description: 'Unique identifier' })\n"
            "}) {}"
        )

    def test_description_comment(self, message_table):
        code = emit_table_class(message_table)
        assert code.startswith(
            "/**\n * Messages received from Telegram\n */\n"
            'export class Telegram_message extends Schema.Class<Telegram_message>("telegram_message")({\n'
        )

    def test_description_comment_escapes_quotes(self):
        table = TableDefinition(name="note", description="The user's notes")
        assert " * The user\\'s notes\n" in emit_table_class(table)

    def test_multiline_description(self):
        table = TableDefinition(name="note", description="First line\nSecond line")
        assert emit_table_class(table).startswith("/**\n * First line\n * Second line\n */\n")

    def test_self_referential_table(self, message_table):
        code = emit_table_class(message_table)
        assert '  reply_to_message_id: Schema.optional(recordId("telegram_message"))' in code
        assert "  created_at: Schema.Date.annotations({ surrealDefault: 'time::now()' })" in code
        assert "  text: Schema.String.annotations({ description: 'Message body' })" in code

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_table_name_fails(self, name):
        with pytest.raises(GeneratorError):
            emit_table_class(TableDefinition(name=name))

    def test_non_string_table_name_fails(self):
        with pytest.raises(GeneratorError):
            emit_table_class(TableDefinition(name=None))

    def test_input_is_not_mutated(self, user_table):
        before = list(user_table.fields)
        emit_table_class(user_table)
        assert user_table.fields == before
        assert not user_table.has_field("id")


class TestGenerateSchemaDocument:
    """Full document assembly."""

    def test_empty_list_yields_preamble_only(self):
        code = generate_schema_document([])
        assert code.startswith(PREAMBLE_HEAD)
        assert code.endswith(") as unknown as Schema.Schema<RecordId<T>>;\n}\n")
        assert "export class" not in code

    def test_preamble_emitted_once(self, user_table, message_table):
        code = generate_schema_document([user_table, message_table])
        assert code.count(PREAMBLE_HEAD) == 1
        assert code.count("function recordId") == 1
        assert "Schema.pattern(/^[a-zA-Z0-9_-]+:[a-zA-Z0-9_-]+$/)," in code
        assert "Schema.brand(`RecordId<${tableName}>`)," in code

    def test_classes_in_input_order_separated_by_blank_lines(self, user_table, message_table):
        code = generate_schema_document([user_table, message_table])
        user_at = code.index("export class User ")
        message_at = code.index("export class Telegram_message ")
        assert user_at < message_at
        assert "}\n\n" + USER_CLASS + "\n\n/**" in code
        assert code.endswith("}) {}\n")

    def test_duplicate_names_are_all_emitted(self, user_table):
        code = generate_schema_document([user_table, user_table])
        assert code.count("export class User ") == 2

    def test_none_fails(self):
        with pytest.raises(GeneratorError):
            generate_schema_document(None)

    def test_deterministic(self, user_table, message_table):
        tables = [user_table, message_table]
        assert generate_schema_document(tables) == generate_schema_document(tables)

    def test_format_invariance(self):
        # Normalized output of TYPE ANY SCHEMALESS, TYPE NORMAL SCHEMAFULL and OVERWRITE
        variants = [
            [{"name": "user", "fields": [
                {"name": "username", "type": "string", "optional": False},
                {"name": "email", "type": "string", "optional": False},
                {"name": "age", "type": "int", "optional": False},
            ]}],
            [{"name": "user", "fields": [
                {"name": "username", "type": "string"},
                {"name": "email", "type": "string"},
                {"name": "age", "type": "int"},
            ]}],
            [{"name": "user", "description": None, "fields": [
                {"name": "username", "type": "string", "reference": None},
                {"name": "email", "type": "string", "defaultValue": None},
                {"name": "age", "type": "int"},
            ]}],
        ]
        outputs = {generate_schema_document(load_table_definitions(v)) for v in variants}
        assert len(outputs) == 1


class TestGeneratorConfig:
    """Configuration driven behaviour."""

    def test_indent_size(self, user_table):
        generator = EffectGenerator(GeneratorConfig(indent_size=4))
        assert "\n    username: Schema.String," in generator.generate_single_schema(user_table)

    def test_comments_disabled(self, message_table):
        generator = EffectGenerator(GeneratorConfig(add_comments=False))
        code = generator.generate_single_schema(message_table)
        assert code.startswith("export class Telegram_message")

    def test_schema_module(self):
        generator = EffectGenerator(GeneratorConfig(custom={"schema_module": "@effect/schema"}))
        assert generator.generate([]).startswith('import { Schema } from "@effect/schema";')

    def test_generator_has_no_state_between_calls(self, generator, user_table, message_table):
        first = generator.generate([user_table])
        generator.generate([message_table])
        assert generator.generate([user_table]) == first


class TestGenerateCode:
    """Error-handling wrapper and metadata."""

    def test_success(self, generator, user_table, message_table):
        result = generate_code(generator, [user_table, message_table])

        assert result.success
        assert result.code == generate_schema_document([user_table, message_table])
        assert result.metadata["language"] == "effect"
        assert result.metadata["file_extension"] == ".ts"
        assert result.metadata["table_count"] == 2
        assert result.metadata["field_count"] == 6
        assert result.metadata["self_references"] == 1
        assert result.metadata["fallback_types"] == 0
        assert result.metadata["has_datetime"] is True

    def test_none_is_an_error_result(self, generator):
        result = generate_code(generator, None)
        assert not result.success
        assert result.code == ""
        assert isinstance(result.exception, GeneratorError)

    def test_empty_name_is_an_error_result(self, generator):
        result = generate_code(generator, [TableDefinition(name="")])
        assert not result.success
        assert "Table name" in result.error_message

    def test_fallback_warnings(self, generator):
        table = TableDefinition(
            name="shape",
            fields=[
                FieldDefinition(name="area", type="geometry"),
                FieldDefinition(name="owner", type="record"),
                FieldDefinition(name="parent", type="record", reference=Reference("shape")),
            ],
        )
        result = generate_code(generator, [table])

        assert result.success
        assert "Unknown type 'geometry' in shape.area" in result.warnings
        assert "Relational field shape.owner has no reference table" in result.warnings
        assert result.metadata["fallback_types"] == 2
        assert "  area: Schema.String" in result.code

    def test_identifier_warnings(self, generator):
        table = TableDefinition(
            name="order-item",
            fields=[FieldDefinition(name="unit price", type="float")],
        )
        result = generate_code(generator, [table])

        assert result.success
        assert any("Order-item" in w for w in result.warnings)
        assert any("order-item.unit price" in w for w in result.warnings)

    def test_empty_table_warning(self, generator):
        result = generate_code(generator, [TableDefinition(name="empty")])
        assert "Table 'empty' declares no fields" in result.warnings

    def test_config_warnings_are_reported(self, user_table):
        generator = EffectGenerator(GeneratorConfig(custom={"schema_module": ""}))
        result = generate_code(generator, [user_table])

        assert result.success
        assert "Invalid schema_module: ''" in result.warnings

    def test_crlf_line_endings(self, user_table):
        generator = EffectGenerator(GeneratorConfig(line_ending="\r\n"))
        result = generate_code(generator, [user_table])

        assert "\r\n" in result.code
        assert result.code.replace("\r\n", "\n") == generator.generate([user_table])
