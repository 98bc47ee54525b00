"""Shared fixtures for code generation tests."""

import pytest

from surql_codegen.core.schema import FieldDefinition, Reference, TableDefinition
from surql_codegen.languages.effect import EffectGenerator


@pytest.fixture(name="user_table")
def create_user_table() -> TableDefinition:
    """The user table from the schema format fixtures."""
    return TableDefinition(
        name="user",
        fields=[
            FieldDefinition(name="username", type="string"),
            FieldDefinition(name="email", type="string"),
            FieldDefinition(name="age", type="int"),
        ],
    )


@pytest.fixture(name="message_table")
def create_message_table() -> TableDefinition:
    """A self-referential message table."""
    return TableDefinition(
        name="telegram_message",
        description="Messages received from Telegram",
        fields=[
            FieldDefinition(name="text", type="string", description="Message body"),
            FieldDefinition(
                name="reply_to_message_id",
                type="record",
                optional=True,
                reference=Reference(table="telegram_message"),
            ),
            FieldDefinition(
                name="created_at",
                type="datetime",
                default_value="time::now()",
            ),
        ],
    )


@pytest.fixture(name="generator")
def create_generator() -> EffectGenerator:
    """Generator with default settings."""
    return EffectGenerator()
