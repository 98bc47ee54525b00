"""
Effect Schema naming utilities.

Class names come straight from table names; the reserved word set is only
used to warn about names TypeScript will reject.
"""

import re

# TypeScript reserved words that cannot name a class or a binding
TYPESCRIPT_RESERVED_WORDS = {
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "import",
    "in",
    "instanceof",
    "new",
    "null",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
}

# Names already bound by the generated preamble
PREAMBLE_NAMES = {"Schema", "RecordId"}

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def format_class_name(table_name: str) -> str:
    """Capitalize the first character of a table name, keep the rest."""
    return table_name[:1].upper() + table_name[1:]


def is_valid_identifier(name: str, allow_reserved: bool = False) -> bool:
    """
    Check whether name can be used as a TypeScript identifier.

    Reserved words are fine as object property names; pass allow_reserved
    when checking field names.
    """
    if not _IDENTIFIER_RE.match(name):
        return False
    return allow_reserved or name not in TYPESCRIPT_RESERVED_WORDS


def class_name_conflicts(class_name: str) -> bool:
    """Whether a class name would shadow a preamble binding."""
    return class_name in PREAMBLE_NAMES
