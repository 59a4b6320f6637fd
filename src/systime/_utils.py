"""Identifier validation helpers."""

from __future__ import annotations

import re

from systime._errors import InvalidIdentifierError

MAX_POSTGRESQL_IDENTIFIER_LENGTH = 63

IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

RESERVED_SQL_KEYWORDS: set[str] = {
    "all", "alter", "and", "any", "array", "as", "asc", "between",
    "by", "case", "cast", "check", "column", "constraint", "create",
    "cross", "current", "current_date", "current_time", "current_timestamp",
    "current_user", "default", "delete", "desc", "distinct", "drop",
    "else", "end", "except", "exists", "false", "for", "foreign",
    "from", "full", "grant", "group", "having", "in", "index", "inner",
    "insert", "intersect", "into", "is", "join", "left", "like", "limit",
    "not", "null", "offset", "on", "or", "order", "outer", "primary",
    "references", "right", "select", "session_user", "set", "some",
    "table", "then", "to", "true", "union", "unique", "update", "user",
    "using", "values", "when", "where", "with",
}


def validate_table_name(name: str) -> None:
    """Validate a table name before it is interpolated into SQL."""
    if not name:
        raise InvalidIdentifierError(
            "table name cannot be empty",
            "empty table name provided",
        )
    if len(name) > MAX_POSTGRESQL_IDENTIFIER_LENGTH:
        raise InvalidIdentifierError(
            "table name too long",
            f"table name '{name}' exceeds {MAX_POSTGRESQL_IDENTIFIER_LENGTH} characters",
        )
    if not IDENTIFIER_RE.match(name):
        raise InvalidIdentifierError(
            "invalid table name format",
            f"table name '{name}' contains invalid characters",
        )
    if name.lower() in RESERVED_SQL_KEYWORDS:
        raise InvalidIdentifierError(
            "table name is a reserved SQL keyword",
            f"table name '{name}' is a reserved SQL keyword",
        )
