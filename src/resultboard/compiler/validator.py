"""Post-generation SQL validation using sqlglot."""

from __future__ import annotations

import sqlglot
from sqlglot.errors import SqlglotError

# Map resultboard dialect names to sqlglot dialect identifiers.
_DIALECT_MAP: dict[str, str] = {
    "mysql": "mysql",
    "postgres": "postgres",
}


def validate_sql(sql: str, dialect_name: str) -> list[str]:
    """Parse SQL with sqlglot for the given dialect.

    Returns a list of error messages (empty if valid).
    Validation is non-blocking — callers should treat errors as warnings.
    """
    sg_dialect = _DIALECT_MAP.get(dialect_name)
    if sg_dialect is None:
        return [f"Unknown dialect '{dialect_name}' — skipping SQL validation"]

    errors: list[str] = []
    try:
        sqlglot.transpile(sql, read=sg_dialect)
    except SqlglotError as exc:
        errors.append(str(exc))
    return errors


def validate_condition(condition_sql: str, dialect_name: str, table: str = "t") -> list[str]:
    """Validate a bare WHERE condition by wrapping it in a SELECT."""
    return validate_sql(f"SELECT * FROM {table} WHERE {condition_sql}", dialect_name)
