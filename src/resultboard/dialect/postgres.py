"""PostgreSQL dialect implementation."""

from __future__ import annotations

from resultboard.ast.nodes import BinaryOp, Expr, FunctionCall, Literal
from resultboard.dialect.base import Dialect, DialectCapabilities
from resultboard.dialect.registry import DialectRegistry


@DialectRegistry.register
class PostgresDialect(Dialect):
    """PostgreSQL dialect — double-quoted identifiers, TO_DATE, ILIKE."""

    aliases = ("postgresql", "pg")

    @property
    def name(self) -> str:
        return "postgres"

    @property
    def capabilities(self) -> DialectCapabilities:
        return DialectCapabilities(backslash_escapes=False)

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'

    def render_parse_date(self, column: Expr) -> Expr:
        return FunctionCall(name="TO_DATE", args=[column, Literal.string("DD-MM-YYYY")])

    def render_string_contains(self, column: Expr, pattern: Expr) -> Expr:
        return BinaryOp(
            left=column,
            op="ILIKE",
            right=BinaryOp(
                left=BinaryOp(left=Literal.string("%"), op="||", right=pattern),
                op="||",
                right=Literal.string("%"),
            ),
        )
