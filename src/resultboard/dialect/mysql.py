"""MySQL / TiDB dialect implementation."""

from __future__ import annotations

from resultboard.ast.nodes import BinaryOp, Expr, FunctionCall, Literal
from resultboard.dialect.base import Dialect, DialectCapabilities
from resultboard.dialect.registry import DialectRegistry


@DialectRegistry.register
class MySQLDialect(Dialect):
    """MySQL dialect — backtick identifiers, backslash escapes, CONCAT, STR_TO_DATE."""

    aliases = ("mariadb", "tidb")

    @property
    def name(self) -> str:
        return "mysql"

    @property
    def capabilities(self) -> DialectCapabilities:
        return DialectCapabilities(backslash_escapes=True)

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace("`", "``")
        return f"`{escaped}`"

    def render_parse_date(self, column: Expr) -> Expr:
        return FunctionCall(name="STR_TO_DATE", args=[column, Literal.string("%d-%m-%Y")])

    def render_string_contains(self, column: Expr, pattern: Expr) -> Expr:
        return BinaryOp(
            left=column,
            op="LIKE",
            right=FunctionCall(
                name="CONCAT",
                args=[Literal.string("%"), pattern, Literal.string("%")],
            ),
        )
