"""Abstract base dialect with capability flags and default SQL compilation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from resultboard.ast.nodes import (
    Between,
    BinaryOp,
    Cast,
    ColumnRef,
    Expr,
    From,
    FunctionCall,
    InList,
    IsNull,
    Literal,
    OrderByItem,
    RawSQL,
    Select,
)


@dataclass
class DialectCapabilities:
    """Flags indicating what SQL features a dialect supports."""

    backslash_escapes: bool = False  # backslash is an escape in string literals


class Dialect(ABC):
    """Abstract base for all SQL dialects.

    Provides default SQL compilation; dialects override specific methods.
    Every method taking ``params`` renders literals as ``%(pN)s``
    placeholders collected into that dict when it is not ``None``, and as
    escaped inline literals otherwise.
    """

    # Other names accepted for this dialect by the registry.
    aliases: tuple[str, ...] = ()

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def capabilities(self) -> DialectCapabilities: ...

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Quote an identifier per dialect rules."""

    @abstractmethod
    def render_parse_date(self, column: Expr) -> Expr:
        """Parse a ``DD-MM-YYYY`` text column into a DATE."""

    def escape_string(self, value: str) -> str:
        """Escape a string for use inside single quotes."""
        if self.capabilities.backslash_escapes:
            value = value.replace("\\", "\\\\")
        return value.replace("'", "''")

    def escape_like(self, value: str) -> str:
        """Escape ``%``, ``_`` and the backslash escape character in a LIKE pattern."""
        return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

    def render_date(self, iso_date: str) -> Expr:
        """A DATE value from an ISO ``YYYY-MM-DD`` string."""
        return Cast(expr=Literal.string(iso_date), type_name="DATE")

    def render_string_contains(self, column: Expr, pattern: Expr) -> Expr:
        """Default: column LIKE '%' || pattern || '%'."""
        return BinaryOp(
            left=column,
            op="LIKE",
            right=BinaryOp(
                left=BinaryOp(left=Literal.string("%"), op="||", right=pattern),
                op="||",
                right=Literal.string("%"),
            ),
        )

    def compile(self, ast: Select, params: dict[str, object] | None = None) -> str:
        """Render a complete SQL AST to a dialect-specific string."""
        return self.compile_select(ast, params)

    def compile_condition(self, condition: Expr) -> str:
        """Render a condition with escaped inline literals."""
        return self.compile_expr(condition)

    def compile_parameterized(self, condition: Expr) -> tuple[str, dict[str, object]]:
        """Render a condition with bound parameters instead of literals."""
        params: dict[str, object] = {}
        sql = self.compile_expr(condition, params)
        return sql, params

    def compile_select(self, node: Select, params: dict[str, object] | None = None) -> str:
        """Compile a SELECT statement."""
        parts: list[str] = []

        keyword = "SELECT DISTINCT" if node.distinct else "SELECT"
        if node.columns:
            cols = ", ".join(self.compile_expr(c, params) for c in node.columns)
            parts.append(f"{keyword} {cols}")
        else:
            parts.append(f"{keyword} *")

        if node.from_:
            parts.append(f"FROM {self.compile_from(node.from_)}")

        if node.where:
            parts.append(f"WHERE {self.compile_expr(node.where, params)}")

        if node.order_by:
            orders = ", ".join(self.compile_order_by(o, params) for o in node.order_by)
            parts.append(f"ORDER BY {orders}")

        return "\n".join(parts)

    def compile_from(self, node: From) -> str:
        return self.quote_identifier(node.source)

    def compile_order_by(self, node: OrderByItem, params: dict[str, object] | None = None) -> str:
        return f"{self.compile_expr(node.expr, params)} ASC"

    def compile_literal(self, node: Literal, params: dict[str, object] | None = None) -> str:
        match node:
            case Literal(value=None):
                return "NULL"
            case Literal(value=v) if params is not None:
                key = f"p{len(params)}"
                params[key] = v
                return f"%({key})s"
            case Literal(value=v) if isinstance(v, str):
                return f"'{self.escape_string(v)}'"
            case Literal(value=v):
                return str(v)
        raise ValueError(f"Unsupported literal: {node!r}")

    def compile_expr(self, expr: Expr, params: dict[str, object] | None = None) -> str:
        """Compile an expression node to SQL string."""
        match expr:
            case Literal():
                return self.compile_literal(expr, params)
            case ColumnRef(name=name):
                return self.quote_identifier(name)
            case FunctionCall(name=fname, args=args):
                args_sql = ", ".join(self.compile_expr(a, params) for a in args)
                return f"{fname}({args_sql})"
            case BinaryOp(left=left, op=op, right=right):
                return (
                    f"({self.compile_expr(left, params)} {op} "
                    f"{self.compile_expr(right, params)})"
                )
            case IsNull(expr=inner, negated=False):
                return f"({self.compile_expr(inner, params)} IS NULL)"
            case IsNull(expr=inner, negated=True):
                return f"({self.compile_expr(inner, params)} IS NOT NULL)"
            case InList(expr=inner, values=values):
                vals = ", ".join(self.compile_expr(v, params) for v in values)
                return f"({self.compile_expr(inner, params)} IN ({vals}))"
            case Cast(expr=inner, type_name=type_name):
                return f"CAST({self.compile_expr(inner, params)} AS {type_name})"
            case RawSQL(sql=sql):
                return sql
            case Between(expr=inner, low=low, high=high):
                return (
                    f"({self.compile_expr(inner, params)} BETWEEN "
                    f"{self.compile_expr(low, params)} AND {self.compile_expr(high, params)})"
                )
            case _:
                raise ValueError(f"Unknown AST node type: {type(expr).__name__}")
