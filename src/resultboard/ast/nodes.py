"""Immutable SQL AST nodes. All SQL is generated from these — never string concatenation."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Literal:
    """A literal value: string, number, or NULL."""

    value: str | int | float | None

    @classmethod
    def string(cls, v: str) -> Literal:
        return cls(value=v)


@dataclass(frozen=True)
class ColumnRef:
    """Reference to a report column."""

    name: str


@dataclass(frozen=True)
class FunctionCall:
    """SQL function call, e.g. STR_TO_DATE(col, '%d-%m-%Y')."""

    name: str
    args: list[Expr] = field(default_factory=list)


@dataclass(frozen=True)
class BinaryOp:
    """Binary operation: left op right."""

    left: Expr
    op: str  # <>, >=, <=, AND, OR, LIKE, ||
    right: Expr


@dataclass(frozen=True)
class IsNull:
    """IS NULL / IS NOT NULL check."""

    expr: Expr
    negated: bool = False  # True = IS NOT NULL


@dataclass(frozen=True)
class InList:
    """expr IN (v1, v2, ...)."""

    expr: Expr
    values: list[Expr] = field(default_factory=list)


@dataclass(frozen=True)
class Cast:
    """CAST(expr AS type)."""

    expr: Expr
    type_name: str


@dataclass(frozen=True)
class RawSQL:
    """Escape hatch for fixed SQL fragments.

    Never build one from user input.
    """

    sql: str


@dataclass(frozen=True)
class Between:
    """expr BETWEEN low AND high."""

    expr: Expr
    low: Expr
    high: Expr


# The union of all expression types.
Expr = Literal | ColumnRef | FunctionCall | BinaryOp | IsNull | InList | Cast | RawSQL | Between


@dataclass(frozen=True)
class From:
    """FROM clause: the report table."""

    source: str


@dataclass(frozen=True)
class OrderByItem:
    """ORDER BY item, always ascending."""

    expr: Expr


@dataclass(frozen=True)
class Select:
    """A complete SELECT statement."""

    columns: list[Expr] = field(default_factory=list)
    distinct: bool = False
    from_: From | None = None
    where: Expr | None = None
    order_by: list[OrderByItem] = field(default_factory=list)
