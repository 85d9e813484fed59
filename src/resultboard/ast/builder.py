"""Fluent builder API for constructing SQL AST nodes."""

from __future__ import annotations

from typing import Self

from resultboard.ast.nodes import BinaryOp, ColumnRef, Expr, From, Literal, OrderByItem, Select


class QueryBuilder:
    """Fluent builder for ergonomic AST construction."""

    def __init__(self) -> None:
        self._columns: list[Expr] = []
        self._distinct = False
        self._from: From | None = None
        self._where: Expr | None = None
        self._order_by: list[OrderByItem] = []

    def select(self, *columns: Expr) -> Self:
        self._columns.extend(columns)
        return self

    def distinct(self) -> Self:
        self._distinct = True
        return self

    def from_(self, table: str) -> Self:
        self._from = From(source=table)
        return self

    def where(self, condition: Expr | None) -> Self:
        if condition is None:
            return self
        if self._where is None:
            self._where = condition
        else:
            self._where = BinaryOp(left=self._where, op="AND", right=condition)
        return self

    def order_by(self, expr: Expr) -> Self:
        self._order_by.append(OrderByItem(expr=expr))
        return self

    def build(self) -> Select:
        return Select(
            columns=self._columns,
            distinct=self._distinct,
            from_=self._from,
            where=self._where,
            order_by=self._order_by,
        )


# Convenience constructors for common expressions.


def col(name: str) -> ColumnRef:
    """Create a column reference."""
    return ColumnRef(name=name)


def lit(value: str | int | float | None) -> Literal:
    """Create a literal value."""
    return Literal(value=value)


def and_(*conditions: Expr) -> Expr | None:
    """Chain conditions with AND (``None`` when there are none)."""
    result: Expr | None = None
    for cond in conditions:
        result = cond if result is None else BinaryOp(left=result, op="AND", right=cond)
    return result


def or_(*conditions: Expr) -> Expr | None:
    """Chain conditions with OR (``None`` when there are none)."""
    result: Expr | None = None
    for cond in conditions:
        result = cond if result is None else BinaryOp(left=result, op="OR", right=cond)
    return result
