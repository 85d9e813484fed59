"""Cascading filter-option queries for the dashboard dropdowns."""

from __future__ import annotations

from resultboard.ast.builder import QueryBuilder, and_, col, lit
from resultboard.ast.nodes import BinaryOp, Expr, IsNull, Select
from resultboard.compiler.where import WhereClauseBuilder, predicate_condition
from resultboard.models.report import ReportRequest


class FilterOptionsPlanner:
    """One ``SELECT DISTINCT`` per dimension, narrowed by the dimensions before it."""

    def __init__(self, where_builder: WhereClauseBuilder, table: str) -> None:
        self._where = where_builder
        self._table = table

    def plan(self, request: ReportRequest) -> dict[str, Select]:
        dims = self._where.dimensions
        queries: dict[str, Select] = {}
        for index, dim in enumerate(dims):
            later = [d.key for d in dims[index:]]
            predicates = self._where.dimension_predicates(request, ignore=later)
            narrowing = [predicate_condition(p) for p in predicates.values()]
            queries[dim.key] = self._distinct_values(dim.column, and_(*narrowing))
        return queries

    def _distinct_values(self, column: str, narrowing: Expr | None) -> Select:
        value = col(column)
        present = and_(
            IsNull(expr=value, negated=True),
            BinaryOp(left=value, op="<>", right=lit("")),
        )
        return (
            QueryBuilder()
            .select(value)
            .distinct()
            .from_(self._table)
            .where(narrowing)
            .where(present)
            .order_by(value)
            .build()
        )
