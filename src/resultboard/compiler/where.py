"""Report WHERE assembly: per-dimension predicates, student search and date range."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from resultboard.ast.builder import and_, col, or_
from resultboard.ast.nodes import Between, BinaryOp, Expr, InList, Literal, RawSQL
from resultboard.compiler.filters import FilterCompiler
from resultboard.dates.normalizer import parse_date
from resultboard.dialect.base import Dialect
from resultboard.models.report import DEFAULT_DIMENSIONS, ReportDimension, ReportRequest
from resultboard.models.selection import InPredicate, MatchNone, Predicate

logger = logging.getLogger("resultboard.compiler")

MATCH_NOTHING = RawSQL(sql="(1 = 0)")


@dataclass
class WhereResult:
    """Assembled condition plus the predicates it was built from."""

    condition: Expr | None
    predicates: dict[str, Predicate] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


def predicate_condition(predicate: Predicate) -> Expr:
    """Turn a compiled predicate into an AST condition on its dimension column."""
    match predicate:
        case InPredicate(dimension=dimension, bind_values=values):
            return InList(expr=col(dimension), values=[Literal.string(v) for v in values])
        case MatchNone():
            return MATCH_NOTHING
    raise ValueError(f"Unknown predicate type: {type(predicate).__name__}")


class WhereClauseBuilder:
    """Builds the AND-ed filter condition for a report request."""

    def __init__(
        self,
        compiler: FilterCompiler,
        dialect: Dialect,
        dimensions: Sequence[ReportDimension] = DEFAULT_DIMENSIONS,
        date_column: str = "DATE",
        student_id_column: str = "STUD_ID",
        student_name_column: str = "NAME_OF_THE_STUDENT",
    ) -> None:
        self._compiler = compiler
        self._dialect = dialect
        self._dimensions = tuple(dimensions)
        self._date_column = date_column
        self._student_id_column = student_id_column
        self._student_name_column = student_name_column

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def dimensions(self) -> tuple[ReportDimension, ...]:
        return self._dimensions

    def dimension_predicates(
        self, request: ReportRequest, ignore: Iterable[str] = ()
    ) -> dict[str, Predicate]:
        """Compile every catalogue dimension not listed in ``ignore``, keyed by column."""
        skipped = set(ignore)
        predicates: dict[str, Predicate] = {}
        for dim in self._dimensions:
            if dim.key in skipped:
                continue
            predicate = self._compiler.compile(dim.column, request.selection_for(dim.key))
            if predicate is not None:
                predicates[dim.column] = predicate
        return predicates

    def build(self, request: ReportRequest, ignore: Iterable[str] = ()) -> WhereResult:
        """Assemble the full condition; ``condition`` is ``None`` when nothing filters."""
        warnings: list[str] = []
        predicates = self.dimension_predicates(request, ignore)
        conditions: list[Expr] = [predicate_condition(p) for p in predicates.values()]

        student = self._student_condition(request.student_search)
        if student is not None:
            conditions.append(student)

        date_range = self._date_condition(request.date_from, request.date_to, warnings)
        if date_range is not None:
            conditions.append(date_range)

        return WhereResult(condition=and_(*conditions), predicates=predicates, warnings=warnings)

    # -- student search ------------------------------------------------------

    def _student_condition(self, search: str | list[Any] | None) -> Expr | None:
        if isinstance(search, list):
            predicate = self._compiler.compile(self._student_id_column, search)
            return predicate_condition(predicate) if predicate is not None else None
        if not search or not search.strip():
            return None
        pattern = Literal.string(self._dialect.escape_like(search.strip()))
        return or_(
            self._dialect.render_string_contains(col(self._student_name_column), pattern),
            self._dialect.render_string_contains(col(self._student_id_column), pattern),
        )

    # -- date range ----------------------------------------------------------

    def _date_bound(self, raw: str | None, label: str, warnings: list[str]) -> Expr | None:
        if not raw:
            return None
        parsed = parse_date(raw)
        if parsed is None:
            logger.debug("Skipping unparseable %s bound %r", label, raw)
            warnings.append(f"Ignoring unparseable {label} '{raw}'")
            return None
        return self._dialect.render_date(parsed.isoformat())

    def _date_condition(
        self, date_from: str | None, date_to: str | None, warnings: list[str]
    ) -> Expr | None:
        low = self._date_bound(date_from, "date_from", warnings)
        high = self._date_bound(date_to, "date_to", warnings)
        column = self._dialect.render_parse_date(col(self._date_column))
        if low is not None and high is not None:
            return Between(expr=column, low=low, high=high)
        if low is not None:
            return BinaryOp(left=column, op=">=", right=low)
        if high is not None:
            return BinaryOp(left=column, op="<=", right=high)
        return None
