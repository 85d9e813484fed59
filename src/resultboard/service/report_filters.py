"""Report filter service — core layer shared by the REST API and library callers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from resultboard.compiler.filters import FilterCompiler
from resultboard.compiler.validator import validate_condition, validate_sql
from resultboard.compiler.where import WhereClauseBuilder
from resultboard.config.loader import GroupTableLoader
from resultboard.dialect.registry import DialectRegistry
from resultboard.models.report import DEFAULT_DIMENSIONS, ReportDimension, ReportRequest
from resultboard.models.selection import Predicate
from resultboard.service.filter_options import FilterOptionsPlanner
from resultboard.settings import Settings

logger = logging.getLogger("resultboard.service")


@dataclass
class RenderedWhere:
    """A rendered filter condition (``sql`` is empty when nothing filters)."""

    sql: str
    dialect: str
    params: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    sql_valid: bool = True


class ReportFilterService:
    """Compiles report requests into SQL for a chosen dialect."""

    def __init__(
        self,
        compiler: FilterCompiler | None = None,
        table: str = "MEDICAL_RESULT",
        date_column: str = "DATE",
        dimensions: Sequence[ReportDimension] = DEFAULT_DIMENSIONS,
    ) -> None:
        self._compiler = compiler or FilterCompiler()
        self._table = table
        self._date_column = date_column
        self._dimensions = tuple(dimensions)

    @classmethod
    def from_settings(cls, settings: Settings) -> ReportFilterService:
        """Build the service, loading the group table named in settings."""
        groups = None
        if settings.group_table_path is not None:
            groups, _ = GroupTableLoader().load(settings.group_table_path)
        compiler = FilterCompiler(groups=groups, empty_policy=settings.empty_selection_policy)
        return cls(compiler=compiler, table=settings.report_table, date_column=settings.date_column)

    @property
    def compiler(self) -> FilterCompiler:
        return self._compiler

    def compile(self, dimension: str, selection: Any) -> Predicate | None:
        return self._compiler.compile(dimension, selection)

    def where_builder(self, dialect_name: str) -> WhereClauseBuilder:
        """Builder bound to a dialect; raises ``UnsupportedDialectError``."""
        return WhereClauseBuilder(
            self._compiler,
            DialectRegistry.get(dialect_name),
            dimensions=self._dimensions,
            date_column=self._date_column,
        )

    def where(
        self,
        request: ReportRequest,
        dialect_name: str,
        ignore: Iterable[str] = (),
        parameterized: bool = False,
    ) -> RenderedWhere:
        """Render the request's filter condition for ``dialect_name``."""
        builder = self.where_builder(dialect_name)
        dialect = builder.dialect
        result = builder.build(request, ignore=ignore)
        if result.condition is None:
            return RenderedWhere(sql="", dialect=dialect.name, warnings=result.warnings)

        literal_sql = dialect.compile_condition(result.condition)
        validation_errors = validate_condition(literal_sql, dialect.name, table=self._table)
        warnings = result.warnings + [f"SQL validation: {e}" for e in validation_errors]
        if validation_errors:
            logger.warning("Generated condition failed validation: %s", validation_errors)

        if parameterized:
            sql, params = dialect.compile_parameterized(result.condition)
        else:
            sql, params = literal_sql, {}
        return RenderedWhere(
            sql=sql,
            dialect=dialect.name,
            params=params,
            warnings=warnings,
            sql_valid=not validation_errors,
        )

    def filter_options(self, request: ReportRequest, dialect_name: str) -> dict[str, str]:
        """Render the cascading ``SELECT DISTINCT`` queries, keyed by dimension."""
        builder = self.where_builder(dialect_name)
        dialect = builder.dialect
        planner = FilterOptionsPlanner(builder, self._table)
        queries = {key: dialect.compile(select) for key, select in planner.plan(request).items()}
        for key, sql in queries.items():
            for error in validate_sql(sql, dialect.name):
                logger.warning("Filter option query '%s' failed validation: %s", key, error)
        return queries
