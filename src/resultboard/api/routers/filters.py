"""Filter endpoints: compile single dimensions, render WHERE clauses and option queries."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from resultboard.api.deps import get_default_dialect, get_filter_service
from resultboard.api.schemas import (
    CompileFilterRequest,
    CompileFilterResponse,
    FilterOptionsRequest,
    FilterOptionsResponse,
    WhereRequest,
    WhereResponse,
)
from resultboard.dialect.registry import DialectRegistry, UnsupportedDialectError
from resultboard.models.selection import InPredicate, MatchNone
from resultboard.service.report_filters import ReportFilterService

router = APIRouter()


@router.post("/compile", response_model=CompileFilterResponse)
async def compile_filter(
    body: CompileFilterRequest,
    service: ReportFilterService = Depends(get_filter_service),  # noqa: B008
) -> CompileFilterResponse:
    """Compile one dimension's selection into its escaped literal list."""
    predicate = service.compile(body.dimension, body.selection)
    match predicate:
        case InPredicate(values=values):
            return CompileFilterResponse(
                dimension=body.dimension, absent=False, values=list(values)
            )
        case MatchNone():
            return CompileFilterResponse(dimension=body.dimension, absent=False, match_none=True)
        case _:
            return CompileFilterResponse(dimension=body.dimension, absent=True)


@router.post("/where", response_model=WhereResponse)
async def render_where(
    body: WhereRequest,
    service: ReportFilterService = Depends(get_filter_service),  # noqa: B008
    default_dialect: str = Depends(get_default_dialect),  # noqa: B008
) -> WhereResponse:
    """Render the AND-ed filter condition for a report request."""
    dialect = body.dialect or default_dialect
    try:
        rendered = service.where(
            body.request,
            dialect,
            ignore=body.ignore,
            parameterized=body.parameterized,
        )
    except UnsupportedDialectError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None
    return WhereResponse(
        sql=rendered.sql,
        dialect=rendered.dialect,
        params=rendered.params,
        warnings=rendered.warnings,
        sql_valid=rendered.sql_valid,
    )


@router.post("/options", response_model=FilterOptionsResponse)
async def filter_options(
    body: FilterOptionsRequest,
    service: ReportFilterService = Depends(get_filter_service),  # noqa: B008
    default_dialect: str = Depends(get_default_dialect),  # noqa: B008
) -> FilterOptionsResponse:
    """Render the cascading dropdown queries for the current selections."""
    try:
        dialect = DialectRegistry.get(body.dialect or default_dialect)
        queries = service.filter_options(body.request, dialect.name)
    except UnsupportedDialectError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None
    return FilterOptionsResponse(dialect=dialect.name, queries=queries)
