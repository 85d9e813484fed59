"""API request/response Pydantic schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from resultboard.models.report import ReportRequest, SelectionValue


class CompileFilterRequest(BaseModel):
    """Request body for POST /filters/compile."""

    dimension: str
    selection: SelectionValue = None


class CompileFilterResponse(BaseModel):
    """Response for POST /filters/compile."""

    dimension: str
    absent: bool
    match_none: bool = False
    values: list[str] = []


class WhereRequest(BaseModel):
    """Request body for POST /filters/where."""

    request: ReportRequest = Field(default_factory=ReportRequest)
    dialect: str | None = None
    ignore: list[str] = []
    parameterized: bool = False


class WhereResponse(BaseModel):
    """Response for POST /filters/where."""

    sql: str
    dialect: str
    params: dict[str, Any] = {}
    warnings: list[str] = []
    sql_valid: bool = True


class FilterOptionsRequest(BaseModel):
    """Request body for POST /filters/options."""

    request: ReportRequest = Field(default_factory=ReportRequest)
    dialect: str | None = None


class FilterOptionsResponse(BaseModel):
    """Response for POST /filters/options."""

    dialect: str
    queries: dict[str, str] = {}


class NormalizeDatesRequest(BaseModel):
    """Request body for POST /dates/normalize."""

    values: list[str] = []


class NormalizedDate(BaseModel):
    """A single normalization outcome."""

    raw: str
    normalized: str
    parsed: bool


class NormalizeDatesResponse(BaseModel):
    """Response for POST /dates/normalize."""

    results: list[NormalizedDate] = []


class DialectListResponse(BaseModel):
    """Response for GET /dialects."""

    dialects: list[str] = []
    default: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""
