"""Report request and dimension catalogue models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

SelectionValue = str | int | float | list[Any] | None


class ReportDimension(BaseModel):
    """Maps a request field to the column it filters."""

    key: str
    column: str


# Cascade order for filter dropdowns: each narrows the ones after it.
DEFAULT_DIMENSIONS: tuple[ReportDimension, ...] = (
    ReportDimension(key="campus", column="CAMPUS_NAME"),
    ReportDimension(key="stream", column="Stream"),
    ReportDimension(key="test_type", column="Test_Type"),
    ReportDimension(key="test", column="Test"),
    ReportDimension(key="top_all", column="Top_ALL"),
)


class ReportRequest(BaseModel):
    """Filter inputs supplied with a report request."""

    campus: SelectionValue = None
    stream: SelectionValue = None
    test_type: SelectionValue = Field(None, alias="testType")
    test: SelectionValue = None
    top_all: SelectionValue = Field(None, alias="topAll")
    student_search: str | list[Any] | None = Field(None, alias="studentSearch")
    date_from: str | None = Field(None, alias="dateFrom")
    date_to: str | None = Field(None, alias="dateTo")

    model_config = {"populate_by_name": True}

    def selection_for(self, key: str) -> Any:
        """Return the raw selection for a catalogue key (``None`` if unknown)."""
        return getattr(self, key, None) if key in type(self).model_fields else None
