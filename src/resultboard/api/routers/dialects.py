"""Dialect listing endpoint: GET /dialects."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from resultboard.api.deps import get_default_dialect
from resultboard.api.schemas import DialectListResponse
from resultboard.dialect.registry import DialectRegistry

router = APIRouter()


@router.get("", response_model=DialectListResponse)
async def list_dialects(
    default: str = Depends(get_default_dialect),  # noqa: B008
) -> DialectListResponse:
    """List all available SQL dialects."""
    return DialectListResponse(dialects=DialectRegistry.available(), default=default)
