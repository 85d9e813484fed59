"""Date normalization endpoint: POST /dates/normalize."""

from __future__ import annotations

from fastapi import APIRouter

from resultboard.api.schemas import NormalizedDate, NormalizeDatesRequest, NormalizeDatesResponse
from resultboard.dates.normalizer import format_date, parse_date

router = APIRouter()


@router.post("/normalize", response_model=NormalizeDatesResponse)
async def normalize_dates(body: NormalizeDatesRequest) -> NormalizeDatesResponse:
    """Normalize each value to DD/MM/YYYY; unparseable values come back unchanged."""
    results = []
    for raw in body.values:
        parsed = parse_date(raw)
        normalized = format_date(parsed) if parsed is not None else raw
        results.append(NormalizedDate(raw=raw, normalized=normalized, parsed=parsed is not None))
    return NormalizeDatesResponse(results=results)
