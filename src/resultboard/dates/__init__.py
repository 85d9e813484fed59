"""Date normalization for day-first report dates."""

from resultboard.dates.normalizer import format_date, normalize_date, parse_date

__all__ = [
    "format_date",
    "normalize_date",
    "parse_date",
]
