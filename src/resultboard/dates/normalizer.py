"""Normalize date strings of uncertain format to ``DD/MM/YYYY``.

Stored exam dates are day-first (``05-10-2023`` is 5 October). General
date parsers read hyphenated numeric dates month-first, so the positional
day-month-year pattern is always tried before any general parse.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser

logger = logging.getLogger("resultboard.dates")

_DMY_PATTERN = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})")
_YMD_PATTERN = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})")

# Two defaults that differ in every component: a general parse that
# yields different results for them filled a missing component in.
_PROBE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _calendar_date(year: str, month: str, day: str) -> date | None:
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def _general_parse(text: str) -> date | None:
    try:
        first, second = (
            date_parser.parse(text, dayfirst=True, default=default) for default in _PROBE_DEFAULTS
        )
    except (date_parser.ParserError, ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first.date()


def parse_date(raw: Any) -> date | None:
    """Resolve ``raw`` to a calendar date, or ``None`` if it is not one."""
    if not raw:
        return None
    text = str(raw).strip()

    if match := _DMY_PATTERN.match(text):
        day, month, year = match.groups()
        return _calendar_date(year, month, day)
    if match := _YMD_PATTERN.match(text):
        year, month, day = match.groups()
        return _calendar_date(year, month, day)
    return _general_parse(text)


def format_date(value: date) -> str:
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def normalize_date(raw: Any) -> str:
    """Render ``raw`` as ``DD/MM/YYYY``.

    Empty input gives ``""``. Input that is not a valid calendar date is
    returned unchanged, so callers detect failure by comparing with the
    input.
    """
    if not raw:
        return ""
    parsed = parse_date(raw)
    if parsed is None:
        logger.debug("Unparseable date %r left unchanged", raw)
        return raw if isinstance(raw, str) else str(raw)
    return format_date(parsed)
