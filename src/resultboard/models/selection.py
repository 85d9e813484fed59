"""Selection variants and compiled predicate types for dimension filters."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

# "All" is only a wildcard as the whole selection. "__ALL__" is also a
# wildcard as the only entry of a list, and is dropped from any other list.
ALL_LABEL = "All"
ALL_MARKER = "__ALL__"
WILDCARDS = frozenset({ALL_LABEL, ALL_MARKER})


class EmptySelectionPolicy(StrEnum):
    """What an explicit selection that sanitizes to nothing compiles to."""

    UNFILTERED = "unfiltered"
    MATCH_NONE = "match_none"


# -- selection variants --------------------------------------------------------


@dataclass(frozen=True)
class NoFilter:
    """No value supplied for the dimension."""


@dataclass(frozen=True)
class Wildcard:
    """Explicit "select all" for the dimension."""

    marker: str = ALL_LABEL


@dataclass(frozen=True)
class Single:
    """One selected value."""

    value: Any


@dataclass(frozen=True)
class Many:
    """An ordered sequence of selected values."""

    values: tuple[Any, ...] = ()


Selection = NoFilter | Wildcard | Single | Many


def selection_from_raw(raw: Any) -> Selection:
    """Classify a loosely-typed request value into a selection variant.

    Lists, tuples and other non-string sequences become ``Many``, unless
    ``"__ALL__"`` is their only non-blank entry; the wildcard labels become
    ``Wildcard``; ``None`` and other falsy scalars become ``NoFilter``.
    """
    match raw:
        case Many(values=values) if _only_markers(values):
            return Wildcard(marker=ALL_MARKER)
        case NoFilter() | Wildcard() | Single() | Many():
            return raw
        case str() if raw in WILDCARDS:
            return Wildcard(marker=raw)
        case Sequence() if not isinstance(raw, (str, bytes)):
            return selection_from_raw(Many(values=tuple(raw)))
        case set() | frozenset():
            return selection_from_raw(Many(values=tuple(sorted(raw, key=str))))
        case _ if not raw:
            return NoFilter()
        case _:
            return Single(value=raw)


def _only_markers(values: tuple[Any, ...]) -> bool:
    entries = [str(v).strip() for v in values if v is not None]
    entries = [e for e in entries if e]
    return bool(entries) and all(e == ALL_MARKER for e in entries)


# -- compiled predicates -------------------------------------------------------


@dataclass(frozen=True)
class InPredicate:
    """``dimension IN (values)`` — never empty.

    ``values`` are quote-escaped literals safe for interpolation;
    ``bind_values`` are the same entries unescaped, for drivers that bind
    parameters.
    """

    dimension: str
    values: tuple[str, ...]
    bind_values: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError(f"InPredicate for '{self.dimension}' must have at least one value")


@dataclass(frozen=True)
class MatchNone:
    """An explicit selection with no usable values, under ``MATCH_NONE``."""

    dimension: str


Predicate = InPredicate | MatchNone
