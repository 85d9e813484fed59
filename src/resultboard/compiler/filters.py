"""Dimension filter compiler: selections → injection-safe membership predicates."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from resultboard.models.groups import DEFAULT_GROUP_ALIASES, GroupAliasTable
from resultboard.models.selection import (
    ALL_MARKER,
    EmptySelectionPolicy,
    InPredicate,
    Many,
    MatchNone,
    NoFilter,
    Predicate,
    Single,
    Wildcard,
    selection_from_raw,
)

logger = logging.getLogger("resultboard.compiler")


def escape_literal(value: str) -> str:
    """Double embedded single quotes (SQL string-literal convention)."""
    return value.replace("'", "''")


def _clean(value: Any) -> str:
    return str(value).strip() if value else ""


class FilterCompiler:
    """Compiles one dimension's selection into a predicate.

    The group table is copied into read-only mappings at construction, so a
    single compiler can be shared by concurrent requests.
    """

    def __init__(
        self,
        groups: GroupAliasTable | None = None,
        empty_policy: EmptySelectionPolicy = EmptySelectionPolicy.UNFILTERED,
    ) -> None:
        table = groups if groups is not None else DEFAULT_GROUP_ALIASES
        self._groups = table.frozen()
        self._empty_policy = empty_policy

    @property
    def empty_policy(self) -> EmptySelectionPolicy:
        return self._empty_policy

    def groups_for(self, dimension: str) -> Mapping[str, tuple[str, ...]]:
        """Alias groups for a dimension (empty for dimensions without any)."""
        return self._groups.get(dimension, {})

    def compile(self, dimension: str, selection: Any) -> Predicate | None:
        """Compile ``selection`` for ``dimension``.

        Returns ``None`` when the dimension is unconstrained: no selection,
        a wildcard, or (under the default policy) a selection with no
        usable values.
        """
        match selection_from_raw(selection):
            case NoFilter() | Wildcard():
                return None
            case Single(value=value):
                values: tuple[Any, ...] = (value,)
            case Many(values=values):
                pass

        expanded = self._expand(dimension, values)
        cleaned = self._sanitize(expanded)

        if not cleaned:
            if self._empty_policy is EmptySelectionPolicy.MATCH_NONE:
                logger.debug("Selection for '%s' is empty; matching no rows", dimension)
                return MatchNone(dimension=dimension)
            logger.debug("Selection for '%s' is empty; leaving it unfiltered", dimension)
            return None

        return InPredicate(
            dimension=dimension,
            values=tuple(escape_literal(v) for v in cleaned),
            bind_values=tuple(cleaned),
        )

    def _expand(self, dimension: str, values: Iterable[Any]) -> list[Any]:
        """Union the selection with the raw values of every matched group."""
        selected = list(values)
        groups = self.groups_for(dimension)
        if not groups:
            return selected

        expanded = list(selected)
        for value in selected:
            members = groups.get(_clean(value))
            if members:
                expanded.extend(m for m in members if m not in expanded)
        return expanded

    @staticmethod
    def _sanitize(values: Iterable[Any]) -> list[str]:
        """Trim, drop empties and leaked markers, de-duplicate in order."""
        seen: dict[str, None] = {}
        for value in values:
            text = _clean(value)
            if text and text != ALL_MARKER:
                seen.setdefault(text, None)
        return list(seen)


_default_compiler = FilterCompiler()


def compile_filter(dimension: str, selection: Any) -> Predicate | None:
    """Compile a selection with the built-in group table and default policy."""
    return _default_compiler.compile(dimension, selection)
