"""Domain models for resultboard."""

from resultboard.models.errors import SemanticError, SourceSpan, ValidationResult
from resultboard.models.groups import DEFAULT_GROUP_ALIASES, GroupAliasTable
from resultboard.models.report import DEFAULT_DIMENSIONS, ReportDimension, ReportRequest
from resultboard.models.selection import (
    EmptySelectionPolicy,
    InPredicate,
    Many,
    MatchNone,
    NoFilter,
    Predicate,
    Selection,
    Single,
    Wildcard,
    selection_from_raw,
)

__all__ = [
    "DEFAULT_DIMENSIONS",
    "DEFAULT_GROUP_ALIASES",
    "EmptySelectionPolicy",
    "GroupAliasTable",
    "InPredicate",
    "Many",
    "MatchNone",
    "NoFilter",
    "Predicate",
    "ReportDimension",
    "ReportRequest",
    "Selection",
    "SemanticError",
    "Single",
    "SourceSpan",
    "ValidationResult",
    "Wildcard",
    "selection_from_raw",
]
