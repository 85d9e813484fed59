"""Group-alias table loading and validation."""

from resultboard.config.loader import GroupTableError, GroupTableLoader, SourceMap, YAMLSafetyError
from resultboard.config.validator import validate_group_table

__all__ = [
    "GroupTableError",
    "GroupTableLoader",
    "SourceMap",
    "YAMLSafetyError",
    "validate_group_table",
]
