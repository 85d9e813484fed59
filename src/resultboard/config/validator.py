"""Offline checks of a group-alias table against the known value domain."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from resultboard.config.loader import SourceMap
from resultboard.models.errors import SemanticError, ValidationResult
from resultboard.models.groups import GroupAliasTable


def _suggest_similar(name: str, candidates: Iterable[str], max_suggestions: int = 3) -> list[str]:
    """Suggest similar values for 'did you mean?' messages."""
    name_lower = name.lower()
    scored = []
    for candidate in candidates:
        candidate_lower = candidate.lower()
        if name_lower in candidate_lower or candidate_lower in name_lower:
            scored.append((0, candidate))
        else:
            common = sum(1 for c in name_lower if c in candidate_lower)
            scored.append((len(name) + len(candidate) - 2 * common, candidate))
    scored.sort(key=lambda x: x[0])
    return [s[1] for s in scored[:max_suggestions]]


def validate_group_table(
    table: GroupAliasTable,
    domain: Mapping[str, Iterable[str]],
    source_map: SourceMap | None = None,
) -> ValidationResult:
    """Check that every group expands only to values the store actually holds.

    ``domain`` maps a dimension name to its distinct raw values, e.g. the
    result of ``SELECT DISTINCT Stream FROM MEDICAL_RESULT``.
    """
    errors: list[SemanticError] = []
    warnings: list[SemanticError] = []

    for dim_name, groups in table.dimensions.items():
        dim_path = f"groups.{dim_name}"
        if dim_name not in domain:
            warnings.append(
                SemanticError(
                    code="UNKNOWN_DIMENSION",
                    message=f"No value domain supplied for dimension '{dim_name}'",
                    path=dim_path,
                    span=source_map.get(dim_path) if source_map else None,
                    suggestions=_suggest_similar(dim_name, domain.keys()),
                )
            )
            continue

        known = {str(v) for v in domain[dim_name]}
        for group_name, members in groups.items():
            group_path = f"{dim_path}.{group_name}"
            if not members:
                errors.append(
                    SemanticError(
                        code="EMPTY_GROUP",
                        message=f"Group '{group_name}' of '{dim_name}' expands to no values",
                        path=group_path,
                        span=source_map.get(group_path) if source_map else None,
                    )
                )
            for i, member in enumerate(members):
                if member in known:
                    continue
                member_path = f"{group_path}[{i}]"
                span = None
                if source_map:
                    span = source_map.get(member_path) or source_map.get(group_path)
                errors.append(
                    SemanticError(
                        code="UNKNOWN_RAW_VALUE",
                        message=(
                            f"Group '{group_name}' of '{dim_name}' expands to "
                            f"'{member}', which is not a known {dim_name} value"
                        ),
                        path=member_path,
                        span=span,
                        suggestions=_suggest_similar(member, sorted(known)),
                    )
                )

    return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)
