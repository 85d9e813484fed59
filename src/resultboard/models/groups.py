"""Group-alias tables: selectable values that expand to several raw values."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict


class GroupAliasTable(BaseModel):
    """Alias groups keyed by dimension name.

    ``dimensions["Stream"]["JR ELITE"]`` lists every raw ``Stream`` value a
    selection of ``JR ELITE`` must match.
    """

    model_config = ConfigDict(frozen=True)

    dimensions: dict[str, dict[str, list[str]]] = {}

    def frozen(self) -> Mapping[str, Mapping[str, tuple[str, ...]]]:
        """Return a read-only copy safe to share between threads."""
        return MappingProxyType(
            {
                dim: MappingProxyType({key: tuple(raw) for key, raw in groups.items()})
                for dim, groups in self.dimensions.items()
            }
        )


DEFAULT_GROUP_ALIASES = GroupAliasTable(
    dimensions={
        "Stream": {
            "JR ELITE": ["JR ELITE", "JR ELITE & AIIMS"],
            "JR AIIMS": ["JR AIIMS", "JR ELITE & AIIMS"],
            "SR ELITE": ["SR ELITE", "SR_ELITE_SET_01", "SR_ELITE_SET_02"],
        },
    }
)
