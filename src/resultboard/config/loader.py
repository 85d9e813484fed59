"""YAML loader for group-alias tables, with position tracking for error reporting."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import YAMLError

from resultboard.models.errors import SourceSpan
from resultboard.models.groups import GroupAliasTable

logger = logging.getLogger("resultboard.config")

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_DOCUMENT_SIZE = 1_000_000  # 1M characters
_MAX_NODE_COUNT = 50_000
_MAX_DEPTH = 10

# Regex to detect YAML anchor definitions (&name). Matches & at line start
# or after whitespace/sequence indicators, followed by an anchor name.
# "JR ELITE & AIIMS" does not match: the & is followed by a space.
_ANCHOR_RE = re.compile(r"(?:^|[\s\-:])&(\w+)", re.MULTILINE)


class YAMLSafetyError(Exception):
    """Raised when YAML input violates safety constraints.

    Distinct from parse errors — these indicate potentially malicious input
    (e.g., billion-laughs anchors, oversized documents).
    """


class GroupTableError(Exception):
    """Raised when a group table document has the wrong shape."""

    def __init__(self, message: str, path: str | None = None, span: SourceSpan | None = None):
        self.path = path
        self.span = span
        location = f" ({span.file}:{span.line})" if span else ""
        super().__init__(f"{message}{location}")


@dataclass
class SourceMap:
    """Maps YAML key paths to their source positions for error reporting."""

    _positions: dict[str, SourceSpan] = field(default_factory=dict)

    def add(self, path: str, span: SourceSpan) -> None:
        self._positions[path] = span

    def get(self, path: str) -> SourceSpan | None:
        return self._positions.get(path)

    @property
    def paths(self) -> list[str]:
        return list(self._positions.keys())


class GroupTableLoader:
    """Loads ``groups: {dimension: {group: [raw values]}}`` documents.

    Uses ruamel.yaml which preserves line/column info on every parsed node.
    """

    def __init__(self) -> None:
        self._yaml = YAML()
        self._yaml.max_depth = _MAX_DEPTH

    # -- safety checks -------------------------------------------------------

    @staticmethod
    def _check_yaml_safety(content: str) -> None:
        if len(content) > _MAX_DOCUMENT_SIZE:
            raise YAMLSafetyError(
                f"YAML document exceeds maximum size "
                f"({len(content):,} chars > {_MAX_DOCUMENT_SIZE:,} limit)"
            )
        if _ANCHOR_RE.search(content):
            raise YAMLSafetyError("YAML anchors/aliases are not supported in group tables")

    @staticmethod
    def _check_node_count(data: Any, limit: int = _MAX_NODE_COUNT) -> None:
        count = 0
        stack: list[Any] = [data]
        while stack:
            node = stack.pop()
            count += 1
            if count > limit:
                raise YAMLSafetyError(f"YAML document exceeds maximum node count ({limit:,})")
            if isinstance(node, dict):
                stack.extend(node.values())
            elif isinstance(node, list):
                stack.extend(node)

    # -- public loading API --------------------------------------------------

    def load(self, path: Path) -> tuple[GroupAliasTable, SourceMap]:
        """Load a group table file."""
        with path.open("r", encoding="utf-8") as handle:
            content = handle.read()
        table, source_map = self.load_string(content, filename=str(path))
        logger.info(
            "Loaded group table from %s (%d dimensions)", path, len(table.dimensions)
        )
        return table, source_map

    def load_string(
        self, content: str, filename: str = "<string>"
    ) -> tuple[GroupAliasTable, SourceMap]:
        """Load a group table from a YAML string."""
        self._check_yaml_safety(content)
        try:
            data = self._yaml.load(content)
        except YAMLError as exc:
            raise GroupTableError(f"Invalid YAML in {filename}: {exc}") from exc
        source_map = SourceMap()
        if data is None:
            return GroupAliasTable(), source_map
        self._check_node_count(data)
        self._extract_positions(data, filename, "", source_map)
        return self._build_table(data, source_map), source_map

    # -- shape checks --------------------------------------------------------

    def _build_table(self, data: Any, source_map: SourceMap) -> GroupAliasTable:
        if not isinstance(data, dict):
            raise GroupTableError("Group table must be a YAML mapping")
        raw_groups = data.get("groups", {})
        if not isinstance(raw_groups, dict):
            raise GroupTableError(
                "'groups' must be a mapping of dimension names",
                path="groups",
                span=source_map.get("groups"),
            )

        dimensions: dict[str, dict[str, list[str]]] = {}
        for dim_name, groups in raw_groups.items():
            dim_path = f"groups.{dim_name}"
            if not isinstance(groups, dict):
                raise GroupTableError(
                    f"Dimension '{dim_name}' must map group names to value lists",
                    path=dim_path,
                    span=source_map.get(dim_path),
                )
            table: dict[str, list[str]] = {}
            for group_name, members in groups.items():
                group_path = f"{dim_path}.{group_name}"
                if isinstance(members, str):
                    members = [members]
                if not isinstance(members, list) or any(
                    isinstance(m, (dict, list)) for m in members
                ):
                    raise GroupTableError(
                        f"Group '{group_name}' of '{dim_name}' must be a list of values",
                        path=group_path,
                        span=source_map.get(group_path),
                    )
                table[str(group_name)] = [str(m) for m in members if m is not None]
            dimensions[str(dim_name)] = table
        return GroupAliasTable(dimensions=dimensions)

    # -- positions -----------------------------------------------------------

    def _extract_positions(
        self,
        data: Any,
        filename: str,
        prefix: str,
        source_map: SourceMap,
    ) -> None:
        """Recursively extract source positions from ruamel.yaml nodes."""
        if isinstance(data, CommentedMap):
            for key in data:
                key_path = f"{prefix}.{key}" if prefix else str(key)
                try:
                    key_positions = data.lc.key(key)
                    if key_positions:
                        line, column = key_positions
                        source_map.add(
                            key_path,
                            SourceSpan(file=filename, line=line + 1, column=column + 1),
                        )
                except (AttributeError, KeyError, TypeError):
                    try:
                        source_map.add(
                            key_path,
                            SourceSpan(
                                file=filename, line=data.lc.line + 1, column=data.lc.col + 1
                            ),
                        )
                    except (AttributeError, TypeError):
                        pass
                self._extract_positions(data[key], filename, key_path, source_map)
        elif isinstance(data, CommentedSeq):
            for i, item in enumerate(data):
                item_path = f"{prefix}[{i}]"
                try:
                    item_pos = data.lc.item(i)
                    if item_pos:
                        line, column = item_pos
                        source_map.add(
                            item_path,
                            SourceSpan(file=filename, line=line + 1, column=column + 1),
                        )
                except (AttributeError, KeyError, TypeError):
                    pass
                self._extract_positions(item, filename, item_path, source_map)
