"""Tests for group-alias table loading and offline validation."""

from __future__ import annotations

import pytest

from resultboard.compiler.filters import FilterCompiler
from resultboard.config.loader import (
    _MAX_DOCUMENT_SIZE,
    GroupTableError,
    GroupTableLoader,
    YAMLSafetyError,
)
from resultboard.config.validator import validate_group_table
from resultboard.models.groups import DEFAULT_GROUP_ALIASES, GroupAliasTable
from resultboard.models.selection import InPredicate
from tests.conftest import GROUPS_YAML, STREAM_DOMAIN


class TestLoader:
    def test_load_fixture(self, loader: GroupTableLoader) -> None:
        table, source_map = loader.load(GROUPS_YAML)
        assert table.dimensions["Stream"]["JR ELITE"] == ["JR ELITE", "JR ELITE & AIIMS"]
        assert "BENGALURU" in table.dimensions["CAMPUS_NAME"]
        span = source_map.get("groups.Stream.JR AIIMS")
        assert span is not None
        assert span.file == str(GROUPS_YAML)
        assert span.line > 1

    def test_loaded_table_drives_compiler(self, loader: GroupTableLoader) -> None:
        table, _ = loader.load(GROUPS_YAML)
        compiler = FilterCompiler(groups=table)
        predicate = compiler.compile("CAMPUS_NAME", "BENGALURU")
        assert isinstance(predicate, InPredicate)
        assert predicate.values == (
            "BENGALURU",
            "BEN_PU COLLEGE BELLANDUR",
            "BEN_PU College ECITY NEET BOYS",
        )

    def test_empty_document(self, loader: GroupTableLoader) -> None:
        table, _ = loader.load_string("")
        assert table.dimensions == {}

    def test_scalar_group_is_wrapped(self, loader: GroupTableLoader) -> None:
        table, _ = loader.load_string("groups:\n  Test:\n    MT: MT-05\n")
        assert table.dimensions["Test"]["MT"] == ["MT-05"]

    def test_groups_must_be_mapping(self, loader: GroupTableLoader) -> None:
        with pytest.raises(GroupTableError, match="'groups' must be a mapping"):
            loader.load_string("groups:\n  - Stream\n")

    def test_dimension_must_be_mapping(self, loader: GroupTableLoader) -> None:
        with pytest.raises(GroupTableError, match="Dimension 'Stream'") as exc_info:
            loader.load_string("groups:\n  Stream:\n    - JR ELITE\n", filename="g.yaml")
        assert exc_info.value.path == "groups.Stream"
        assert exc_info.value.span is not None
        assert exc_info.value.span.line == 2

    def test_nested_members_rejected(self, loader: GroupTableLoader) -> None:
        with pytest.raises(GroupTableError, match="must be a list of values"):
            loader.load_string("groups:\n  Stream:\n    JR:\n      - [a, b]\n")

    def test_invalid_yaml(self, loader: GroupTableLoader) -> None:
        with pytest.raises(GroupTableError, match="Invalid YAML"):
            loader.load_string("groups: [unclosed\n")


class TestYAMLSafety:
    def test_anchor_rejected(self, loader: GroupTableLoader) -> None:
        yaml = "groups:\n  Stream:\n    A: &a [x, y]\n    B: *a\n"
        with pytest.raises(YAMLSafetyError, match="anchors/aliases"):
            loader.load_string(yaml)

    def test_ampersand_in_value_allowed(self, loader: GroupTableLoader) -> None:
        table, _ = loader.load_string("groups:\n  Stream:\n    JR:\n      - JR ELITE & AIIMS\n")
        assert table.dimensions["Stream"]["JR"] == ["JR ELITE & AIIMS"]

    def test_oversized_document_rejected(self, loader: GroupTableLoader) -> None:
        content = "# " + "x" * _MAX_DOCUMENT_SIZE + "\n"
        with pytest.raises(YAMLSafetyError, match="maximum size"):
            loader.load_string(content)


class TestValidator:
    def test_default_table_matches_domain(self) -> None:
        result = validate_group_table(DEFAULT_GROUP_ALIASES, {"Stream": STREAM_DOMAIN})
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_unknown_raw_value(self) -> None:
        table = GroupAliasTable(dimensions={"Stream": {"JR ELITE": ["JR ELITE", "JR ELITE&AIIMS"]}})
        result = validate_group_table(table, {"Stream": STREAM_DOMAIN})
        assert not result.valid
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.code == "UNKNOWN_RAW_VALUE"
        assert error.path == "groups.Stream.JR ELITE[1]"
        assert "JR ELITE & AIIMS" in error.suggestions

    def test_empty_group(self) -> None:
        table = GroupAliasTable(dimensions={"Stream": {"NOTHING": []}})
        result = validate_group_table(table, {"Stream": STREAM_DOMAIN})
        assert [e.code for e in result.errors] == ["EMPTY_GROUP"]

    def test_dimension_without_domain_warns(self) -> None:
        table = GroupAliasTable(dimensions={"Steam": {"X": ["JR ELITE"]}})
        result = validate_group_table(table, {"Stream": STREAM_DOMAIN})
        assert result.valid
        assert result.warnings[0].code == "UNKNOWN_DIMENSION"
        assert result.warnings[0].suggestions == ["Stream"]

    def test_errors_carry_source_positions(self, loader: GroupTableLoader) -> None:
        table, source_map = loader.load_string(
            "groups:\n  Stream:\n    JR ELITE:\n      - JR ELITE\n      - JR ELIT\n",
            filename="groups.yaml",
        )
        result = validate_group_table(table, {"Stream": STREAM_DOMAIN}, source_map)
        assert result.errors[0].span is not None
        assert result.errors[0].span.file == "groups.yaml"
        assert result.errors[0].span.line == 5
