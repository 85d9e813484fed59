"""Shared test fixtures for resultboard."""

from __future__ import annotations

from pathlib import Path

import pytest

from resultboard.compiler.filters import FilterCompiler
from resultboard.compiler.where import WhereClauseBuilder
from resultboard.config.loader import GroupTableLoader
from resultboard.dialect.mysql import MySQLDialect
from resultboard.dialect.postgres import PostgresDialect
from resultboard.models.groups import GroupAliasTable
from resultboard.models.selection import EmptySelectionPolicy

FIXTURES_DIR = Path(__file__).parent / "fixtures"
GROUPS_YAML = FIXTURES_DIR / "groups.yaml"

# Distinct values as they appear in MEDICAL_RESULT.
STREAM_DOMAIN = [
    "JR AIIMS",
    "JR ELITE",
    "JR ELITE & AIIMS",
    "SR ELITE",
    "SR_ELITE_SET_01",
    "SR_ELITE_SET_02",
]


@pytest.fixture
def loader() -> GroupTableLoader:
    return GroupTableLoader()


@pytest.fixture
def compiler() -> FilterCompiler:
    """Compiler with the built-in stream groups and the default policy."""
    return FilterCompiler()


@pytest.fixture
def strict_compiler() -> FilterCompiler:
    """Compiler whose empty selections match no rows."""
    return FilterCompiler(empty_policy=EmptySelectionPolicy.MATCH_NONE)


@pytest.fixture
def synthetic_groups() -> GroupAliasTable:
    return GroupAliasTable(
        dimensions={
            "Colour": {
                "WARM": ["red", "orange", "yellow"],
                "SUNSET": ["orange", "pink"],
            }
        }
    )


@pytest.fixture
def mysql() -> MySQLDialect:
    return MySQLDialect()


@pytest.fixture
def postgres() -> PostgresDialect:
    return PostgresDialect()


@pytest.fixture
def mysql_where(compiler: FilterCompiler, mysql: MySQLDialect) -> WhereClauseBuilder:
    return WhereClauseBuilder(compiler, mysql)
