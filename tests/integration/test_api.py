"""Integration tests for the FastAPI REST API."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from resultboard.api.app import create_app
from resultboard.api.deps import init_filter_service, reset_filter_service
from resultboard.models.selection import EmptySelectionPolicy
from resultboard.service.report_filters import ReportFilterService
from resultboard.settings import Settings
from tests.conftest import GROUPS_YAML


@pytest.fixture
def settings() -> Settings:
    return Settings(group_table_path=GROUPS_YAML, default_dialect="mysql")


@pytest.fixture
def app(settings: Settings):
    app = create_app(settings=settings)
    # Manually init the service (ASGITransport doesn't trigger lifespan)
    init_filter_service(
        ReportFilterService.from_settings(settings),
        default_dialect=settings.default_dialect,
    )
    yield app
    reset_filter_service()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ---------------------------------------------------------------------------
# Health & Dialects
# ---------------------------------------------------------------------------


class TestHealthEndpoint:
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data

    async def test_timing_header(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert "x-request-duration-ms" in response.headers


class TestDialectsEndpoint:
    async def test_list_dialects(self, client: AsyncClient) -> None:
        response = await client.get("/dialects")
        assert response.status_code == 200
        data = response.json()
        assert data["dialects"] == ["mysql", "postgres"]
        assert data["default"] == "mysql"


# ---------------------------------------------------------------------------
# Filter endpoints
# ---------------------------------------------------------------------------


class TestCompileEndpoint:
    async def test_group_expansion(self, client: AsyncClient) -> None:
        response = await client.post(
            "/filters/compile", json={"dimension": "Stream", "selection": ["JR ELITE"]}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["absent"] is False
        assert data["values"] == ["JR ELITE", "JR ELITE & AIIMS"]

    async def test_group_table_from_settings(self, client: AsyncClient) -> None:
        response = await client.post(
            "/filters/compile", json={"dimension": "CAMPUS_NAME", "selection": "BENGALURU"}
        )
        assert len(response.json()["values"]) == 3

    async def test_wildcard(self, client: AsyncClient) -> None:
        response = await client.post(
            "/filters/compile", json={"dimension": "Stream", "selection": "All"}
        )
        assert response.json() == {
            "dimension": "Stream",
            "absent": True,
            "match_none": False,
            "values": [],
        }

    async def test_escaping(self, client: AsyncClient) -> None:
        response = await client.post(
            "/filters/compile", json={"dimension": "Campus", "selection": ["O'Brien"]}
        )
        assert response.json()["values"] == ["O''Brien"]


class TestWhereEndpoint:
    async def test_literal_rendering(self, client: AsyncClient) -> None:
        response = await client.post(
            "/filters/where",
            json={"request": {"stream": "JR AIIMS", "testType": "NEET"}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["dialect"] == "mysql"
        assert data["sql"] == (
            "((`Stream` IN ('JR AIIMS', 'JR ELITE & AIIMS')) AND (`Test_Type` IN ('NEET')))"
        )
        assert data["params"] == {}
        assert data["sql_valid"] is True

    async def test_parameterized_postgres(self, client: AsyncClient) -> None:
        response = await client.post(
            "/filters/where",
            json={
                "request": {"campus": ["O'Brien"]},
                "dialect": "postgres",
                "parameterized": True,
            },
        )
        data = response.json()
        assert data["sql"] == '("CAMPUS_NAME" IN (%(p0)s))'
        assert data["params"] == {"p0": "O'Brien"}

    async def test_ignore_and_date_warning(self, client: AsyncClient) -> None:
        response = await client.post(
            "/filters/where",
            json={
                "request": {"campus": "A", "test": "MT-05", "dateFrom": "not-a-date"},
                "ignore": ["campus"],
            },
        )
        data = response.json()
        assert data["sql"] == "(`Test` IN ('MT-05'))"
        assert data["warnings"] == ["Ignoring unparseable date_from 'not-a-date'"]

    async def test_empty_request(self, client: AsyncClient) -> None:
        response = await client.post("/filters/where", json={})
        assert response.status_code == 200
        assert response.json()["sql"] == ""

    async def test_unknown_dialect(self, client: AsyncClient) -> None:
        response = await client.post("/filters/where", json={"dialect": "oracle"})
        assert response.status_code == 400
        assert "oracle" in response.json()["detail"]


class TestOptionsEndpoint:
    async def test_cascade(self, client: AsyncClient) -> None:
        response = await client.post(
            "/filters/options", json={"request": {"campus": "A", "stream": "JR ELITE"}}
        )
        assert response.status_code == 200
        queries = response.json()["queries"]
        assert set(queries) == {"campus", "stream", "test_type", "test", "top_all"}
        assert "WHERE" in queries["stream"]
        assert "`CAMPUS_NAME` IN ('A')" in queries["stream"]
        assert "'JR ELITE & AIIMS'" in queries["test_type"]

    async def test_dialect_alias(self, client: AsyncClient) -> None:
        response = await client.post("/filters/options", json={"dialect": "PostgreSQL"})
        assert response.status_code == 200
        assert response.json()["dialect"] == "postgres"

    async def test_unknown_dialect(self, client: AsyncClient) -> None:
        response = await client.post("/filters/options", json={"dialect": "oracle"})
        assert response.status_code == 400


class TestMatchNonePolicy:
    async def test_empty_selection_matches_nothing(self) -> None:
        settings = Settings(empty_selection_policy=EmptySelectionPolicy.MATCH_NONE)
        app = create_app(settings=settings)
        init_filter_service(ReportFilterService.from_settings(settings))
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as c:
                compiled = await c.post(
                    "/filters/compile", json={"dimension": "Test", "selection": ["", " "]}
                )
                where = await c.post("/filters/where", json={"request": {"test": [""]}})
                select_all = await c.post(
                    "/filters/where", json={"request": {"campus": ["__ALL__"]}}
                )
        finally:
            reset_filter_service()
        assert compiled.json()["match_none"] is True
        assert compiled.json()["absent"] is False
        assert where.json()["sql"] == "(1 = 0)"
        assert select_all.json()["sql"] == ""


# ---------------------------------------------------------------------------
# Date endpoint
# ---------------------------------------------------------------------------


class TestDatesEndpoint:
    async def test_normalize(self, client: AsyncClient) -> None:
        response = await client.post(
            "/dates/normalize",
            json={"values": ["05-10-2023", "2023-10-05", "not-a-date", ""]},
        )
        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["normalized"] for r in results] == ["05/10/2023", "05/10/2023", "not-a-date", ""]
        assert [r["parsed"] for r in results] == [True, True, False, False]
