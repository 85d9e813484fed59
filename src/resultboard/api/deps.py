"""Dependency injection for FastAPI — ReportFilterService singleton."""

from __future__ import annotations

from resultboard.service.report_filters import ReportFilterService

_filter_service: ReportFilterService | None = None
_default_dialect: str = "mysql"


def init_filter_service(service: ReportFilterService, *, default_dialect: str = "mysql") -> None:
    """Set the global ReportFilterService (called at app startup)."""
    global _filter_service, _default_dialect  # noqa: PLW0603
    _filter_service = service
    _default_dialect = default_dialect


def get_filter_service() -> ReportFilterService:
    """FastAPI ``Depends`` provider for ReportFilterService."""
    if _filter_service is None:
        raise RuntimeError(
            "ReportFilterService not initialised — call init_filter_service() first"
        )
    return _filter_service


def get_default_dialect() -> str:
    """Dialect used when a request does not name one."""
    return _default_dialect


def reset_filter_service() -> None:
    """Clear the global ReportFilterService (for tests)."""
    global _filter_service, _default_dialect  # noqa: PLW0603
    _filter_service = None
    _default_dialect = "mysql"
