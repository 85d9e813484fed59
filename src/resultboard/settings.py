"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from resultboard.models.selection import EmptySelectionPolicy


class Settings(BaseSettings):
    """Configuration for the resultboard REST API server.

    Values are read from environment variables and from a ``.env`` file
    in the working directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"

    # REST API
    api_server_host: str = "localhost"
    api_server_port: int = 8000
    port: int | None = None  # PaaS-injected PORT; takes precedence over api_server_port

    @property
    def effective_port(self) -> int:
        """Return the port to listen on (injected PORT takes precedence)."""
        return self.port if self.port is not None else self.api_server_port

    # Filters
    group_table_path: Path | None = None  # None = built-in stream groups
    empty_selection_policy: EmptySelectionPolicy = EmptySelectionPolicy.UNFILTERED

    # Query assembly
    default_dialect: str = "mysql"
    report_table: str = "MEDICAL_RESULT"
    date_column: str = "DATE"
