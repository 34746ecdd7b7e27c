"""Configuration models.

The whole configuration is one Pydantic model serialized to ``config.json``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """Local entity store location."""

    path: str | None = Field(
        default=None, description="SQLite file path (None = user data dir)"
    )


class AuthConfig(BaseModel):
    """Authorization configuration."""

    allowed_emails: str = Field(
        default="",
        description="Comma or newline separated list of allowed email addresses",
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")
    compact: bool = Field(default=False)


class MaintenanceConfig(BaseModel):
    """Scheduled maintenance configuration."""

    auto_archive_hour_utc: int = Field(default=0, ge=0, le=23)
    auto_archive_minute_utc: int = Field(default=0, ge=0, le=59)


class AppConfig(BaseModel):
    """Main TaskDeck configuration."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    maintenance: MaintenanceConfig = Field(default_factory=MaintenanceConfig)
