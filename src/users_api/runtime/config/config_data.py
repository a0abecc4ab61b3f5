"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field
from sqlalchemy.engine import make_url


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(default=["GET", "POST", "PUT", "OPTIONS"])
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(
        default=None, description="Log file path; no file sink when empty"
    )
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./users.db",
        description="SQLAlchemy database URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    create_tables: bool = Field(
        default=True, description="Create the users table on startup if missing"
    )
    atomic_writes: bool = Field(
        default=True,
        description=(
            "Run a write and its re-fetch in one transaction. When false the "
            "write is committed before the re-fetch is issued."
        ),
    )

    @property
    def backend(self) -> str:
        """Database backend name, e.g. ``sqlite`` or ``postgresql``."""
        return make_url(self.url).get_backend_name()

    @property
    def is_in_memory(self) -> bool:
        url = make_url(self.url)
        return url.get_backend_name() == "sqlite" and url.database in (
            None,
            "",
            ":memory:",
        )


class UsersConfig(BaseModel):
    """Behaviour of the /api/users resource."""

    list_includes_password: bool = Field(
        default=False,
        description="Return the stored password in list responses",
    )


class ApiConfig(BaseModel):
    """HTTP API behaviour."""

    title: str = Field(default="Users API", description="OpenAPI title")
    expose_sql_errors: bool = Field(
        default=True,
        description="Include the failing SQL statement in 500 responses",
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="Application host")
    port: int = Field(default=3000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    users: UsersConfig = Field(
        default_factory=UsersConfig, description="Users resource configuration"
    )
    api: ApiConfig = Field(
        default_factory=ApiConfig, description="HTTP API configuration"
    )
