"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class SecurityConfig(BaseModel):
    """Static API-key authentication settings."""

    api_key_header: str = Field(
        default="x-api-key", description="Header carrying the client API key"
    )
    api_keys: list[str] = Field(
        default_factory=lambda: ["your-secret-api-key-123", "another-valid-key-456"],
        description="Keys accepted by the auth gate",
    )

    @field_validator("api_keys")
    @classmethod
    def _drop_blank_keys(cls, keys: list[str]) -> list[str]:
        # An unset ${VAR:-} substitution must never become a valid key
        return [key for key in keys if key and key.strip()]


class PaginationConfig(BaseModel):
    """Pagination defaults for list endpoints."""

    default_limit: int = Field(default=10, ge=1, description="Page size when none given")
    max_limit: int = Field(default=100, ge=1, description="Upper bound for page size")


class CatalogConfig(BaseModel):
    """In-memory catalog settings."""

    seed_sample_data: bool = Field(
        default=True, description="Load the sample products at startup"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    name: str = Field(default="Products API", description="Service name")
    version: str = Field(default="1.0.0", description="API version")
    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=3000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    security: SecurityConfig = Field(
        default_factory=SecurityConfig, description="API key configuration"
    )
    pagination: PaginationConfig = Field(
        default_factory=PaginationConfig, description="Pagination configuration"
    )
    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Catalog configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
