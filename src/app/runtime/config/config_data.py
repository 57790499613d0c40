"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field
from sqlalchemy.engine import make_url


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


class RedisConfig(BaseModel):
    """Redis configuration model."""

    enabled: bool = Field(default=False, description="Enable Redis service")
    url: str = Field(default="", description="Redis connection URL")
    password: str | None = Field(
        default=None, description="Password for Redis authentication"
    )
    decode_responses: bool = Field(
        default=True, description="Decode Redis responses to strings"
    )
    max_connections: int = Field(default=20, description="Connection pool size")
    socket_timeout: float = Field(default=2.0, description="Socket timeout in seconds")
    socket_connect_timeout: float = Field(
        default=2.0, description="Socket connect timeout in seconds"
    )

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the Redis connection string with password if provided."""
        if self.password:
            if "@" in self.url:
                # URL already has auth info
                return self.url
            parts = self.url.split("://", 1)
            if len(parts) == 2:
                scheme, rest = parts
                return f"{scheme}://:{self.password}@{rest}"
        return self.url

    @property
    def sanitized_connection_string(self) -> str:
        """Connection string safe for logs."""
        if "@" not in self.connection_string:
            return self.connection_string
        scheme, rest = self.connection_string.split("://", 1)
        return f"{scheme}://***@{rest.split('@', 1)[1]}"


class CacheConfig(BaseModel):
    """Cache configuration for the product listing."""

    backend: Literal["auto", "memory", "redis"] = Field(
        default="auto",
        description="Cache backend; 'auto' prefers Redis and falls back to memory",
    )
    products_key: str = Field(
        default="products", description="Cache key for the full product listing"
    )
    products_ttl_seconds: int = Field(
        default=600, description="TTL for the cached product listing (10 minutes)"
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str = Field(default="", description="Log file path; empty disables file logging")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./products.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    create_tables: bool = Field(
        default=True, description="Create missing tables on startup"
    )
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def password(self) -> str | None:
        """Resolve the database password.

        A secrets file wins over an environment variable, which wins over a
        password embedded in the URL.
        """
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e

        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if not password:
                raise ValueError(f"Environment variable {self.password_env_var} not set")
            return password

        return make_url(self.url).password

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with the resolved password."""
        base_url = make_url(self.url)
        if self.is_sqlite:
            return self.url

        resolved_password = self.password
        if resolved_password and resolved_password != base_url.password:
            if base_url.password:
                logger.warning(
                    "Database password in URL differs from the configured secret; using the secret."
                )
            base_url = base_url.set(password=resolved_password)

        return base_url.render_as_string(hide_password=False)


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    name: str = Field(default="product-catalog-api", description="Service name")
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    redis: RedisConfig = Field(
        default_factory=RedisConfig, description="Redis configuration"
    )
    cache: CacheConfig = Field(
        default_factory=CacheConfig, description="Product cache configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
