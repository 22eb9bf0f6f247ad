"""
Album API - Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads environment variables (or a .env file) and
       validates types. `load_settings()` additionally checks the variables
       that have no usable default and raises ConfigurationError when they are
       missing, leaving the decision to abort to the caller.
Who:   The application lifespan, the `album-api` entry point, and tests.
When:  Once at process start; never re-read while serving.

Environment variables:
    DB_HOST       default "localhost"
    DB_PORT       default 5432
    DB_USER       required
    DB_PASSWORD   may be empty (trust / peer authentication)
    DB_NAME       required
    DATABASE_URL  optional full SQLAlchemy URL; overrides the DB_* parts
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

from album_api.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern. Connection parts are kept separate
    (instead of a single URL) so a password containing '@' or ':' never has
    to be escaped by hand; `database_url_resolved` assembles them.
    """

    # ── Database ──────────────────────────────────────────────────────────
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432, ge=1, le=65535)
    db_user: str = Field(default="")
    db_password: str = Field(default="")
    db_name: str = Field(default="")

    # Full URL override, e.g. sqlite+aiosqlite:///./albums.db for local runs
    database_url: Optional[str] = Field(default=None)

    # Connection pool sizing (PostgreSQL default max_connections is 100)
    db_pool_size: int = Field(default=20, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_USER and db_user both work
        "extra": "ignore",
    }

    @property
    def database_url_resolved(self) -> str:
        """
        What: The SQLAlchemy URL the engine connects to.
        How:  DATABASE_URL when given, otherwise an asyncpg URL built from the
              DB_* parts (host:port/dbname).
        """
        if self.database_url:
            return self.database_url
        url = URL.create(
            drivername="postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    def missing_required(self) -> List[str]:
        """Names the required environment variables that are unset."""
        if self.database_url:
            return []
        missing = []
        if not self.db_user:
            missing.append("DB_USER")
        if not self.db_name:
            missing.append("DB_NAME")
        return missing

    def validate_required(self) -> None:
        """
        What:  Validates that the connection settings without defaults are set.
        When:  Called during app startup (lifespan) before the engine is built.
        Raises:
            ConfigurationError listing every missing variable.
        """
        missing = self.missing_required()
        if missing:
            errors = [f"{name} environment variable must be set" for name in missing]
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors),
                context={"missing": missing},
            )


def load_settings(**overrides) -> Settings:
    """
    Load and validate settings in one step.

    Keyword overrides take precedence over the environment (useful in tests).

    Raises:
        ConfigurationError: DB_USER or DB_NAME unset and no DATABASE_URL given.
    """
    settings = Settings(**overrides)
    settings.validate_required()
    return settings
