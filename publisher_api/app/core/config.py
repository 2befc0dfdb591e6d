"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, so no ``pydantic-settings`` dependency is
needed.  Defaults are provided for all fields.  Values are read when a
``Settings`` instance is created, which lets tests build their own
instance after adjusting the environment (or by passing keyword
arguments) instead of patching a module-level object.
"""

import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Publisher API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    debug: bool = field(default_factory=lambda: _env_flag("DEBUG"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))
    secret_key: str = field(default_factory=lambda: os.getenv("SECRET_KEY", "change_me"))
    access_token_expire_minutes: int = field(
        default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    )

    # Address the HTTP server binds to when started through ``run.py``.
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))

    # Path for the SQLite database.  A relative path is resolved against
    # the project root by ``core.db``.
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "publisher.db"))

    # When enabled, reading, updating or deleting a publisher requires the
    # caller to be the user recorded in its ``userID``.  Off by default so
    # any authenticated user may act on any publisher.
    enforce_ownership: bool = field(default_factory=lambda: _env_flag("ENFORCE_OWNERSHIP"))
