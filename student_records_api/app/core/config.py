"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with a local SQLite file and permissive CORS.  In a
production deployment you should override these via environment
variables.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Student Records API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  Empty means console logging only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  A relative path is resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "student_records.db")

    # Seconds a connection waits for another writer to release the lock.
    db_busy_timeout: float = float(os.getenv("DB_BUSY_TIMEOUT", "5"))

    # Comma‑separated list of origins allowed to call the API from a
    # browser.  ``*`` allows any origin (credentials are then disabled).
    cors_allowed_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ALLOWED_ORIGINS", "*"))
    )

    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Tests that need a
# different database assign ``settings.database_url`` directly.
settings = Settings()
