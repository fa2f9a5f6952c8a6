"""Centralized logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(e.g. SQLAlchemy SQL statements, uvicorn access logs) can be silenced without
affecting the roster sync output.

Usage:
    from dashboard.infrastructure.logging.log_config import setup_logging
    setup_logging()   # Call once at startup (in main.py lifespan)
"""

import logging
import sys

from dashboard.config import get_settings


# ── Logger-name → Settings-field mapping ────────────────────────────

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_sync": [
        "ClientRosterManager",
        "ExecutiveRosterManager",
        "dashboard.application.services",
        "dashboard.infrastructure.realtime",
    ],
}


def setup_logging() -> None:
    """Configure Python logging levels from application settings."""
    settings = get_settings()
    root_level = _parse_level(settings.log_level)

    root = logging.getLogger()
    root.setLevel(root_level)

    # uvicorn usually installs a handler; scripts and tests may not.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(levelname)-8s %(name)s — %(message)s",
            )
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        raw_level: str = getattr(settings, settings_field, "INFO")
        level = _parse_level(raw_level)

        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, sql=%s, uvicorn=%s, sync=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_uvicorn,
        settings.log_level_sync,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
