"""Centralized logging configuration.

The storage layer and the audit ledger log under their module names; the
SQL driver stack is noisy at INFO. Each group gets its own level setting so
one can be turned up without flooding the others.

Usage:
    from boatrecords.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, right after open_storage()
"""

import logging
import sys

from boatrecords.config import Settings, get_settings

# Settings field → logger names it controls
LOGGER_GROUPS: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_storage": (
        "boatrecords.infrastructure.persistence",
        "boatrecords.infrastructure.database",
        "boatrecords.infrastructure.dependencies",
    ),
    "log_level_audit": (
        "boatrecords.application.repositories.audit_repository",
        "boatrecords.application.services.audit_service",
    ),
}


def resolve_levels(settings: Settings) -> dict[str, int]:
    """Numeric level per logger name, as ``setup_logging`` would apply them."""
    levels: dict[str, int] = {}
    for field_name, logger_names in LOGGER_GROUPS.items():
        level = _parse_level(getattr(settings, field_name))
        for name in logger_names:
            levels[name] = level
    return levels


def setup_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(settings.log_format))
        root.addHandler(handler)

    for name, level in resolve_levels(settings).items():
        logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Log levels: root=%s sql=%s storage=%s audit=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_storage,
        settings.log_level_audit,
    )


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
