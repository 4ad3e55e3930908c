"""
Root logging setup for the API process and the bootstrap command.
Entry points call `configure_logging` once; modules log through `logging.getLogger(__name__)`.
"""

from __future__ import annotations

import logging
import os

from library_catalog.common.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_configured = False


def _level_name() -> str:
    try:
        return get_settings().LOG_LEVEL
    except RuntimeError:
        # Incomplete settings still get logs at the raw LOG_LEVEL.
        return os.getenv("LOG_LEVEL", "INFO").strip().upper()


def configure_logging(level_name: str | None = None) -> None:
    """Install the catalog log format on the root logger; later calls are no-ops."""

    global _configured
    if _configured:
        return

    resolved = (level_name or _level_name()).upper()
    logging.basicConfig(level=getattr(logging, resolved, logging.INFO), format=LOG_FORMAT)
    # SQLAlchemy echoes every statement at INFO; keep it to warnings unless debugging.
    if resolved != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
