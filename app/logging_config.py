"""Logging setup for the Contacts API.

The handler layout is derived from :class:`app.core.Settings`:
``LOG_LEVEL`` sets the root level, ``LOG_FORMAT`` the line layout and
``LOG_FILE`` adds a file handler next to the console one. Uvicorn's
loggers are left alone and propagate into the same handlers.
"""

import logging
import logging.config
from pathlib import Path

from .core import Settings, get_settings

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_logging_config(settings: Settings) -> dict:
    """Return a ``dictConfig`` mapping for the given settings.

    Args:
        settings (Settings): Application settings.

    Returns:
        dict: Configuration accepted by ``logging.config.dictConfig``.
    """
    level = settings.LOG_LEVEL.upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        }
    }
    if settings.LOG_FILE:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": str(Path(settings.LOG_FILE).resolve()),
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": settings.LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handlers)},
    }


def setup_logging(settings: Settings | None = None) -> None:
    """Configure the root logger from the application settings.

    Does nothing when the root logger already has handlers, so building
    the app again (tests, reloads) does not duplicate output.
    """
    if logging.getLogger().handlers:
        return
    logging.config.dictConfig(build_logging_config(settings or get_settings()))
