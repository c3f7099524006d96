"""Logging setup: console output plus a size-rotating log file."""
import logging
import logging.config
from pathlib import Path
from typing import Any

from core.config import Settings

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def build_logging_config(settings: Settings) -> dict[str, Any]:
    """Build a dictConfig mapping for the given settings."""
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "level": "DEBUG",
        },
    }
    if settings.log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "file",
            "level": "INFO",
            "filename": settings.log_file,
            "maxBytes": settings.log_max_bytes,
            "backupCount": settings.log_backup_count,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT},
            "file": {"format": FILE_FORMAT},
        },
        "handlers": handlers,
        "root": {
            "level": settings.log_level,
            "handlers": list(handlers),
        },
        "loggers": {
            # Access lines come from our own middleware
            "uvicorn.access": {"level": "WARNING"},
        },
    }


def configure_logging(settings: Settings) -> None:
    """Install handlers on the root logger."""
    if settings.log_file:
        Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(settings))
    logging.getLogger(__name__).debug(
        "Logging configured level=%s file=%s", settings.log_level, settings.log_file or "-",
    )
