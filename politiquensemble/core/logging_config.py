"""
Logging Configuration Module.

Centralised logging setup for the Politiquensemble backend. Console logging
only; the hosting platform collects stdout.
"""

import logging
import logging.config
from typing import Optional

from .config import settings

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"

# Third-party libraries (reduce noise)
MODULE_LOG_LEVELS = {
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "httpx": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "WARNING",
}


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Override the application level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Override the format (simple, detailed)
    """
    level = (log_level or settings.LOG_LEVEL).upper()
    fmt = SIMPLE_FORMAT if (log_format or settings.LOG_FORMAT) == "simple" else DETAILED_FORMAT

    loggers = {
        name: {"level": module_level, "handlers": ["console"], "propagate": False}
        for name, module_level in MODULE_LOG_LEVELS.items()
    }
    loggers["politiquensemble"] = {"level": level, "handlers": ["console"], "propagate": False}

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": fmt},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": loggers,
        "root": {"level": level, "handlers": ["console"]},
    })


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
