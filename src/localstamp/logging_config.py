"""Unified logging configuration for localstamp.

The library itself only creates module loggers. Applications (and the
``python -m localstamp`` entry point) call ``configure_logging`` once at
startup to get timestamped output.

Usage:
    >>> from localstamp.logging_config import configure_logging
    >>> configure_logging()

Configuration:
    - Log level: Set via LOCALSTAMP_LOG_LEVEL environment variable (default: INFO)
    - Format: "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
    - Date format: "%Y-%m-%d %H:%M:%S"
"""

import logging
import logging.config
import os
from typing import Any, Dict, Optional

from .constants import ENV_LOG_LEVEL


def get_log_level() -> str:
    """Get the log level from environment variable with fallback."""
    return (os.getenv(ENV_LOG_LEVEL, "INFO") or "INFO").upper()


def get_logging_config(level: Optional[str] = None) -> Dict[str, Any]:
    """Generate the logging configuration dictionary.

    Args:
        level: Explicit log level, overriding the environment
    """
    log_level = (level or get_log_level()).upper()

    log_format = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": log_format,
                "datefmt": date_format,
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "localstamp": {
                "handlers": ["default"],
                "level": log_level,
                "propagate": False,
            },
        },
        "root": {
            "level": log_level,
            "handlers": ["default"],
        },
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Configure logging for the application.

    This should be called once at application startup.
    """
    logging.config.dictConfig(get_logging_config(level))
