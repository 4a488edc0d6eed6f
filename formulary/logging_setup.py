"""Logging configuration shared by the API server and library callers.

Installs a single stdout handler on the root logger so module loggers work
without per-module setup, and routes uvicorn's loggers through it.
"""

import logging
from logging.config import dictConfig


def _dict_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(asctime)s %(levelname)s:%(name)s:%(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "uvicorn": {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.error": {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": level, "handlers": ["console"], "propagate": False},
        },
    }


def configure_logging(level: str = "INFO") -> None:
    """Configure logging once; a no-op if the root logger already has handlers."""
    root = logging.getLogger()
    if root.handlers:
        return
    dictConfig(_dict_config(level.upper()))
