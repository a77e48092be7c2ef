import copy
import logging
from logging.config import dictConfig
from typing import Any, Dict


LOGGING_CONFIG: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        },
    },
    "handlers": {
        "default": {
            "formatter": "default",
            "class": "logging.StreamHandler",
            # stdout carries the command output (paths, fingerprints)
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "jwkpem": {
            "handlers": ["default"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}


def setup_logging(level: str = "WARNING") -> None:
    """
    Configure the ``jwkpem`` logger hierarchy.

    Library code only creates loggers; the command line entry points call
    this once at startup.

    Args:
        level: Level name for the package logger (e.g. "INFO", "DEBUG").
    """
    config = copy.deepcopy(LOGGING_CONFIG)
    config["loggers"]["jwkpem"]["level"] = level.upper()
    dictConfig(config)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"jwkpem.{name}")
