# src/zip_bundler/logging_conf.py
from __future__ import annotations
import logging
import logging.config
from typing import Any, Dict, Optional

from .config import settings


def build_logging_config(level: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "basic": {
                "format": "%(asctime)s | %(levelname)-7s | %(name)s | %(correlation_id)s | %(message)s",
            },
            "uvicorn": {
                "format": "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
            },
        },
        "filters": {
            "correlation": {"()": "zip_bundler.middleware.correlation.CorrelationIdFilter"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "basic",
                "filters": ["correlation"],
                "level": level,
            },
            "uvicorn": {
                "class": "logging.StreamHandler",
                "formatter": "uvicorn",
                "level": "INFO",
            },
        },
        "loggers": {
            "": {"handlers": ["console"], "level": level},
            "uvicorn": {"handlers": ["uvicorn"], "level": "INFO", "propagate": False},
            "uvicorn.error": {"handlers": ["uvicorn"], "level": "INFO", "propagate": False},
            "uvicorn.access": {"handlers": ["uvicorn"], "level": "INFO", "propagate": False},
            "httpx": {"handlers": ["console"], "level": "WARNING", "propagate": False},
            "app": {"handlers": ["console"], "level": level, "propagate": False},
        },
    }


def setup_logging(level: Optional[str] = None) -> None:
    logging.config.dictConfig(build_logging_config((level or settings.log_level).upper()))
