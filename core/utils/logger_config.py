# core/utils/logger_config.py

import logging
import os
from contextvars import ContextVar
from logging.config import dictConfig

from core.utils.constants import COLORS, RESET

trace_id_var = ContextVar("trace_id", default="-")


class TraceIdFilter(logging.Filter):
    def filter(self, record):
        record.trace_id = trace_id_var.get()
        return True


class ShortNameFormatter(logging.Formatter):
    def format(self, record):
        record.shortname = record.name.rsplit(".", 1)[-1]
        record.trace_id = getattr(record, "trace_id", "-")
        color = COLORS.get(record.levelname, "\033[97m")
        message = super().format(record)
        return f"{color}{message}{RESET}"


def setup_logger(level=None):
    level = (level or os.environ.get("LOG_LEVEL", "DEBUG")).upper()
    log_format = "[%(levelname)s] %(asctime)s | trace_id: %(trace_id)s | %(shortname)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    quiet = {"level": "WARNING", "handlers": ["default"], "propagate": False}

    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "short": {
                "()": ShortNameFormatter,
                "fmt": log_format,
                "datefmt": date_format
            }
        },
        "filters": {
            "trace_id": {
                "()": TraceIdFilter
            }
        },
        "handlers": {
            "default": {
                "level": level,
                "formatter": "short",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "filters": ["trace_id"]
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        },
        "loggers": {
            "uvicorn.error": {"level": "INFO", "handlers": ["default"], "propagate": False},
            "uvicorn.access": quiet,
            "httpx": quiet,
            "urllib3": quiet,
            "google.auth": quiet,
            "firebase_admin": quiet,
        },
    })
