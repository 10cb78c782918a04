"""Logging configuration helpers shared by the Grocy client modules."""
from __future__ import annotations

import logging
import logging.config
from typing import Any, Dict, Optional

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(tag)s] %(name)s: %(message)s"
DEFAULT_TAG = "-"


class TagFilter(logging.Filter):
    """Make sure every record carries a ``tag`` attribute for the formatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "tag"):
            record.tag = DEFAULT_TAG
        return True


class TaggedLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that injects a fixed tag into every record."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("tag", self.extra["tag"])
        kwargs["extra"] = extra
        return msg, kwargs


def build_logging_config(
    level: str = "INFO",
    job_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Return a dictConfig mapping that logs to stdout."""
    fmt = DEFAULT_FORMAT
    if job_name:
        fmt = f"%(asctime)s %(levelname)s {job_name} [%(tag)s] %(name)s: %(message)s"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "tag": {"()": TagFilter},
        },
        "formatters": {
            "default": {"format": fmt},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "default",
                "filters": ["tag"],
            },
        },
        "loggers": {
            # urllib3 logs every connection at DEBUG
            "urllib3": {"level": "WARNING"},
        },
        "root": {
            "level": level.upper(),
            "handlers": ["stdout"],
        },
    }


def setup_logging(level: str = "INFO", job_name: Optional[str] = None) -> None:
    """Apply the stdout logging configuration to the root logger."""
    logging.config.dictConfig(build_logging_config(level=level, job_name=job_name))


def get_tagged_logger(name: str, tag: str) -> TaggedLoggerAdapter:
    """Return a logger whose records are labelled with ``tag``."""
    return TaggedLoggerAdapter(logging.getLogger(name), {"tag": tag})
