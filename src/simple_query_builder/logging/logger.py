"""Structured logging for simple_query_builder.

Records are rendered as one JSON object per line. Fields passed through
``extra=`` (for example the rendered ``sql`` and its ``sql_length``) become
top-level keys, and records emitted while a span is active carry its trace
and span ids. Configuration is declarative via ``logging.config.dictConfig``.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from opentelemetry import trace

FORMATTER_NAME = "sqb_json"
FILTER_NAME = "sqb_context"

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _standard_attributes() -> Set[str]:
    """Attribute names every ``LogRecord`` has, so only extras are copied."""
    blank = logging.makeLogRecord({})
    return set(blank.__dict__) | {"asctime", "message"}


_STANDARD_ATTRIBUTES = _standard_attributes()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _span_fields() -> Dict[str, str]:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {}
    return {
        "trace_id": format(span_context.trace_id, "032x"),
        "span_id": format(span_context.span_id, "016x"),
    }


class CustomJsonFormatter(logging.Formatter):
    """Render a record as JSON with its extras and the active span ids."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRIBUTES
        }
        payload.update(
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
        )
        payload.update(_span_fields())

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def _normalize_level(level: str) -> str:
    normalized = str(level).strip().upper()
    if normalized not in _LEVEL_NAMES:
        from simple_query_builder.common.exceptions import validation_error
        raise validation_error(
            f"Unknown log level '{level}'; expected one of {', '.join(_LEVEL_NAMES)}",
            field="level",
            value=level,
        )
    return normalized


def build_logging_config(level: str) -> Dict[str, Any]:
    """Return the ``dictConfig`` mapping for a console JSON handler at ``level``."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            FORMATTER_NAME: {"()": CustomJsonFormatter},
        },
        "filters": {
            FILTER_NAME: {"()": "simple_query_builder.logging.filters.ContextFilter"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": FORMATTER_NAME,
                "filters": [FILTER_NAME],
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def setup_logging(level: Optional[str] = None) -> None:
    """Install JSON console logging on the root logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL, case-insensitive.
            Defaults to the ``log_level`` setting.

    Raises:
        QueryBuilderError: With ``VALIDATION_ERROR`` for an unknown level.
    """
    if level is None:
        from simple_query_builder.settings import get_settings
        level = get_settings().log_level

    logging.config.dictConfig(build_logging_config(_normalize_level(level)))
