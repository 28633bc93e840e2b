"""Logging infrastructure for simple_query_builder.

This module provides structured logging with JSON output, context tracking,
and OpenTelemetry trace correlation.
"""

from simple_query_builder.logging.filters import (
    ContextFilter,
    clear_request_context,
    set_logging_context,
    set_request_context,
)
from simple_query_builder.logging.logger import (
    CustomJsonFormatter,
    build_logging_config,
    get_logger,
    setup_logging,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "build_logging_config",
    "CustomJsonFormatter",
    "ContextFilter",
    "set_logging_context",
    "set_request_context",
    "clear_request_context",
]
