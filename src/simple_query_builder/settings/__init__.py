"""Settings module for simple_query_builder.

Configuration is built on Pydantic Settings. All fields are read from
environment variables with the ``SQB_`` prefix (or a local ``.env`` file)
and validated on load.

Configuration Sources (precedence order):
    1. Environment Variables (highest priority)
    2. ``.env`` file in the working directory
    3. Default Values in code (lowest priority)

Quick Start:
    >>> from simple_query_builder.settings import get_settings
    >>>
    >>> settings = get_settings()
    >>> settings.collapse_whitespace
    False
"""

from .main import _Settings, get_settings, _reload_settings
from .base import QueryBuilderBaseSettings

__all__ = [
    "get_settings",
    "QueryBuilderBaseSettings",
]
