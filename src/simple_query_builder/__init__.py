from simple_query_builder.__version__ import __version__

from simple_query_builder.query_builder import (
    QueryBuilder,
    QueryBuilderFactory,
    Spec,
    get_query_builder,
    new_spec,
)

from simple_query_builder.common.exceptions import QueryBuilderError, ErrorCode

from simple_query_builder.logging import get_logger, setup_logging
from simple_query_builder.settings import get_settings


__all__ = [
    "__version__",

    "QueryBuilder",
    "Spec",
    "QueryBuilderFactory",
    "get_query_builder",
    "new_spec",

    # Exceptions (public API)
    "QueryBuilderError",
    "ErrorCode",

    # Configuration
    "get_logger",
    "setup_logging",
    "get_settings",
]
