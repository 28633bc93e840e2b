"""Common utilities and exceptions for simple_query_builder.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions inherit from
    QueryBuilderError and include structured error information.
"""

from simple_query_builder.common.exceptions import (
    QueryBuilderError,
    ErrorCode,
    # Helper functions
    configuration_error,
    validation_error,
    invalid_argument_error,
    missing_parameter_error,
)

__all__ = [
    # Base Exception and Error Codes
    "QueryBuilderError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "validation_error",
    "invalid_argument_error",
    "missing_parameter_error",
]
