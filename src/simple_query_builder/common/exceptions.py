from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for query builder misuse.

    The builder itself never rejects fragment text; these codes cover the
    Python-level contract around it (argument types, configuration).

    Attributes:
        CONFIG_*: Configuration-related errors (1xxx)
        VALIDATION_*: Argument validation errors (2xxx)
    """
    # Configuration errors (1xxx)
    CONFIG_ERROR = "CONFIG_001"
    CONFIG_INVALID = "CONFIG_003"

    # Validation errors (2xxx)
    VALIDATION_ERROR = "VALIDATION_001"
    INVALID_ARGUMENT = "VALIDATION_002"
    MISSING_PARAMETER = "VALIDATION_003"


class QueryBuilderError(Exception):
    """Base exception for all simple_query_builder errors.

    Uses error codes for categorization instead of a deep hierarchy of
    exception classes.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

        # Lazy import to avoid circular dependency
        from simple_query_builder.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={"error_code": error_code.value, "details": self.details},
            exc_info=cause is not None,
        )

    def __str__(self) -> str:
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }

    @classmethod
    def from_error_code(
        cls,
        error_code: ErrorCode,
        message: str,
        **kwargs
    ) -> "QueryBuilderError":
        """Create exception from error code."""
        return cls(message=message, error_code=error_code, **kwargs)


def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> QueryBuilderError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        QueryBuilderError with CONFIG_INVALID code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return QueryBuilderError(
        message=message,
        error_code=ErrorCode.CONFIG_INVALID,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def validation_error(
    message: str,
    field: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> QueryBuilderError:
    """Create a validation error.

    Args:
        message: Error message
        field: Field that failed validation
        value: Invalid value
        **kwargs: Additional error details

    Returns:
        QueryBuilderError with VALIDATION_ERROR code
    """
    details = kwargs.get('details', {})
    if field:
        details["field"] = field
    if value is not None:
        details["value"] = str(value)

    return QueryBuilderError(
        message=message,
        error_code=ErrorCode.VALIDATION_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def invalid_argument_error(
    argument: str,
    value: Any,
    expected: str,
    **kwargs
) -> QueryBuilderError:
    """Create an error for an argument of the wrong type.

    Args:
        argument: Name of the offending argument
        value: Value that was passed
        expected: Human readable description of the accepted types

    Returns:
        QueryBuilderError with INVALID_ARGUMENT code
    """
    details = kwargs.get('details', {})
    details["argument"] = argument
    details["type"] = type(value).__name__

    return QueryBuilderError(
        message=f"Invalid {argument}: expected {expected}, got {type(value).__name__}",
        error_code=ErrorCode.INVALID_ARGUMENT,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def missing_parameter_error(
    parameter: str,
    operation: Optional[str] = None,
    **kwargs
) -> QueryBuilderError:
    """Create an error for a required parameter that was not supplied.

    Args:
        parameter: Name of the missing parameter
        operation: Builder operation that required it

    Returns:
        QueryBuilderError with MISSING_PARAMETER code
    """
    details = kwargs.get('details', {})
    details["parameter"] = parameter
    if operation:
        details["operation"] = operation

    message = f"Missing required parameter '{parameter}'"
    if operation:
        message = f"{message} for {operation}"

    return QueryBuilderError(
        message=message,
        error_code=ErrorCode.MISSING_PARAMETER,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )
