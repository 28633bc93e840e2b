import logging
from typing import Optional

from pydantic import Field, ValidationError, field_validator

from simple_query_builder.common.exceptions import configuration_error
from .base import QueryBuilderBaseSettings


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class _Settings(QueryBuilderBaseSettings):

    collapse_whitespace: bool = Field(
        default=False,
        description=(
            "Collapse runs of whitespace in rendered statements into a single space. "
            "Off by default so output stays byte-compatible; note that whitespace inside "
            "caller-supplied literals is collapsed too."
        )
    )

    log_rendered_sql: bool = Field(
        default=False,
        description="Log every rendered statement at DEBUG level"
    )

    log_level: str = Field(
        default="INFO",
        description="Default level used by setup_logging() (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize the log level name.

        Args:
            v: The log level value

        Returns:
            Upper-cased level name
        """
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. "
                f"Expected one of: {', '.join(_LOG_LEVELS)}"
            )
        return level

    @property
    def log_level_number(self) -> int:
        """Numeric logging level for ``log_level``."""
        return logging.getLevelName(self.log_level)


_settings: Optional[_Settings] = None


def get_settings(force_reload: bool = False) -> _Settings:
    """Get the singleton settings instance for the application.

    Settings are loaded from ``SQB_``-prefixed environment variables and an
    optional ``.env`` file on first access.

    Args:
        force_reload: If True, creates a new Settings instance even if
                     one already exists. Useful for testing or when
                     environment variables have changed.

    Returns:
        Settings: The singleton Settings instance

    Raises:
        QueryBuilderError: If the environment holds invalid values

    Example:
        ```python
        settings = get_settings()
        settings2 = get_settings()
        assert settings is settings2
        ```

    Note:
        This function is thread-safe for reading but not for the initial
        creation.
    """
    global _settings

    if _settings is None or force_reload:
        try:
            _settings = _Settings()
        except ValidationError as exc:
            fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
            raise configuration_error(
                f"Invalid query builder settings: {', '.join(fields)}",
                config_key=fields[0] if fields else None,
                cause=exc,
            ) from exc

    return _settings


def _reload_settings() -> _Settings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.

    Returns:
        A fresh _Settings instance
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
