"""Exception hierarchy for systime."""

from __future__ import annotations


class SystimeError(Exception):
    """Base exception for systime errors.

    Provides dual messaging: a short user-facing message and
    internal details for logging.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class ParseError(SystimeError):
    """Raised when datetime text does not match the expected pattern."""

    def __init__(
        self,
        text: str,
        pattern: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(
            f"cannot parse {text!r} as {pattern}",
            internal_details,
            wrapped,
        )
        self.text = text
        self.pattern = pattern


class InvalidDatetimeError(SystimeError):
    """Raised when a datetime is naive where aware is expected, or the reverse.

    Also raised when shifting a datetime to UTC leaves the supported range.
    """


class ConfigLoadError(SystimeError):
    """Raised when the configuration file is missing, unreadable or malformed."""

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
        path: str = "",
    ) -> None:
        super().__init__(user_message, internal_details, wrapped)
        self.path = path


class StorageError(SystimeError):
    """Base exception for row store failures."""


class DatabaseConnectionError(StorageError):
    """Raised when the database cannot be reached."""


class QueryError(StorageError):
    """Raised when a statement fails to execute."""


class InvalidIdentifierError(StorageError):
    """Raised when a table name is not a valid SQL identifier."""


# Sanitized user-facing error message constants
ERR_MSG_NAIVE_DATETIME = "expected a timezone-aware datetime"
ERR_MSG_AWARE_DATETIME = "expected a naive datetime"
ERR_MSG_CONNECT_FAILED = "could not connect to database"
ERR_MSG_QUERY_FAILED = "database query failed"
ERR_MSG_CONFIG_NOT_FOUND = "configuration file not found"
ERR_MSG_CONFIG_MALFORMED = "configuration file is malformed"
ERR_MSG_OUT_OF_RANGE = "datetime is out of range"
