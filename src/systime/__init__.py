"""systime - Round-trip datetimes through text and timestamp/timestamptz columns."""

from __future__ import annotations

try:
    from systime._version import __version__
except ModuleNotFoundError:  # editable install without VCS metadata
    __version__ = "0.0.0.dev0"

from systime._convert import (
    from_epoch_ns,
    normalize_utc,
    now,
    to_epoch_ns,
    to_instant,
    to_offset_datetime_utc,
)
from systime._errors import (
    ConfigLoadError,
    DatabaseConnectionError,
    InvalidDatetimeError,
    InvalidIdentifierError,
    ParseError,
    QueryError,
    StorageError,
    SystimeError,
)
from systime._formatting import Precision, TimestampFormat, format_datetime
from systime._parsing import DatetimePattern, parse_any, parse_datetime
from systime.config import Config, PostgresqlConfig, StorageConfig, load_config
from systime.schema import Row

__all__ = [
    "parse_datetime",
    "parse_any",
    "format_datetime",
    "to_instant",
    "to_offset_datetime_utc",
    "normalize_utc",
    "now",
    "to_epoch_ns",
    "from_epoch_ns",
    "load_config",
    "Config",
    "PostgresqlConfig",
    "StorageConfig",
    "DatetimePattern",
    "Precision",
    "TimestampFormat",
    "Row",
    "SystimeError",
    "ParseError",
    "InvalidDatetimeError",
    "ConfigLoadError",
    "StorageError",
    "DatabaseConnectionError",
    "QueryError",
    "InvalidIdentifierError",
]
