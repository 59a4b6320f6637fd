"""Deterministic datetime formatting."""

from __future__ import annotations

import enum
from datetime import datetime

from systime._convert import is_aware, normalize_utc, to_offset_datetime_utc


class TimestampFormat(enum.StrEnum):
    US_DATETIME = "MM/DD/YYYY HH:MM:SS"
    ISO8601 = "YYYY-MM-DDTHH:MM:SS+HH:MM"
    ISO8601_FRACTIONAL = "YYYY-MM-DDTHH:MM:SS.fff+HH:MM"


class Precision(enum.StrEnum):
    """How many sub-second digits to emit. Digits are truncated, never rounded."""

    SECONDS = "seconds"
    MILLIS = "millis"
    MICROS = "micros"
    AUTO = "auto"
    """No fraction when zero, otherwise 3 or 6 digits as needed."""


DEFAULT_PRECISION: dict[TimestampFormat, Precision] = {
    TimestampFormat.US_DATETIME: Precision.SECONDS,
    TimestampFormat.ISO8601: Precision.SECONDS,
    TimestampFormat.ISO8601_FRACTIONAL: Precision.AUTO,
}


def format_datetime(
    value: datetime,
    fmt: TimestampFormat,
    *,
    precision: Precision | None = None,
) -> str:
    """Format an instant or offset datetime as text.

    Naive values are instants and are rendered as UTC. Aware values are
    normalized to UTC first, so the same absolute time always yields the
    same text.

    Args:
        value: The datetime to format.
        fmt: The output layout.
        precision: Sub-second digits to include. Defaults to the format's
            entry in :data:`DEFAULT_PRECISION`.

    Returns:
        The formatted text.
    """
    if precision is None:
        precision = DEFAULT_PRECISION[fmt]
    utc = normalize_utc(value) if is_aware(value) else to_offset_datetime_utc(value)

    fraction = _fraction(utc.microsecond, precision)
    if fmt == TimestampFormat.US_DATETIME:
        return (
            f"{utc.month:02d}/{utc.day:02d}/{utc.year:04d} "
            f"{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}{fraction}"
        )
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}{fraction}+00:00"
    )


def _fraction(microsecond: int, precision: Precision) -> str:
    if precision == Precision.SECONDS:
        return ""
    if precision == Precision.MILLIS:
        return f".{microsecond // 1000:03d}"
    if precision == Precision.MICROS:
        return f".{microsecond:06d}"
    # AUTO
    if microsecond == 0:
        return ""
    if microsecond % 1000 == 0:
        return f".{microsecond // 1000:03d}"
    return f".{microsecond:06d}"
