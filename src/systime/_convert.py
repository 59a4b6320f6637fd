"""Conversions between naive instants, aware datetimes and epoch time.

An *instant* is a naive ``datetime`` whose wall clock is UTC; it is what a
``timestamp without time zone`` column holds. An *offset datetime* is an
aware ``datetime``; it maps to ``timestamp with time zone``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from systime._errors import (
    ERR_MSG_AWARE_DATETIME,
    ERR_MSG_NAIVE_DATETIME,
    ERR_MSG_OUT_OF_RANGE,
    InvalidDatetimeError,
)

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_NS_PER_US = 1_000


def is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


def normalize_utc(value: datetime) -> datetime:
    """Return ``value`` shifted to a UTC offset of zero."""
    if not is_aware(value):
        raise InvalidDatetimeError(
            ERR_MSG_NAIVE_DATETIME,
            f"normalize_utc got naive datetime {value!r}",
        )
    return _as_utc(value)


def to_instant(value: datetime) -> datetime:
    """Drop the offset, keeping the absolute point in time as UTC wall clock."""
    if not is_aware(value):
        raise InvalidDatetimeError(
            ERR_MSG_NAIVE_DATETIME,
            f"to_instant got naive datetime {value!r}",
        )
    return _as_utc(value).replace(tzinfo=None)


def to_offset_datetime_utc(instant: datetime) -> datetime:
    """Reinterpret a naive instant as UTC."""
    if is_aware(instant):
        raise InvalidDatetimeError(
            ERR_MSG_AWARE_DATETIME,
            f"to_offset_datetime_utc got aware datetime {instant!r}",
        )
    return instant.replace(tzinfo=timezone.utc)


def now() -> datetime:
    """Current system clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_epoch_ns(value: datetime) -> int:
    """Nanoseconds since the Unix epoch, the way a system clock stores time.

    Naive values are taken to be instants (UTC wall clock).
    """
    if not is_aware(value):
        value = to_offset_datetime_utc(value)
    return (value - UNIX_EPOCH) // timedelta(microseconds=1) * _NS_PER_US


def from_epoch_ns(ns: int) -> datetime:
    """Aware UTC datetime for a nanosecond epoch value, truncated to microseconds."""
    return UNIX_EPOCH + timedelta(microseconds=ns // _NS_PER_US)


def _as_utc(value: datetime) -> datetime:
    # Offsets near year 1 or 9999 can shift the UTC value past datetime's range.
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as e:
        raise InvalidDatetimeError(
            ERR_MSG_OUT_OF_RANGE,
            f"{value.isoformat()} has no UTC representation: {e}",
            wrapped=e,
        ) from e
