"""Datetime text parsing."""

from __future__ import annotations

import enum
import re
from datetime import datetime, timedelta, timezone

from systime._constants import COMPACT_YEAR_PIVOT, MAX_FRACTION_DIGITS
from systime._errors import ParseError


class DatetimePattern(enum.StrEnum):
    COMPACT = "YYMMDDHHMMSS+HHMM"
    RFC3339 = "RFC3339"
    RFC3339_FRACTIONAL = "RFC3339 with fractional seconds"


_COMPACT_RE = re.compile(
    r"""
    (?P<year>[0-9]{2})(?P<month>[0-9]{2})(?P<day>[0-9]{2})
    (?P<hour>[0-9]{2})(?P<minute>[0-9]{2})(?P<second>[0-9]{2})
    (?P<sign>[+-])(?P<off_hour>[0-9]{2})(?P<off_minute>[0-9]{2})
    """,
    re.VERBOSE,
)

_RFC3339_RE = re.compile(
    r"""
    (?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})
    [Tt\ ]
    (?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})
    (?:\.(?P<fraction>[0-9]+))?
    (?:
        (?P<zulu>[Zz])
        |(?P<sign>[+-])(?P<off_hour>[0-9]{2}):(?P<off_minute>[0-9]{2})
    )
    """,
    re.VERBOSE,
)


def parse_datetime(
    text: str, pattern: DatetimePattern = DatetimePattern.RFC3339
) -> datetime:
    """Parse text into a timezone-aware datetime.

    Args:
        text: The datetime text, e.g. ``"961219163957+0000"`` or
            ``"2018-01-26T18:30:09.453Z"``.
        pattern: Which layout ``text`` is expected to follow.

    Returns:
        An aware datetime carrying the parsed UTC offset. Fractional
        seconds are kept to microsecond precision; further digits are
        truncated.

    Raises:
        ParseError: If ``text`` does not match ``pattern`` or a field is
            out of range. Also raised when ``pattern`` is not a
            :class:`DatetimePattern` value.
    """
    if not isinstance(text, str):
        raise ParseError(repr(text), pattern, f"expected str, got {type(text).__name__}")
    try:
        pattern = DatetimePattern(pattern)
    except ValueError as e:
        raise ParseError(text, str(pattern), "unknown datetime pattern", wrapped=e) from e

    if pattern == DatetimePattern.COMPACT:
        m = _COMPACT_RE.fullmatch(text)
        if m is None:
            raise ParseError(text, pattern, "text does not match compact layout")
        return _build(text, pattern, m.groupdict(), _expand_year(int(m["year"])))

    m = _RFC3339_RE.fullmatch(text)
    if m is None:
        raise ParseError(text, pattern, "text does not match RFC 3339 layout")
    if pattern == DatetimePattern.RFC3339_FRACTIONAL and m["fraction"] is None:
        raise ParseError(text, pattern, "fractional seconds are required")
    return _build(text, pattern, m.groupdict(), int(m["year"]))


def parse_any(text: str) -> datetime:
    """Parse text trying every :class:`DatetimePattern` in order."""
    for pattern in DatetimePattern:
        try:
            return parse_datetime(text, pattern)
        except ParseError:
            continue
    raise ParseError(
        text,
        " | ".join(DatetimePattern),
        "text matches none of the supported patterns",
    )


def _expand_year(yy: int) -> int:
    return 2000 + yy if yy < COMPACT_YEAR_PIVOT else 1900 + yy


def _build(
    text: str, pattern: DatetimePattern, parts: dict[str, str | None], year: int
) -> datetime:
    fraction = parts.get("fraction") or ""
    microsecond = int(fraction[:MAX_FRACTION_DIGITS].ljust(MAX_FRACTION_DIGITS, "0"))
    try:
        tz = _offset(parts)
        return datetime(
            year,
            int(parts["month"]),
            int(parts["day"]),
            int(parts["hour"]),
            int(parts["minute"]),
            int(parts["second"]),
            microsecond,
            tzinfo=tz,
        )
    except ValueError as e:
        raise ParseError(text, pattern, f"field out of range: {e}", wrapped=e) from e


def _offset(parts: dict[str, str | None]) -> timezone:
    if parts.get("zulu"):
        return timezone.utc
    hours = int(parts["off_hour"])
    minutes = int(parts["off_minute"])
    if hours > 23 or minutes > 59:
        raise ValueError(f"offset {hours:02d}:{minutes:02d} out of range")
    delta = timedelta(hours=hours, minutes=minutes)
    if not delta:
        return timezone.utc
    return timezone(-delta if parts["sign"] == "-" else delta)
