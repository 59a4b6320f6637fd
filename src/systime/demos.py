"""The three demo operations.

Each operation writes human-readable lines to a text stream and can be
run on its own. :class:`Demo` names them; :func:`run_demos` runs a
selection in a fixed order.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import TextIO

from systime._constants import DEMO_IMPORT_TS, DEMO_IMPORT_TZ, DEMO_MEMO
from systime._convert import from_epoch_ns, now, to_epoch_ns, to_instant
from systime._formatting import Precision, TimestampFormat, format_datetime
from systime._parsing import DatetimePattern, parse_datetime
from systime.config import Config
from systime.schema import Row
from systime.storage import RowStore, open_store

logger = logging.getLogger(__name__)


class Demo(enum.Flag):
    DB_ROUNDTRIP = 0b001
    CONFIG_DUMP = 0b010
    DATETIME_DEMO = 0b100

    @classmethod
    def all(cls) -> Demo:
        return cls.DB_ROUNDTRIP | cls.CONFIG_DUMP | cls.DATETIME_DEMO

    @classmethod
    def from_level(cls, level: int) -> Demo:
        """Selection for a numeric level bitmap. Unknown bits are ignored."""
        if level < 0:
            raise ValueError(f"level must be non-negative, got {level}")
        return cls(level & cls.all().value)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> Demo:
        """Selection for names like ``"db-roundtrip"`` or ``"DATETIME_DEMO"``."""
        selected = cls(0)
        for name in names:
            key = name.strip().upper().replace("-", "_")
            try:
                selected |= cls[key]
            except KeyError:
                raise ValueError(
                    f"unknown demo: {name!r}. Available: "
                    f"{', '.join(cli_name(d) for d in cls)}"
                ) from None
        return selected


def cli_name(demo: Demo) -> str:
    return demo.name.lower().replace("_", "-")


def _us(value: datetime) -> str:
    return format_datetime(value, TimestampFormat.US_DATETIME)


def demo_row() -> Row:
    """The fixed row inserted by the database round trip."""
    return Row(
        memo=DEMO_MEMO,
        import_ts=to_instant(parse_datetime(DEMO_IMPORT_TS, DatetimePattern.COMPACT)),
        import_tz=parse_datetime(DEMO_IMPORT_TZ, DatetimePattern.COMPACT),
    )


def run_db_roundtrip(config: Config, w: TextIO, *, store: RowStore | None = None) -> Row:
    """Insert the demo row, print it, then print every row in the table.

    A store passed in is left open; one opened from ``config`` is closed.

    Returns:
        The row as returned by the insert.
    """
    owned = store is None
    if store is None:
        store = open_store(config)
    try:
        store.create_table()
        inserted = store.insert(demo_row())
        logger.info("inserted demo row into %s", store.table)
        w.write(
            f"inserted: memo = {inserted.memo}, "
            f"import_ts = {_us(inserted.import_ts)}, "
            f"import_tz = {_us(inserted.import_tz)}\n"
        )
        for row in store.fetch_all():
            w.write(
                f"memo = {row.memo}, "
                f"import_ts = {_us(row.import_ts)}, "
                f"import_tz = {_us(row.import_tz)}\n"
            )
        return inserted
    finally:
        if owned:
            store.close()


def run_config_dump(config: Config, w: TextIO) -> None:
    """Print the loaded configuration with the password masked."""
    shown = dataclasses.replace(config, postgresql=config.postgresql.redacted())
    w.write(f"cfg = {shown!r}, config_path={config.path}\n")


def run_datetime_demo(w: TextIO, *, clock: Callable[[], datetime] | None = None) -> None:
    """Print a series of parse, format and epoch round-trip results.

    ``clock`` defaults to the system clock.
    """
    current = (clock or now)()
    w.write(f"Current now() from SystemTime= {_us(current)}\n")

    rfc = parse_datetime("1996-12-19T16:39:57-00:00")
    w.write(f"0: RFC 3339 Datetime = {_us(rfc)}\n")

    dt = parse_datetime("961219163957+0000", DatetimePattern.COMPACT)
    w.write(f"1: Arbitrary Datetime = {_us(dt)}\n")
    back = from_epoch_ns(to_epoch_ns(dt))
    w.write(f"1: back_to_datetime from systemtime = {_us(back)}\n")

    for step, text in enumerate(
        ["2018-01-26T18:30:09.453Z", "2021-01-01T05:00:00.003Z"], start=2
    ):
        dt = parse_datetime(text)
        w.write(f"{step}: Arbitrary Datetime = {_us(dt)}\n")
        back = from_epoch_ns(to_epoch_ns(dt))
        w.write(f"{step}: back_to_datetime from systemtime = {_us(back)}\n")
        iso = format_datetime(back, TimestampFormat.ISO8601)
        w.write(f"{step}: back_to_datetime as ISO 8601 = {iso}\n")
        frac = format_datetime(
            back, TimestampFormat.ISO8601_FRACTIONAL, precision=Precision.AUTO
        )
        w.write(f"{step}: back_to_datetime as ISO 8601 fractional = {frac}\n")


def run_demos(selection: Demo, config: Config, w: TextIO) -> None:
    """Run each selected demo in declaration order."""
    for demo in Demo:
        if demo not in selection:
            continue
        logger.debug("running demo %s", cli_name(demo))
        if demo is Demo.DB_ROUNDTRIP:
            run_db_roundtrip(config, w)
        elif demo is Demo.CONFIG_DUMP:
            run_config_dump(config, w)
        elif demo is Demo.DATETIME_DEMO:
            run_datetime_demo(w)
