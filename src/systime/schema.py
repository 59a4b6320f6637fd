"""Row shape stored by the demo table."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from systime._convert import is_aware, normalize_utc
from systime._errors import (
    ERR_MSG_AWARE_DATETIME,
    ERR_MSG_NAIVE_DATETIME,
    InvalidDatetimeError,
)


@dataclass(frozen=True)
class Row:
    """A ``(memo, import_ts, import_tz)`` record.

    ``import_ts`` is a naive UTC instant. ``import_tz`` is aware and is
    normalized to UTC on construction.
    """

    memo: str
    import_ts: datetime
    import_tz: datetime

    def __post_init__(self) -> None:
        if is_aware(self.import_ts):
            raise InvalidDatetimeError(
                ERR_MSG_AWARE_DATETIME,
                f"import_ts must be naive, got {self.import_ts!r}",
            )
        if not is_aware(self.import_tz):
            raise InvalidDatetimeError(
                ERR_MSG_NAIVE_DATETIME,
                f"import_tz must be aware, got {self.import_tz!r}",
            )
        object.__setattr__(self, "import_tz", normalize_utc(self.import_tz))


COLUMNS = ("memo", "import_ts", "import_tz")
