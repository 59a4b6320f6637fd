"""SQLite row store.

SQLite has no timestamp types, so both columns hold ISO 8601 text:
``import_ts`` without an offset and ``import_tz`` with ``+00:00``.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from systime._constants import DEFAULT_TABLE
from systime._convert import normalize_utc
from systime._errors import ERR_MSG_CONNECT_FAILED, DatabaseConnectionError
from systime._utils import validate_table_name
from systime.schema import COLUMNS, Row
from systime.storage._base import RowStore, StorageName

logger = logging.getLogger(__name__)

_COLUMN_LIST = ", ".join(COLUMNS)


@runtime_checkable
class SQLiteConnection(Protocol):
    """Minimal connection protocol for SQLite."""

    def execute(self, query: str, params: Any = ..., /) -> Any: ...
    def commit(self) -> None: ...
    def close(self) -> None: ...


class SQLiteRowStore(RowStore):
    name = StorageName.SQLITE

    def __init__(self, conn: SQLiteConnection, *, table: str = DEFAULT_TABLE) -> None:
        super().__init__(conn, table=table)

    def create_table(self, *, drop_existing: bool = False) -> None:
        if drop_existing:
            self._execute(f"DROP TABLE IF EXISTS {self.table}")
        self._execute(f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                memo TEXT,
                import_ts TEXT,
                import_tz TEXT
            )
        """)

    def insert(self, row: Row) -> Row:
        sql = f"""
            INSERT INTO {self.table} ({_COLUMN_LIST})
            VALUES (?, ?, ?)
            RETURNING {_COLUMN_LIST}
        """
        params = (
            row.memo,
            row.import_ts.isoformat(sep=" "),
            normalize_utc(row.import_tz).isoformat(sep=" "),
        )
        return _to_row(self._execute(sql, params)[0])

    def fetch_all(self) -> list[Row]:
        sql = f"SELECT {_COLUMN_LIST} FROM {self.table}"
        return [_to_row(r) for r in self._execute(sql)]

    def _execute(self, sql: str, params: tuple[Any, ...] = ()) -> list[tuple[Any, ...]]:
        try:
            cur = self._conn.execute(sql, params)
            rows = cur.fetchall()
            self._conn.commit()
            return rows
        except sqlite3.Error as e:
            raise self._query_error(sql, e) from e


def _to_row(record: tuple[Any, ...]) -> Row:
    memo, import_ts, import_tz = record
    return Row(
        memo=memo,
        import_ts=datetime.fromisoformat(import_ts),
        import_tz=datetime.fromisoformat(import_tz),
    )


def connect_sqlite(path: str = ":memory:", *, table: str = DEFAULT_TABLE) -> SQLiteRowStore:
    """Open a SQLite database and wrap it in a :class:`SQLiteRowStore`.

    Raises:
        InvalidIdentifierError: If ``table`` is not a valid identifier.
        DatabaseConnectionError: If the database file cannot be opened.
    """
    validate_table_name(table)
    logger.info("opening sqlite database %s", path)
    try:
        conn = sqlite3.connect(path)
    except sqlite3.Error as e:
        raise DatabaseConnectionError(
            ERR_MSG_CONNECT_FAILED,
            f"sqlite open {path!r} failed: {e}",
            wrapped=e,
        ) from e
    return SQLiteRowStore(conn, table=table)
