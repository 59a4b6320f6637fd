"""DuckDB row store."""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import duckdb

from systime._constants import DEFAULT_TABLE
from systime._convert import to_instant, to_offset_datetime_utc
from systime._errors import ERR_MSG_CONNECT_FAILED, DatabaseConnectionError
from systime._utils import validate_table_name
from systime.schema import COLUMNS, Row
from systime.storage._base import RowStore, StorageName

logger = logging.getLogger(__name__)

_COLUMN_LIST = ", ".join(COLUMNS)


@runtime_checkable
class DuckDBConnection(Protocol):
    """Minimal connection protocol for DuckDB."""

    def execute(self, query: str, parameters: Any = ..., /) -> Any: ...
    def close(self) -> None: ...


class DuckDBRowStore(RowStore):
    """Row store backed by DuckDB ``TIMESTAMP`` and ``TIMESTAMPTZ`` columns.

    ``TIMESTAMPTZ`` values cross the boundary as naive UTC instants and are
    cast inside DuckDB, with the session time zone pinned to UTC.
    """

    name = StorageName.DUCKDB

    def __init__(self, conn: DuckDBConnection, *, table: str = DEFAULT_TABLE) -> None:
        super().__init__(conn, table=table)

    def create_table(self, *, drop_existing: bool = False) -> None:
        if drop_existing:
            self._execute(f"DROP TABLE IF EXISTS {self.table}")
        self._execute(f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                memo VARCHAR,
                import_ts TIMESTAMP,
                import_tz TIMESTAMPTZ
            )
        """)

    def insert(self, row: Row) -> Row:
        sql = f"""
            INSERT INTO {self.table} ({_COLUMN_LIST})
            VALUES (?, CAST(? AS TIMESTAMP), CAST(CAST(? AS TIMESTAMP) AS TIMESTAMPTZ))
            RETURNING memo, import_ts, CAST(import_tz AS TIMESTAMP)
        """
        params = [row.memo, row.import_ts, to_instant(row.import_tz)]
        return _to_row(self._execute(sql, params)[0])

    def fetch_all(self) -> list[Row]:
        sql = f"SELECT memo, import_ts, CAST(import_tz AS TIMESTAMP) FROM {self.table}"
        return [_to_row(r) for r in self._execute(sql)]

    def _execute(self, sql: str, params: list[Any] | None = None) -> list[tuple[Any, ...]]:
        try:
            result = self._conn.execute(sql, params or [])
            return result.fetchall()
        except duckdb.Error as e:
            raise self._query_error(sql, e) from e


def _to_row(record: tuple[Any, ...]) -> Row:
    memo, import_ts, import_tz = record
    return Row(memo=memo, import_ts=import_ts, import_tz=to_offset_datetime_utc(import_tz))


def connect_duckdb(path: str = ":memory:", *, table: str = DEFAULT_TABLE) -> DuckDBRowStore:
    """Open a DuckDB database and wrap it in a :class:`DuckDBRowStore`.

    Raises:
        InvalidIdentifierError: If ``table`` is not a valid identifier.
        DatabaseConnectionError: If the database file cannot be opened.
    """
    validate_table_name(table)
    logger.info("opening duckdb database %s", path)
    try:
        conn = duckdb.connect(path)
    except duckdb.Error as e:
        raise DatabaseConnectionError(
            ERR_MSG_CONNECT_FAILED,
            f"duckdb open {path!r} failed: {e}",
            wrapped=e,
        ) from e
    try:
        conn.execute("SET TimeZone = 'UTC'")
    except duckdb.Error as e:
        conn.close()
        raise DatabaseConnectionError(
            ERR_MSG_CONNECT_FAILED,
            f"duckdb session setup on {path!r} failed: {e}",
            wrapped=e,
        ) from e
    return DuckDBRowStore(conn, table=table)
