"""PostgreSQL row store."""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import psycopg

from systime._constants import DEFAULT_TABLE
from systime._errors import ERR_MSG_CONNECT_FAILED, DatabaseConnectionError
from systime._utils import validate_table_name
from systime.config import PostgresqlConfig
from systime.schema import COLUMNS, Row
from systime.storage._base import RowStore, StorageName

logger = logging.getLogger(__name__)

_COLUMN_LIST = ", ".join(COLUMNS)


@runtime_checkable
class PgCursor(Protocol):
    """Minimal cursor protocol for PostgreSQL drivers."""

    def execute(self, query: str, params: Any = ..., /) -> Any: ...
    def fetchall(self) -> list[tuple[Any, ...]]: ...
    def close(self) -> None: ...


@runtime_checkable
class PgConnection(Protocol):
    """Minimal connection protocol for PostgreSQL drivers."""

    def cursor(self) -> PgCursor: ...
    def close(self) -> None: ...


class PostgresRowStore(RowStore):
    """Row store backed by ``timestamp`` and ``timestamptz`` columns.

    psycopg sends naive datetimes as ``timestamp`` and aware ones as
    ``timestamptz``. The session time zone is UTC so ``timestamptz`` values
    come back with a zero offset.
    """

    name = StorageName.POSTGRESQL

    def __init__(self, conn: PgConnection, *, table: str = DEFAULT_TABLE) -> None:
        super().__init__(conn, table=table)

    def create_table(self, *, drop_existing: bool = False) -> None:
        statements = []
        if drop_existing:
            statements.append(f"DROP TABLE IF EXISTS {self.table}")
        statements.append(f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                memo varchar,
                import_ts timestamp default now(),
                import_tz timestamp with time zone default now()
            )
        """)
        for sql in statements:
            self._execute(sql)

    def insert(self, row: Row) -> Row:
        sql = f"""
            INSERT INTO {self.table} ({_COLUMN_LIST})
            VALUES (%s, %s, %s)
            RETURNING {_COLUMN_LIST}
        """
        rows = self._execute(sql, (row.memo, row.import_ts, row.import_tz), fetch=True)
        return _to_row(rows[0])

    def fetch_all(self) -> list[Row]:
        sql = f"SELECT {_COLUMN_LIST} FROM {self.table}"
        return [_to_row(r) for r in self._execute(sql, fetch=True)]

    def _execute(
        self, sql: str, params: tuple[Any, ...] | None = None, *, fetch: bool = False
    ) -> list[tuple[Any, ...]]:
        cur = self._conn.cursor()
        try:
            cur.execute(sql, params)
            return cur.fetchall() if fetch else []
        except psycopg.Error as e:
            raise self._query_error(sql, e) from e
        finally:
            cur.close()


def _to_row(record: tuple[Any, ...]) -> Row:
    memo, import_ts, import_tz = record
    return Row(memo=memo, import_ts=import_ts, import_tz=import_tz)


def connect_postgres(
    config: PostgresqlConfig, *, table: str = DEFAULT_TABLE
) -> PostgresRowStore:
    """Open an autocommit connection and wrap it in a :class:`PostgresRowStore`.

    Raises:
        InvalidIdentifierError: If ``table`` is not a valid identifier.
        DatabaseConnectionError: If the server cannot be reached.
    """
    validate_table_name(table)
    logger.info(
        "connecting to postgresql host=%r port=%r database=%r",
        config.host, config.port, config.database,
    )
    try:
        conn = psycopg.connect(config.conninfo(), autocommit=True)
    except psycopg.Error as e:
        raise DatabaseConnectionError(
            ERR_MSG_CONNECT_FAILED,
            f"postgresql connect to host={config.host!r} port={config.port!r} failed: {e}",
            wrapped=e,
        ) from e
    try:
        conn.execute("SET TIME ZONE 'UTC'")
    except psycopg.Error as e:
        conn.close()
        raise DatabaseConnectionError(
            ERR_MSG_CONNECT_FAILED,
            f"postgresql session setup on host={config.host!r} failed: {e}",
            wrapped=e,
        ) from e
    return PostgresRowStore(conn, table=table)
