"""Abstract base class for row stores."""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any

from systime._constants import DEFAULT_TABLE
from systime._errors import ERR_MSG_QUERY_FAILED, QueryError
from systime._utils import validate_table_name
from systime.schema import Row

logger = logging.getLogger(__name__)


class StorageName(enum.StrEnum):
    POSTGRESQL = "postgresql"
    DUCKDB = "duckdb"
    SQLITE = "sqlite"


class RowStore(ABC):
    """A single table holding ``(memo, import_ts, import_tz)`` rows.

    Backends convert rows before writing and after reading so that
    ``fetch_all`` returns exactly what ``insert`` was given.
    """

    name: StorageName

    def __init__(self, conn: Any, *, table: str = DEFAULT_TABLE) -> None:
        validate_table_name(table)
        self._conn = conn
        self.table = table

    @abstractmethod
    def create_table(self, *, drop_existing: bool = False) -> None: ...

    @abstractmethod
    def insert(self, row: Row) -> Row:
        """Insert ``row`` and return the row as stored."""

    @abstractmethod
    def fetch_all(self) -> list[Row]: ...

    def close(self) -> None:
        logger.debug("closing %s store", self.name)
        self._conn.close()

    def __enter__(self) -> RowStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _query_error(self, sql: str, e: Exception) -> QueryError:
        logger.debug("%s query failed: %s", self.name, sql.strip())
        return QueryError(
            ERR_MSG_QUERY_FAILED,
            f"{self.name} query on table {self.table!r} failed: {e}",
            wrapped=e,
        )
