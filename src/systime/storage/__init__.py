"""Row stores for the ``(memo, import_ts, import_tz)`` demo table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from systime._errors import ConfigLoadError
from systime.storage._base import RowStore, StorageName

if TYPE_CHECKING:
    from systime.config import Config

__all__ = [
    "RowStore",
    "StorageName",
    "open_store",
]


def open_store(config: Config) -> RowStore:
    """Open the row store selected by ``config.storage.backend``.

    Backend modules are imported lazily so that a missing optional driver
    only matters when that backend is used.

    Raises:
        ConfigLoadError: If the backend name is unknown.
        DatabaseConnectionError: If the database cannot be reached.
    """
    backend = config.storage.backend
    table = config.storage.table
    if backend == StorageName.POSTGRESQL:
        from systime.storage.postgres import connect_postgres

        return connect_postgres(config.postgresql, table=table)
    if backend == StorageName.DUCKDB:
        from systime.storage.duckdb import connect_duckdb

        return connect_duckdb(config.storage.path, table=table)
    if backend == StorageName.SQLITE:
        from systime.storage.sqlite import connect_sqlite

        return connect_sqlite(config.storage.path, table=table)

    raise ConfigLoadError(
        f"unknown storage backend: {backend!r}",
        f"storage.backend={backend!r}; available: {', '.join(StorageName)}",
        path=str(config.path or ""),
    )
