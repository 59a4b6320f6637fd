"""Shared test fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from systime.config import Config, PostgresqlConfig, StorageConfig
from systime.storage.duckdb import connect_duckdb
from systime.storage.sqlite import connect_sqlite

UTC = timezone.utc
PLUS_0530 = timezone(timedelta(hours=5, minutes=30))
MINUS_0800 = timezone(timedelta(hours=-8))


@pytest.fixture
def sqlite_store():
    store = connect_sqlite(":memory:")
    store.create_table()
    yield store
    store.close()


@pytest.fixture
def duckdb_store():
    store = connect_duckdb(":memory:")
    store.create_table()
    yield store
    store.close()


@pytest.fixture
def sqlite_config():
    return Config(
        postgresql=PostgresqlConfig(username="theo", password="secret", host="localhost"),
        storage=StorageConfig(backend="sqlite", path=":memory:"),
    )


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        """
[postgresql]
username = "theo"
password = "secret"
host = "db.example.com"
port = "5432"
database = "systime"

[storage]
backend = "sqlite"
path = ":memory:"
table = "foo"
""",
        encoding="utf-8",
    )
    return path


SAMPLE_DATETIMES = [
    datetime(1996, 12, 19, 16, 39, 57, tzinfo=UTC),
    datetime(2018, 1, 26, 18, 30, 9, 453000, tzinfo=UTC),
    datetime(2021, 1, 1, 5, 0, 0, 3000, tzinfo=PLUS_0530),
    datetime(1969, 12, 31, 23, 59, 59, 999999, tzinfo=MINUS_0800),
    datetime(2038, 1, 19, 3, 14, 8, tzinfo=UTC),
]


@pytest.fixture(params=SAMPLE_DATETIMES, ids=lambda dt: dt.isoformat())
def sample_datetime(request):
    return request.param
