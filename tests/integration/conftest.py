"""Fixtures for integration tests against a real PostgreSQL server."""

from __future__ import annotations

import shutil
import subprocess

import pytest

from systime.config import PostgresqlConfig
from systime.storage.postgres import connect_postgres


def _container_runtime_available() -> bool:
    for cmd in ("docker", "podman"):
        if not shutil.which(cmd):
            continue
        try:
            subprocess.run([cmd, "info"], capture_output=True, check=True, timeout=10)
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired):
            continue
        return True
    return False


CONTAINER_RUNTIME_AVAILABLE = _container_runtime_available()


@pytest.fixture(scope="session")
def pg_container():
    if not CONTAINER_RUNTIME_AVAILABLE:
        pytest.skip("No container runtime (Docker/Podman) available")
    from testcontainers.postgres import PostgresContainer
    with PostgresContainer("postgres:16") as pg:
        yield pg


@pytest.fixture(scope="session")
def pg_config(pg_container) -> PostgresqlConfig:
    return PostgresqlConfig(
        username=pg_container.username,
        password=pg_container.password,
        host=pg_container.get_container_host_ip(),
        port=str(pg_container.get_exposed_port(5432)),
        database=pg_container.dbname,
    )


@pytest.fixture
def pg_store(pg_config):
    store = connect_postgres(pg_config)
    store.create_table(drop_existing=True)
    yield store
    store.close()
