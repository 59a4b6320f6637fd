"""TOML configuration loading.

The configuration is read once at startup and passed explicitly to every
operation that needs it::

    [postgresql]
    username = "postgres"
    password = ""
    host = "localhost"
    port = "5432"
    database = "postgres"

    [storage]
    backend = "postgresql"   # or "duckdb", "sqlite"
    path = ":memory:"        # file for duckdb / sqlite
    table = "foo"
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any
from urllib.parse import quote

from systime._constants import CONFIG_ENV_VAR, DEFAULT_CONFIG_FILENAME, DEFAULT_TABLE
from systime._errors import (
    ERR_MSG_CONFIG_MALFORMED,
    ERR_MSG_CONFIG_NOT_FOUND,
    ConfigLoadError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostgresqlConfig:
    """PostgreSQL connection fields. Empty strings are omitted from the URL."""

    username: str = ""
    password: str = ""
    host: str = ""
    port: str = ""
    database: str = ""

    def conninfo(self) -> str:
        """Build a ``postgresql://`` connection URL."""
        user = quote(self.username, safe="")
        password = quote(self.password, safe="")
        return (
            f"postgresql://{user}"
            f"{':' if password else ''}{password}"
            f"@{self.host}"
            f"{':' if self.port else ''}{self.port}"
            f"{'/' if self.database else ''}{self.database}"
        )

    def redacted(self) -> PostgresqlConfig:
        """Copy with a non-empty password replaced by ``***``."""
        if not self.password:
            return self
        return PostgresqlConfig(
            username=self.username,
            password="***",
            host=self.host,
            port=self.port,
            database=self.database,
        )


@dataclass(frozen=True)
class StorageConfig:
    """Which row store backend to use and where."""

    backend: str = "postgresql"
    path: str = ":memory:"
    table: str = DEFAULT_TABLE


@dataclass(frozen=True)
class Config:
    postgresql: PostgresqlConfig = field(default_factory=PostgresqlConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    path: Path | None = None


def resolve_config_path(config_file: str | None = None) -> Path:
    """Find the configuration file.

    Order: the explicit ``config_file`` argument, then ``$SYSTIME_CONFIG``,
    then ``config.toml`` in the current directory.

    Raises:
        ConfigLoadError: If the chosen file does not exist.
    """
    candidate = config_file or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILENAME
    try:
        path = Path(candidate).expanduser().resolve(strict=True)
    except OSError as e:
        raise ConfigLoadError(
            ERR_MSG_CONFIG_NOT_FOUND,
            f"cannot resolve config file {candidate!r}: {e}",
            wrapped=e,
            path=str(candidate),
        ) from e
    logger.info("config file canonicalized path = %s", path)
    return path


def load_config(config_file: str | None = None) -> Config:
    """Resolve, read and parse the configuration file.

    Raises:
        ConfigLoadError: If the file is missing, unreadable, not valid
            TOML, or has fields of the wrong type.
    """
    path = resolve_config_path(config_file)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError(
            f"unable to read config file {path}",
            f"reading {path} failed: {e}",
            wrapped=e,
            path=str(path),
        ) from e
    return parse_config(text, path=path)


def parse_config(text: str, *, path: Path | None = None) -> Config:
    """Parse TOML configuration text."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigLoadError(
            ERR_MSG_CONFIG_MALFORMED,
            f"invalid TOML in {path}: {e}",
            wrapped=e,
            path=str(path or ""),
        ) from e

    config = Config(
        postgresql=PostgresqlConfig(**_section(data, "postgresql", PostgresqlConfig, path)),
        storage=StorageConfig(**_section(data, "storage", StorageConfig, path)),
        path=path,
    )
    logger.debug("loaded config from %s: backend=%s", path, config.storage.backend)
    return config


def _section(
    data: dict[str, Any], name: str, cls: type, path: Path | None
) -> dict[str, str]:
    raw = data.get(name, {})
    if not isinstance(raw, dict):
        raise ConfigLoadError(
            ERR_MSG_CONFIG_MALFORMED,
            f"[{name}] in {path} must be a table, got {type(raw).__name__}",
            path=str(path or ""),
        )

    known = {f.name for f in fields(cls)}
    unknown = set(raw) - known
    if unknown:
        logger.warning("ignoring unknown keys in [%s]: %s", name, ", ".join(sorted(unknown)))

    values: dict[str, str] = {}
    for key in known & set(raw):
        value = raw[key]
        # port is commonly written as a bare integer
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            raise ConfigLoadError(
                ERR_MSG_CONFIG_MALFORMED,
                f"{name}.{key} in {path} must be a string, got {type(value).__name__}",
                path=str(path or ""),
            )
        values[key] = value
    return values
