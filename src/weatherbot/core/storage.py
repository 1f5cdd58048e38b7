"""Key/value storage backends for bot state.

Supports multiple backends:
- memory: In-memory (development/testing)
- sqlite: SQLite file-based (local persistence)
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import aiosqlite

from weatherbot.core.errors import ConfigError, StorageError

logger = logging.getLogger(__name__)

StoreItem = dict[str, Any]


class Storage(ABC):
    """State store contract: read, write and delete JSON documents by key."""

    @abstractmethod
    async def read(self, keys: list[str]) -> dict[str, StoreItem]:
        """Return the stored items for ``keys``; missing keys are omitted."""
        ...

    @abstractmethod
    async def write(self, changes: dict[str, StoreItem]) -> None:
        """Insert or replace the given items."""
        ...

    @abstractmethod
    async def delete(self, keys: list[str]) -> None:
        """Remove the given keys. Unknown keys are ignored."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        return None


class MemoryStorage(Storage):
    """Process-local storage.

    Items are kept as JSON text so readers never share mutable objects with
    the store, matching what a remote backend would return.
    """

    def __init__(self, initial: dict[str, StoreItem] | None = None) -> None:
        self._memory: dict[str, str] = {}
        for key, item in (initial or {}).items():
            self._memory[key] = json.dumps(item)

    async def read(self, keys: list[str]) -> dict[str, StoreItem]:
        return {key: json.loads(self._memory[key]) for key in keys if key in self._memory}

    async def write(self, changes: dict[str, StoreItem]) -> None:
        for key, item in changes.items():
            self._memory[key] = json.dumps(item)

    async def delete(self, keys: list[str]) -> None:
        for key in keys:
            self._memory.pop(key, None)


class SqliteStorage(Storage):
    """SQLite file-based storage using aiosqlite."""

    _CREATE_TABLE = "CREATE TABLE IF NOT EXISTS bot_state (key TEXT PRIMARY KEY, data TEXT NOT NULL)"

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        self._conn: aiosqlite.Connection | None = None

    async def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            try:
                self._conn = await aiosqlite.connect(self.path)
                await self._conn.execute(self._CREATE_TABLE)
                await self._conn.commit()
            except aiosqlite.Error as e:
                raise StorageError(f"Cannot open state database {self.path}: {e}") from e
            logger.debug(f"Opened SQLite state store at {self.path}")
        return self._conn

    async def read(self, keys: list[str]) -> dict[str, StoreItem]:
        if not keys:
            return {}
        conn = await self._connection()
        placeholders = ",".join("?" for _ in keys)
        try:
            async with conn.execute(
                f"SELECT key, data FROM bot_state WHERE key IN ({placeholders})", keys
            ) as cursor:
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to read state: {e}") from e
        return {key: json.loads(data) for key, data in rows}

    async def write(self, changes: dict[str, StoreItem]) -> None:
        if not changes:
            return
        conn = await self._connection()
        try:
            await conn.executemany(
                "INSERT INTO bot_state (key, data) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET data = excluded.data",
                [(key, json.dumps(item)) for key, item in changes.items()],
            )
            await conn.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to write state: {e}") from e

    async def delete(self, keys: list[str]) -> None:
        if not keys:
            return
        conn = await self._connection()
        try:
            await conn.executemany("DELETE FROM bot_state WHERE key = ?", [(key,) for key in keys])
            await conn.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to delete state: {e}") from e

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None


def create_storage(
    backend: str = "memory",
    **kwargs: Any,
) -> Storage:
    """Create a storage instance.

    Args:
        backend: Storage type ("memory" or "sqlite").
        kwargs: Backend-specific arguments:
            - sqlite: path (str or Path) - path to SQLite file

    Returns:
        Storage instance.

    Raises:
        ConfigError: If backend is unknown or required arguments are missing.
    """
    if backend == "memory":
        logger.debug("Creating in-memory storage")
        return MemoryStorage()

    if backend == "sqlite":
        path = kwargs.get("path")
        if not path:
            raise ConfigError("SQLite storage requires a 'path'")
        logger.info(f"Using SQLite storage at {path}")
        return SqliteStorage(path)

    raise ConfigError(f"Unknown storage backend: {backend}")
