"""Async SQLite connection provider."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite

_logger = logging.getLogger(__name__)


class AsyncSQLiteConnection:
    """Opens one connection per unit of work and commits or rolls it back."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    @property
    def db_path(self) -> str:
        return self._db_path

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield a connection; commit on success, roll back on exception."""
        async with aiosqlite.connect(self._db_path) as conn:
            await conn.execute("PRAGMA foreign_keys = ON")
            conn.row_factory = aiosqlite.Row
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                _logger.exception("Store transaction failed and was rolled back")
                raise
