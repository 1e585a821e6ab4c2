"""Base repository class."""

from collections.abc import Sequence
from typing import Any

from loguru import logger

from app.repositories.db import Row, Storage


class BaseRepository:
    """Base repository over an injected storage handle."""

    def __init__(self, storage: Storage):
        self._db = storage
        logger.debug("{} initialized ({})", self.__class__.__name__, storage.dialect)

    def execute(self, query: str, params: Sequence[Any] | None = None) -> int:
        """Execute a mutation."""
        return self._db.execute(query, params)

    def fetchall(self, query: str, params: Sequence[Any] | None = None) -> list[Row]:
        """Execute and fetch all rows."""
        return self._db.query_all(query, params)

    def fetchone(self, query: str, params: Sequence[Any] | None = None) -> Row | None:
        """Execute and fetch one row."""
        return self._db.query_one(query, params)
