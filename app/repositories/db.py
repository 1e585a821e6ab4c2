"""Storage backends: embedded DuckDB file and PostgreSQL connection pool.

Both backends take statements written with ``?`` positional placeholders and
return rows as dicts keyed by column name. The backend is chosen once at
startup by :func:`create_storage` and then passed explicitly to repositories.
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import duckdb
import psycopg
from loguru import logger
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool, PoolTimeout

from app.errors import StorageUnavailableError
from app.models import ALL_DDL

MEMORY = ":memory:"

Row = dict[str, Any]


class ConstraintViolationError(Exception):
    """Unique or foreign key constraint rejected a mutation."""


def to_ordinal_placeholders(statement: str) -> str:
    """Rewrite ``?`` placeholders as ``$1``, ``$2``, ... in order.

    Question marks inside single-quoted string literals are kept as-is.
    Double-quoted identifiers and ``--`` comments are not tracked, so a ``?``
    there would be rewritten too; statements must not contain one.
    """
    out = []
    index = 0
    in_literal = False
    for ch in statement:
        if ch == "'":
            in_literal = not in_literal
        elif ch == "?" and not in_literal:
            index += 1
            out.append(f"${index}")
            continue
        out.append(ch)
    return "".join(out)


class Storage(ABC):
    """Backend-agnostic parameterized query execution."""

    dialect: str

    @abstractmethod
    def execute(self, statement: str, params: Sequence[Any] | None = None) -> int:
        """Run a mutation, persist it and return the number of affected rows."""

    @abstractmethod
    def query_one(self, statement: str, params: Sequence[Any] | None = None) -> Row | None:
        """Return the first row or None."""

    @abstractmethod
    def query_all(self, statement: str, params: Sequence[Any] | None = None) -> list[Row]:
        """Return all rows."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying connection(s)."""

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()


class DuckDBStorage(Storage):
    """Single-file embedded engine.

    One connection per process; every statement runs under a lock and every
    mutation is followed by a CHECKPOINT so the database file holds the full
    image before ``execute`` returns. The mutation commits (and is written
    to the WAL) before the CHECKPOINT, so a failed CHECKPOINT is logged and
    ``execute`` still reports success.
    """

    dialect = "duckdb"

    def __init__(self, path: str | Path = MEMORY):
        self._path = str(path)
        self._lock = threading.RLock()
        self._persistent = self._path != MEMORY

        try:
            if self._persistent:
                Path(self._path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = duckdb.connect(self._path)
        except (OSError, duckdb.Error) as e:
            raise StorageUnavailableError(f"Cannot open DuckDB database {self._path}: {e}") from e

        logger.debug("DB connected: {}", self._path)

    @property
    def path(self) -> str:
        return self._path

    def _run(self, statement: str, params: Sequence[Any] | None) -> duckdb.DuckDBPyConnection:
        if params:
            return self._conn.execute(statement, list(params))
        return self._conn.execute(statement)

    @staticmethod
    def _rows(result: duckdb.DuckDBPyConnection, rows: list[tuple]) -> list[Row]:
        columns = [d[0] for d in result.description]
        return [dict(zip(columns, r)) for r in rows]

    def execute(self, statement: str, params: Sequence[Any] | None = None) -> int:
        with self._lock:
            try:
                result = self._run(statement, params)
            except duckdb.ConstraintException as e:
                raise ConstraintViolationError(str(e)) from e
            row = result.fetchone() if result.description else None
            affected = int(row[0]) if row and isinstance(row[0], int) else 0
            try:
                self.flush()
            except duckdb.Error as e:
                # committed and in the WAL already; replayed on next open
                logger.warning("CHECKPOINT failed after commit on {}: {}", self._path, e)
            return affected

    def query_one(self, statement: str, params: Sequence[Any] | None = None) -> Row | None:
        with self._lock:
            result = self._run(statement, params)
            row = result.fetchone()
            return self._rows(result, [row])[0] if row else None

    def query_all(self, statement: str, params: Sequence[Any] | None = None) -> list[Row]:
        with self._lock:
            result = self._run(statement, params)
            return self._rows(result, result.fetchall())

    def flush(self) -> None:
        """Write the database image to its file."""
        if self._persistent:
            with self._lock:
                self._conn.execute("CHECKPOINT")

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.debug("DB connection closed")


class PostgresStorage(Storage):
    """PostgreSQL behind a bounded connection pool.

    Statements are rewritten to ``$n`` placeholders and sent through a raw
    cursor; each statement commits on its own.
    """

    dialect = "postgres"

    def __init__(
        self,
        conninfo: str,
        min_size: int = 1,
        max_size: int = 10,
        timeout: float = 10.0,
    ):
        self._pool = ConnectionPool(
            conninfo,
            min_size=min_size,
            max_size=max_size,
            timeout=timeout,
            kwargs={
                "autocommit": True,
                "row_factory": dict_row,
                "cursor_factory": psycopg.RawCursor,
            },
            open=False,
        )
        try:
            self._pool.open(wait=True, timeout=timeout)
        except (PoolTimeout, psycopg.OperationalError) as e:
            self._pool.close()
            raise StorageUnavailableError(f"Cannot connect to PostgreSQL: {e}") from e

        logger.info("PostgreSQL pool opened (min={}, max={})", min_size, max_size)

    def execute(self, statement: str, params: Sequence[Any] | None = None) -> int:
        try:
            with self._pool.connection() as conn:
                cur = conn.execute(to_ordinal_placeholders(statement), params or None)
                return max(cur.rowcount, 0)
        except (psycopg.errors.UniqueViolation, psycopg.errors.ForeignKeyViolation) as e:
            raise ConstraintViolationError(str(e)) from e

    def query_one(self, statement: str, params: Sequence[Any] | None = None) -> Row | None:
        with self._pool.connection() as conn:
            return conn.execute(to_ordinal_placeholders(statement), params or None).fetchone()

    def query_all(self, statement: str, params: Sequence[Any] | None = None) -> list[Row]:
        with self._pool.connection() as conn:
            return conn.execute(to_ordinal_placeholders(statement), params or None).fetchall()

    def close(self) -> None:
        self._pool.close()
        logger.debug("PostgreSQL pool closed")


def init_schema(storage: Storage) -> None:
    """Create tables and indexes if missing (idempotent)."""
    for ddl in ALL_DDL[storage.dialect]:
        storage.execute(ddl)
    logger.info("DB tables initialized ({})", storage.dialect)


def create_storage(
    database_url: str | None,
    db_path: str | Path,
    pool_min: int = 1,
    pool_max: int = 10,
    timeout: float = 10.0,
) -> Storage:
    """Pick the backend from configuration, open it and ensure the schema.

    A connection string selects PostgreSQL; failures there are fatal and never
    fall back to the embedded file.
    """
    if database_url:
        storage: Storage = PostgresStorage(database_url, pool_min, pool_max, timeout)
    else:
        storage = DuckDBStorage(db_path)

    init_schema(storage)
    return storage
