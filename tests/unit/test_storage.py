"""Tests for the storage backends and backend selection."""

from contextlib import contextmanager

import duckdb
import psycopg
import pytest

from app.errors import ConflictError, StorageUnavailableError
from app.repositories import (
    ConstraintViolationError,
    DuckDBStorage,
    PostgresStorage,
    ResponseRepository,
    SurveyRepository,
    create_storage,
    init_schema,
    to_ordinal_placeholders,
)


class TestPlaceholders:
    def test_ordinal(self):
        sql = "SELECT id FROM responses WHERE survey_token = ? AND pseudonym = ?"
        assert to_ordinal_placeholders(sql) == "SELECT id FROM responses WHERE survey_token = $1 AND pseudonym = $2"

    def test_insert_order(self):
        sql = "INSERT INTO surveys (token, title, choices) VALUES (?, ?, ?)"
        assert to_ordinal_placeholders(sql).endswith("VALUES ($1, $2, $3)")

    def test_no_placeholders(self):
        sql = "SELECT token FROM surveys ORDER BY created_at DESC"
        assert to_ordinal_placeholders(sql) == sql

    def test_literal_untouched(self):
        sql = "SELECT '?' AS q, title FROM surveys WHERE token = ?"
        assert to_ordinal_placeholders(sql) == "SELECT '?' AS q, title FROM surveys WHERE token = $1"


class TestDuckDBStorage:
    def test_execute_and_query(self, storage):
        affected = storage.execute(
            "INSERT INTO surveys (token, title, choices) VALUES (?, ?, ?)",
            ["ABC123", "Lunch", '["A", "B"]'],
        )
        assert affected == 1

        row = storage.query_one("SELECT token, title FROM surveys WHERE token = ?", ["ABC123"])
        assert row == {"token": "ABC123", "title": "Lunch"}
        assert storage.query_one("SELECT token FROM surveys WHERE token = ?", ["NOPE00"]) is None
        assert storage.query_all("SELECT token FROM surveys") == [{"token": "ABC123"}]

    def test_unique_token(self, storage):
        sql = "INSERT INTO surveys (token, title, choices) VALUES (?, ?, ?)"
        storage.execute(sql, ["ABC123", "One", "[]"])
        with pytest.raises(ConstraintViolationError):
            storage.execute(sql, ["ABC123", "Two", "[]"])

    def test_unique_response(self, storage):
        storage.execute("INSERT INTO surveys (token, title, choices) VALUES (?, ?, ?)", ["ABC123", "T", "[]"])
        sql = "INSERT INTO responses (survey_token, pseudonym, votes) VALUES (?, ?, ?)"
        storage.execute(sql, ["ABC123", "ann", "[]"])
        with pytest.raises(ConstraintViolationError):
            storage.execute(sql, ["ABC123", "ann", "[]"])

    def test_response_needs_survey(self, storage):
        with pytest.raises(ConstraintViolationError):
            storage.execute(
                "INSERT INTO responses (survey_token, pseudonym, votes) VALUES (?, ?, ?)",
                ["NOPE00", "ann", "[]"],
            )

    def test_schema_idempotent(self, storage):
        init_schema(storage)
        init_schema(storage)
        assert storage.query_all("SELECT token FROM surveys") == []

    def test_persists_across_reopen(self, tmp_path):
        path = tmp_path / "data" / "survey.duckdb"
        with DuckDBStorage(path) as s:
            init_schema(s)
            s.execute("INSERT INTO surveys (token, title, choices) VALUES (?, ?, ?)", ["ABC123", "T", "[]"])

        assert path.exists()
        with DuckDBStorage(path) as s:
            init_schema(s)
            assert s.query_one("SELECT title FROM surveys WHERE token = ?", ["ABC123"]) == {"title": "T"}

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(StorageUnavailableError):
            DuckDBStorage(blocker / "sub" / "survey.duckdb")


class TestCreateStorage:
    def test_defaults_to_duckdb(self, tmp_path):
        storage = create_storage(None, tmp_path / "survey.duckdb")
        try:
            assert isinstance(storage, DuckDBStorage)
            assert storage.dialect == "duckdb"
            assert storage.query_all("SELECT token FROM surveys") == []
        finally:
            storage.close()

    def test_empty_url_is_duckdb(self, tmp_path):
        storage = create_storage("", tmp_path / "survey.duckdb")
        try:
            assert isinstance(storage, DuckDBStorage)
        finally:
            storage.close()

    def test_unreachable_postgres_is_fatal(self, tmp_path):
        path = tmp_path / "survey.duckdb"
        with pytest.raises(StorageUnavailableError):
            create_storage("postgresql://survey@127.0.0.1:1/survey", path, timeout=1.0)
        assert not path.exists()


class RecordingCursor:
    def __init__(self, rows: list[dict], rowcount: int = 1):
        self.rows = rows
        self.rowcount = rowcount

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return self.rows


class RecordingConnection:
    """Stands in for a pooled psycopg connection; answers by statement prefix."""

    def __init__(self, answers: dict[str, list[dict]] | None = None, fail_insert: Exception | None = None):
        self.answers = answers or {}
        self.fail_insert = fail_insert
        self.calls: list[tuple[str, list | None]] = []

    def execute(self, sql, params=None):
        self.calls.append((sql, params))
        if sql.startswith("INSERT") and self.fail_insert is not None:
            raise self.fail_insert
        for marker, rows in self.answers.items():
            if marker in sql:
                return RecordingCursor(rows)
        return RecordingCursor([])


class RecordingPool:
    def __init__(self, conn: RecordingConnection):
        self.conn = conn

    @contextmanager
    def connection(self):
        yield self.conn

    def close(self):
        pass


def postgres_with(conn: RecordingConnection) -> PostgresStorage:
    storage = PostgresStorage.__new__(PostgresStorage)
    storage._pool = RecordingPool(conn)
    return storage


class TestPostgresStorage:
    def test_rewrites_and_keeps_param_order(self):
        conn = RecordingConnection()
        storage = postgres_with(conn)

        assert storage.execute("INSERT INTO surveys (token, title, choices) VALUES (?, ?, ?)", ["ABC123", "T", "[]"]) == 1

        assert conn.calls == [("INSERT INTO surveys (token, title, choices) VALUES ($1, $2, $3)", ["ABC123", "T", "[]"])]

    def test_queries(self):
        conn = RecordingConnection({"FROM surveys": [{"token": "ABC123"}]})
        storage = postgres_with(conn)

        assert storage.query_one("SELECT token FROM surveys WHERE token = ?", ["ABC123"]) == {"token": "ABC123"}
        assert storage.query_all("SELECT token FROM surveys") == [{"token": "ABC123"}]
        assert conn.calls[0] == ("SELECT token FROM surveys WHERE token = $1", ["ABC123"])
        assert conn.calls[1] == ("SELECT token FROM surveys", None)

    @pytest.mark.parametrize("exc", [psycopg.errors.UniqueViolation, psycopg.errors.ForeignKeyViolation])
    def test_constraint_violation(self, exc):
        storage = postgres_with(RecordingConnection(fail_insert=exc("constraint")))
        with pytest.raises(ConstraintViolationError):
            storage.execute("INSERT INTO responses (survey_token, pseudonym, votes) VALUES (?, ?, ?)", ["ABC123", "ann", "[]"])

    def test_duplicate_response_is_conflict(self):
        from app.services.survey import SurveyService

        survey_row = {"token": "ABC123", "title": "T", "choices": '["A", "B"]', "created_at": None}
        conn = RecordingConnection(
            {"FROM surveys": [survey_row]},
            fail_insert=psycopg.errors.UniqueViolation("duplicate key"),
        )
        storage = postgres_with(conn)
        service = SurveyService(SurveyRepository(storage), ResponseRepository(storage))

        with pytest.raises(ConflictError):
            service.record_response("abc123", "ann", [{"choice": "A", "rank": 1}])

        insert_sql, insert_params = conn.calls[-1]
        assert insert_sql == "INSERT INTO responses (survey_token, pseudonym, votes) VALUES ($1, $2, $3)"
        assert insert_params[:2] == ["ABC123", "ann"]


class TestDuckDBFlush:
    def test_checkpoint_failure_keeps_committed_row(self, tmp_path, monkeypatch):
        path = tmp_path / "survey.duckdb"
        storage = DuckDBStorage(path)
        init_schema(storage)

        def broken_flush():
            raise duckdb.IOException("disk full")

        monkeypatch.setattr(storage, "flush", broken_flush)

        sql = "INSERT INTO surveys (token, title, choices) VALUES (?, ?, ?)"
        assert storage.execute(sql, ["ABC123", "T", "[]"]) == 1
        assert storage.query_one("SELECT title FROM surveys WHERE token = ?", ["ABC123"]) == {"title": "T"}
        storage.close()

        with DuckDBStorage(path) as reopened:
            assert reopened.query_one("SELECT title FROM surveys WHERE token = ?", ["ABC123"]) == {"title": "T"}
