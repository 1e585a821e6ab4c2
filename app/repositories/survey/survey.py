"""Survey repository - access to published surveys."""

import json

from loguru import logger

from app.models.survey import Survey
from app.repositories.base import BaseRepository
from app.repositories.db import Row


def _to_survey(row: Row) -> Survey:
    return Survey(
        token=row["token"],
        title=row["title"],
        choices=json.loads(row["choices"]),
        created_at=row.get("created_at"),
    )


class SurveyRepository(BaseRepository):
    """Repository for survey rows."""

    def token_exists(self, token: str) -> bool:
        """Check if a token is already taken."""
        return self.fetchone("SELECT id FROM surveys WHERE token = ?", [token]) is not None

    def insert(self, token: str, title: str, choices: list[str]) -> None:
        """Insert a survey. Raises ConstraintViolationError if the token is taken."""
        self.execute(
            "INSERT INTO surveys (token, title, choices) VALUES (?, ?, ?)",
            [token, title, json.dumps(choices)],
        )
        logger.debug("Survey inserted: {}", token)

    def get(self, token: str) -> Survey | None:
        """Get a survey by its canonical (upper-case) token."""
        row = self.fetchone(
            "SELECT token, title, choices, created_at FROM surveys WHERE token = ?",
            [token],
        )
        return _to_survey(row) if row else None

    def list_all(self) -> list[Survey]:
        """All surveys, newest first."""
        rows = self.fetchall("SELECT token, title, choices, created_at FROM surveys ORDER BY created_at DESC, id DESC")
        return [_to_survey(r) for r in rows]
