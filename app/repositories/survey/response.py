"""Response repository - access to participants' ballots."""

import json

from app.models.survey import Response, Vote
from app.repositories.base import BaseRepository


class ResponseRepository(BaseRepository):
    """Repository for response rows."""

    def exists(self, survey_token: str, pseudonym: str) -> bool:
        """Check if the participant already responded."""
        row = self.fetchone(
            "SELECT id FROM responses WHERE survey_token = ? AND pseudonym = ?",
            [survey_token, pseudonym],
        )
        return row is not None

    def insert(self, survey_token: str, pseudonym: str, votes: list[Vote]) -> None:
        """Insert a response.

        Raises ConstraintViolationError on a duplicate (survey_token, pseudonym)
        or an unknown survey token.
        """
        payload = json.dumps([{"choice": v.choice, "rank": v.rank} for v in votes])
        self.execute(
            "INSERT INTO responses (survey_token, pseudonym, votes) VALUES (?, ?, ?)",
            [survey_token, pseudonym, payload],
        )

    def list_for_survey(self, survey_token: str) -> list[Response]:
        """All responses of a survey in submission order."""
        rows = self.fetchall(
            "SELECT survey_token, pseudonym, votes, created_at FROM responses WHERE survey_token = ? ORDER BY id",
            [survey_token],
        )
        return [
            Response(
                survey_token=r["survey_token"],
                pseudonym=r["pseudonym"],
                votes=[
                    Vote(choice=v.get("choice"), rank=v.get("rank")) for v in json.loads(r["votes"]) if isinstance(v, dict)
                ],
                created_at=r["created_at"],
            )
            for r in rows
        ]
