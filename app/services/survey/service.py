"""Survey service - creation, lookup, responses and stats."""

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from app.errors import ConflictError, NotFoundError, ValidationError
from app.models.survey import Survey, SurveyStats, Vote
from app.repositories.db import ConstraintViolationError
from app.repositories.survey import ResponseRepository, SurveyRepository
from app.services.survey.scoring import compute_stats
from app.services.survey.tokens import TokenGenerator

MIN_CHOICES = 2


def normalize_token(token: Any) -> str:
    """Canonical token form: trimmed, upper-case."""
    if not isinstance(token, str):
        raise ValidationError("Survey token must be text")
    return token.strip().upper()


def parse_choices(choices: str | Sequence[str] | None) -> list[str]:
    """Split, trim and de-duplicate choice labels, keeping first occurrences."""
    if choices is None:
        return []
    if isinstance(choices, str):
        choices = choices.split(",")
    elif not isinstance(choices, Sequence):
        raise ValidationError("Choices must be a comma-separated string or a list")

    labels: list[str] = []
    for label in choices:
        if not isinstance(label, str):
            raise ValidationError("Choice labels must be text")
        label = label.strip()
        if label and label not in labels:
            labels.append(label)
    return labels


def parse_votes(votes: Any) -> list[Vote]:
    """Validate submitted votes: a list of {choice, rank} with rank >= 1."""
    if isinstance(votes, (str, bytes)) or not isinstance(votes, Sequence):
        raise ValidationError("Votes must be a list")

    result = []
    for item in votes:
        if isinstance(item, Vote):
            choice, rank = item.choice, item.rank
        elif isinstance(item, Mapping):
            choice, rank = item.get("choice"), item.get("rank")
        else:
            raise ValidationError("Each vote must have a choice and a rank")

        if not isinstance(choice, str) or not choice:
            raise ValidationError("Vote choice must be non-empty text")
        if isinstance(rank, bool) or not isinstance(rank, int) or rank < 1:
            raise ValidationError(f"Invalid rank for {choice!r}: {rank!r}")
        result.append(Vote(choice=choice, rank=rank))
    return result


class SurveyService:
    """Survey store: validates input and persists through the repositories."""

    def __init__(
        self,
        survey_repo: SurveyRepository,
        response_repo: ResponseRepository,
        token_generator: TokenGenerator | None = None,
    ):
        self._surveys = survey_repo
        self._responses = response_repo
        self._tokens = token_generator or TokenGenerator()
        logger.debug("SurveyService initialized")

    def _new_token(self, title: str, choices: list[str]) -> str:
        """Draw tokens until one inserts cleanly."""
        while True:
            token = self._tokens.generate()
            if self._surveys.token_exists(token):
                logger.debug("Token collision: {}", token)
                continue
            try:
                self._surveys.insert(token, title, choices)
            except ConstraintViolationError:
                logger.debug("Token taken concurrently: {}", token)
                continue
            return token

    def create_survey(self, title: str | None, choices: str | Sequence[str] | None) -> Survey:
        """Create a survey with a fresh unique token."""
        title = title.strip() if isinstance(title, str) else ""
        labels = parse_choices(choices)

        if not title or not labels:
            raise ValidationError("Title and choices required")
        if len(labels) < MIN_CHOICES:
            raise ValidationError(f"At least {MIN_CHOICES} choices required")

        token = self._new_token(title, labels)
        logger.info("Survey created: {} ({} choices)", token, len(labels))
        return self._surveys.get(token) or Survey(token=token, title=title, choices=labels)

    def list_surveys(self) -> list[Survey]:
        """All surveys, newest first."""
        return self._surveys.list_all()

    def get_survey(self, token: str) -> Survey:
        """Get a survey by token (case-insensitive)."""
        survey = self._surveys.get(normalize_token(token))
        if survey is None:
            raise NotFoundError()
        return survey

    def has_responded(self, token: str, pseudonym: str) -> bool:
        """Check if a participant already answered the survey."""
        pseudonym = pseudonym.strip() if isinstance(pseudonym, str) else ""
        return bool(pseudonym) and self._responses.exists(normalize_token(token), pseudonym)

    def record_response(self, token: str, pseudonym: str | None, votes: Any) -> None:
        """Store a participant's ranked ballot.

        The unique (survey_token, pseudonym) constraint is the final guard
        against concurrent duplicates; the pre-check only avoids the round-trip.
        """
        pseudonym = pseudonym.strip() if isinstance(pseudonym, str) else ""
        if not pseudonym:
            raise ValidationError("Pseudonym cannot be empty")
        parsed = parse_votes(votes)

        survey = self.get_survey(token)

        if self._responses.exists(survey.token, pseudonym):
            raise ConflictError()
        try:
            self._responses.insert(survey.token, pseudonym, parsed)
        except ConstraintViolationError as e:
            logger.info("Duplicate response rejected: {} / {}", survey.token, pseudonym)
            raise ConflictError() from e

        logger.info("Response recorded: {} ({} votes)", survey.token, len(parsed))

    def get_stats(self, token: str) -> SurveyStats:
        """Weighted results for a survey."""
        survey = self.get_survey(token)
        responses = self._responses.list_for_survey(survey.token)
        logger.debug("get_stats({}): {} responses", survey.token, len(responses))
        return compute_stats(survey, responses)
