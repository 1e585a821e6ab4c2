"""Survey domain entities."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class BaseEntity:
    """Base class for survey entities."""

    def to_dict(self) -> dict[str, Any]:
        """Convert entity (and nested entities) to a dictionary."""
        return asdict(self)


@dataclass
class Survey(BaseEntity):
    """Published survey: token, title and choices in display order."""

    token: str
    title: str
    choices: list[str]
    created_at: datetime | None = None


@dataclass
class Vote(BaseEntity):
    """One ranked choice inside a response (rank 1 = most preferred)."""

    choice: str
    rank: int


@dataclass
class Response(BaseEntity):
    """A participant's ranked ballot for one survey."""

    survey_token: str
    pseudonym: str
    votes: list[Vote] = field(default_factory=list)
    created_at: datetime | None = None


@dataclass
class ChoiceScore(BaseEntity):
    """Aggregated weighted score for one choice."""

    choice: str
    score: int
    vote_count: int


@dataclass
class SurveyStats(BaseEntity):
    """Aggregated results for a survey."""

    survey: Survey
    stats: list[ChoiceScore]
    total_respondents: int
    respondents: list[str]
