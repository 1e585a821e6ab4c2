"""Survey API views - thin layer over the survey service."""

from typing import Any

from app.container import container
from app.models.survey import Survey
from web.api.auth import require_admin

from .schemas import (
    ChoiceStatItem,
    StatsResponse,
    SubmitResponse,
    SurveyItem,
    SurveyListResponse,
    SurveyResponse,
)


def _survey(s: Survey) -> SurveyResponse:
    return SurveyResponse(token=s.token, title=s.title, choices=s.choices)


def create_survey(title: str, choices: str | list[str], authorization: str | None) -> SurveyResponse:
    """Create a survey (admin)."""
    require_admin(authorization)
    return _survey(container.surveys.create_survey(title, choices))


def list_surveys(authorization: str | None) -> SurveyListResponse:
    """List surveys, newest first (admin)."""
    require_admin(authorization)
    items = [
        SurveyItem(token=s.token, title=s.title, choices=s.choices, created_at=s.created_at)
        for s in container.surveys.list_surveys()
    ]
    return SurveyListResponse(items=items)


def get_survey(token: str) -> SurveyResponse:
    """Get a survey by token (public)."""
    return _survey(container.surveys.get_survey(token))


def record_response(token: str, pseudonym: str, votes: list[dict[str, Any]]) -> SubmitResponse:
    """Submit a participant's ranking (public)."""
    container.surveys.record_response(token, pseudonym, votes)
    return SubmitResponse()


def get_stats(token: str, authorization: str | None) -> StatsResponse:
    """Weighted results for a survey (admin)."""
    require_admin(authorization)
    data = container.surveys.get_stats(token)

    items = [
        ChoiceStatItem(
            choice=s.choice,
            score=s.score,
            vote_count=s.vote_count,
        )
        for s in data.stats
    ]

    return StatsResponse(
        survey=_survey(data.survey),
        stats=items,
        total_respondents=data.total_respondents,
        respondents=data.respondents,
    )
