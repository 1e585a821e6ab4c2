"""Survey API response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class SurveyResponse(BaseModel):
    """Public survey payload."""

    token: str
    title: str
    choices: list[str]


class SurveyItem(SurveyResponse):
    """Survey in the admin listing."""

    created_at: datetime | None


class SurveyListResponse(BaseModel):
    """Admin survey listing, newest first."""

    items: list[SurveyItem]


class SubmitResponse(BaseModel):
    """Response submission result."""

    success: bool = True


class ChoiceStatItem(BaseModel):
    """Weighted score for one choice."""

    choice: str
    score: int
    vote_count: int = Field(serialization_alias="voteCount")


class StatsResponse(BaseModel):
    """Survey results."""

    survey: SurveyResponse
    stats: list[ChoiceStatItem]
    total_respondents: int = Field(serialization_alias="totalRespondents")
    respondents: list[str]
