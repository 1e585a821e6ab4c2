"""Survey domain models - surveys, responses, and aggregation entities."""

from app.models.survey.entities import BaseEntity, ChoiceScore, Response, Survey, SurveyStats, Vote
from app.models.survey.response import RESPONSE_DDL, RESPONSE_DDL_POSTGRES
from app.models.survey.survey import SURVEY_DDL, SURVEY_DDL_POSTGRES, SURVEY_INDEXES

__all__ = [
    "BaseEntity",
    "SURVEY_DDL",
    "SURVEY_DDL_POSTGRES",
    "SURVEY_INDEXES",
    "RESPONSE_DDL",
    "RESPONSE_DDL_POSTGRES",
    "Survey",
    "Vote",
    "Response",
    "ChoiceScore",
    "SurveyStats",
]
