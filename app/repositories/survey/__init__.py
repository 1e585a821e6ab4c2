"""Survey repositories."""

from app.repositories.survey.response import ResponseRepository
from app.repositories.survey.survey import SurveyRepository

__all__ = [
    "SurveyRepository",
    "ResponseRepository",
]
