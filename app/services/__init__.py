"""Services package - service class exports."""

from app.services.survey import SurveyService, TokenGenerator

__all__ = [
    "SurveyService",
    "TokenGenerator",
]
