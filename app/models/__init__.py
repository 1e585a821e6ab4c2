"""Models package - DDL and entities."""

from app.models.survey import (
    BaseEntity,
    RESPONSE_DDL,
    RESPONSE_DDL_POSTGRES,
    SURVEY_DDL,
    SURVEY_DDL_POSTGRES,
    SURVEY_INDEXES,
    ChoiceScore,
    Response,
    Survey,
    SurveyStats,
    Vote,
)

# DDL per storage dialect, in dependency order
ALL_DDL = {
    "duckdb": [
        *SURVEY_DDL,
        *RESPONSE_DDL,
        *SURVEY_INDEXES,
    ],
    "postgres": [
        *SURVEY_DDL_POSTGRES,
        *RESPONSE_DDL_POSTGRES,
        *SURVEY_INDEXES,
    ],
}

__all__ = [
    # Survey
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
    # All DDL
    "ALL_DDL",
]
