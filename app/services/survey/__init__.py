"""Survey services."""

from app.services.survey.scoring import compute_stats, rank_by_score, score_choices
from app.services.survey.service import SurveyService, normalize_token, parse_choices, parse_votes
from app.services.survey.tokens import TOKEN_ALPHABET, TokenGenerator

__all__ = [
    "SurveyService",
    "TokenGenerator",
    "TOKEN_ALPHABET",
    "score_choices",
    "compute_stats",
    "rank_by_score",
    "normalize_token",
    "parse_choices",
    "parse_votes",
]
