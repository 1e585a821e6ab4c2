"""Survey API."""

from web.api.surveys.views import (
    create_survey,
    get_stats,
    get_survey,
    list_surveys,
    record_response,
)

__all__ = [
    "create_survey",
    "list_surveys",
    "get_survey",
    "record_response",
    "get_stats",
]
