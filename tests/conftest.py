"""Shared fixtures: in-memory storage and survey services on top of it."""

import pytest

from app.repositories import DuckDBStorage, ResponseRepository, SurveyRepository, init_schema
from app.services.survey import SurveyService


@pytest.fixture
def storage():
    s = DuckDBStorage()
    init_schema(s)
    yield s
    s.close()


@pytest.fixture
def make_service(storage):
    """Build a service over the shared storage with an optional token generator."""

    def build(token_generator=None) -> SurveyService:
        return SurveyService(SurveyRepository(storage), ResponseRepository(storage), token_generator)

    return build


@pytest.fixture
def service(make_service):
    return make_service()


@pytest.fixture
def abc_survey(service):
    return service.create_survey("Lunch", ["A", "B", "C"])
