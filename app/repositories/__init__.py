"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.db import (
    ConstraintViolationError,
    DuckDBStorage,
    PostgresStorage,
    Storage,
    create_storage,
    init_schema,
    to_ordinal_placeholders,
)
from app.repositories.survey import ResponseRepository, SurveyRepository

__all__ = [
    # DB
    "Storage",
    "DuckDBStorage",
    "PostgresStorage",
    "ConstraintViolationError",
    "create_storage",
    "init_schema",
    "to_ordinal_placeholders",
    # Base
    "BaseRepository",
    # Survey
    "SurveyRepository",
    "ResponseRepository",
]
