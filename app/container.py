"""Dependency Injection container - initialized at app startup."""

from loguru import logger

import settings
from app.repositories.db import Storage, create_storage, init_schema
from app.repositories.survey import ResponseRepository, SurveyRepository
from app.services.survey import SurveyService, TokenGenerator


class Container:
    """Application DI container - holds the storage handle and services."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(self, storage: Storage | None = None) -> None:
        """Initialize all dependencies. Call once at app startup.

        An injected storage gets its schema ensured here. Without one the
        backend comes from settings; a misconfigured backend raises
        StorageUnavailableError.
        """
        if self._initialized:
            return

        if storage is not None:
            init_schema(storage)
        self.storage = storage or create_storage(
            settings.DATABASE_URL,
            settings.DB_PATH,
            pool_min=settings.PG_POOL_MIN,
            pool_max=settings.PG_POOL_MAX,
            timeout=settings.PG_CONNECT_TIMEOUT,
        )

        # Repositories
        self._survey_repo = SurveyRepository(self.storage)
        self._response_repo = ResponseRepository(self.storage)

        # Services (with injected repos)
        self.surveys = SurveyService(
            survey_repo=self._survey_repo,
            response_repo=self._response_repo,
            token_generator=TokenGenerator(length=settings.TOKEN_LENGTH),
        )

        self._initialized = True
        logger.info("Container initialized ({})", self.storage.dialect)

    def close(self) -> None:
        """Release the storage handle and allow a fresh init()."""
        if self._initialized:
            self.storage.close()
            self._initialized = False


# Global container instance
container = Container()
