"""Dependency injection container for the API."""

import logging
import random
from typing import Optional

from fastapi import Request

from ....application.services.match_service import MatchService
from ....application.services.ptce_engine import PTCEEngine
from ....domain.tournament.interfaces.evaluation_source import EvaluationSource
from ....domain.tournament.services.discussion_facilitator import DiscussionFacilitator
from ....domain.tournament.services.heuristic_evaluator import (
    HeuristicEvaluator,
    fixed_confidence,
    random_confidence,
)
from ....infrastructure.config import PTCESettings
from ....infrastructure.evaluation import create_evaluation_source
from ....infrastructure.monitoring.structured_logging import LoggingAuditSink
from ....infrastructure.persistence.database import DatabaseConfig, DatabaseManager
from ....infrastructure.persistence.repositories import (
    ContenderRepositoryImpl,
    MatchResultRepositoryImpl,
)

logger = logging.getLogger(__name__)


def build_heuristic_evaluator(
    settings: PTCESettings, rng: Optional[random.Random] = None
) -> HeuristicEvaluator:
    if settings.fallback_confidence == "random":
        return HeuristicEvaluator(random_confidence(rng))
    return HeuristicEvaluator(fixed_confidence())


def build_engine(
    settings: PTCESettings,
    evaluation_source: Optional[EvaluationSource] = None,
    force_heuristic: bool = False,
) -> PTCEEngine:
    """Engine wired from settings; the source defaults to OpenAI when a key is set."""
    heuristic_evaluator = build_heuristic_evaluator(settings)
    source = evaluation_source or create_evaluation_source(
        settings, heuristic_evaluator, force_heuristic=force_heuristic
    )
    return PTCEEngine(
        evaluation_source=source,
        heuristic_evaluator=heuristic_evaluator,
        discussion_facilitator=DiscussionFacilitator(settings.variance_threshold),
        audit_sink=LoggingAuditSink(),
        evaluation_timeout=settings.evaluation_timeout,
    )


class Container:
    """Owns the engine, database and repositories for one application instance."""

    def __init__(
        self,
        settings: Optional[PTCESettings] = None,
        evaluation_source: Optional[EvaluationSource] = None,
    ):
        self.settings = settings or PTCESettings.from_env()
        self._evaluation_source = evaluation_source
        self._database: Optional[DatabaseManager] = None
        self._engine: Optional[PTCEEngine] = None
        self._match_service: Optional[MatchService] = None
        self._contender_repository: Optional[ContenderRepositoryImpl] = None
        self._initialized = False

    async def wire_dependencies(self):
        """Initialize and wire all dependencies."""
        if self._initialized:
            return

        logger.info("Wiring dependencies for API container")

        self._database = DatabaseManager(
            DatabaseConfig(
                database_url=self.settings.database_url, echo=self.settings.database_echo
            )
        )
        await self._database.create_tables()
        session_factory = self._database.get_async_session_factory()

        self._contender_repository = ContenderRepositoryImpl(session_factory)
        self._engine = build_engine(self.settings, self._evaluation_source)
        self._match_service = MatchService(
            engine=self._engine,
            contender_repository=self._contender_repository,
            match_repository=MatchResultRepositoryImpl(session_factory),
        )

        self._initialized = True
        source_name = self._engine.evaluation_source.name
        logger.info(f"Dependencies wired (evaluation source: {source_name})")

    async def cleanup(self):
        """Release the evaluation source and database connections."""
        logger.info("Cleaning up API container resources")
        if self._engine is not None:
            await self._engine.close()
        if self._database is not None:
            await self._database.close()
        self._initialized = False

    async def get_match_service(self) -> MatchService:
        await self.wire_dependencies()
        return self._match_service

    async def get_contender_repository(self) -> ContenderRepositoryImpl:
        await self.wire_dependencies()
        return self._contender_repository

    async def get_engine(self) -> PTCEEngine:
        await self.wire_dependencies()
        return self._engine


def get_container(request: Request) -> Container:
    """FastAPI dependency returning the application's container."""
    return request.app.state.container
