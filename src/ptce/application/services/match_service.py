"""Match use cases: decide, persist and report on matches."""

import logging
import uuid
from typing import Optional, Union

from ...domain.tournament.entities.contender import Contender
from ...domain.tournament.exceptions import ContenderNotFoundError
from ...domain.tournament.repositories.contender_repository import ContenderRepository
from ...domain.tournament.repositories.match_repository import MatchResultRepository
from ...domain.tournament.value_objects.match_record import ContenderPerformance, MatchRecord
from ...domain.tournament.value_objects.match_result import DetailedMatchResult, MatchResult
from .ptce_engine import PTCEEngine

logger = logging.getLogger(__name__)


class MatchService:
    """Mints match ids, resolves stored contenders and records decided matches."""

    def __init__(
        self,
        engine: PTCEEngine,
        contender_repository: Optional[ContenderRepository] = None,
        match_repository: Optional[MatchResultRepository] = None,
    ):
        self.engine = engine
        self.contender_repository = contender_repository
        self.match_repository = match_repository

    async def determine_winner(
        self, first: Contender, second: Contender, detailed: bool = False
    ) -> Union[MatchResult, DetailedMatchResult]:
        """Decide a match between two fully described contenders."""
        match_id = str(uuid.uuid4())

        if detailed:
            result = await self.engine.determine_winner_with_details(first, second, match_id)
        else:
            result = await self.engine.determine_winner(first, second, match_id)

        await self._record(match_id, first, second, result)
        return result

    async def determine_winner_by_ids(
        self, first_id: str, second_id: str, detailed: bool = False
    ) -> Union[MatchResult, DetailedMatchResult]:
        """Decide a match between two stored contenders.

        Raises:
            ContenderNotFoundError: If either id has no stored contender
        """
        first, second = await self._load_pair(first_id, second_id)
        return await self.determine_winner(first, second, detailed=detailed)

    async def get_contender_performance(self, contender_id: str) -> ContenderPerformance:
        """Win/loss aggregate for a contender; zeros when it has no recorded matches."""
        performance = None
        if self.match_repository is not None:
            performance = await self.match_repository.get_contender_performance(contender_id)

        if performance is None:
            return ContenderPerformance(
                contender_id=contender_id,
                total_matches=0,
                wins=0,
                losses=0,
                avg_score=0.0,
                avg_confidence=0.0,
            )
        return performance

    async def _load_pair(self, first_id: str, second_id: str):
        if self.contender_repository is None:
            raise ContenderNotFoundError(
                "No contender store is configured", contender_id=first_id
            )

        first = await self.contender_repository.get_by_id(first_id)
        second = await self.contender_repository.get_by_id(second_id)

        missing = [cid for cid, found in ((first_id, first), (second_id, second)) if found is None]
        if missing:
            raise ContenderNotFoundError(
                "One or both models not found",
                contender_id=missing[0],
                details={"missing_ids": missing},
            )
        return first, second

    async def _record(
        self,
        match_id: str,
        first: Contender,
        second: Contender,
        result: Union[MatchResult, DetailedMatchResult],
    ) -> None:
        """Persist the decided match; storage failures never fail the request."""
        if self.match_repository is None:
            return

        record = MatchRecord.from_result(match_id, first.id, second.id, result)
        try:
            await self.match_repository.save_match_result(record)
        except Exception as e:
            logger.warning(f"Failed to save match result {match_id} to database: {e}")
