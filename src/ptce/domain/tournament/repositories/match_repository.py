"""Match result repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..value_objects.match_record import ContenderPerformance, MatchRecord


class MatchResultRepository(ABC):
    """Repository interface for decided matches."""

    @abstractmethod
    async def save_match_result(self, record: MatchRecord) -> None:
        """Persist one decided match."""
        pass

    @abstractmethod
    async def get_by_match_id(self, match_id: str) -> Optional[MatchRecord]:
        """Get a decided match by its match ID."""
        pass

    @abstractmethod
    async def get_contender_matches(self, contender_id: str) -> List[MatchRecord]:
        """All matches a contender took part in, newest first."""
        pass

    @abstractmethod
    async def get_contender_performance(
        self, contender_id: str
    ) -> Optional[ContenderPerformance]:
        """Aggregate wins, losses and averages for one contender."""
        pass
