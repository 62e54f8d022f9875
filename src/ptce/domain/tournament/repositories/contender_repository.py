"""Contender repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.contender import Contender


class ContenderRepository(ABC):
    """Repository interface for stored contender records."""

    @abstractmethod
    async def save(self, contender: Contender) -> Contender:
        """Save or update contender, returning it with its stored ID."""
        pass

    @abstractmethod
    async def get_by_id(self, contender_id: str) -> Optional[Contender]:
        """Get contender by ID."""
        pass

    @abstractmethod
    async def get_by_ids(self, contender_ids: List[str]) -> List[Contender]:
        """Get all contenders whose IDs are listed; unknown IDs are skipped."""
        pass
