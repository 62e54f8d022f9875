"""Repository interfaces for tournament domain."""

from .contender_repository import ContenderRepository
from .match_repository import MatchResultRepository

__all__ = ["ContenderRepository", "MatchResultRepository"]
