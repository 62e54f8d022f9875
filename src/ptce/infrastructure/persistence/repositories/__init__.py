"""Repository implementations."""

from .contender_repository_impl import ContenderRepositoryImpl
from .match_repository_impl import MatchResultRepositoryImpl

__all__ = ["ContenderRepositoryImpl", "MatchResultRepositoryImpl"]
