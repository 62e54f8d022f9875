"""Application services."""

from .initial_evaluation import InitialEvaluationResult, InitialEvaluationStage
from .match_service import MatchService
from .ptce_engine import GENERIC_FAILURE_MESSAGE, PTCEEngine

__all__ = [
    "GENERIC_FAILURE_MESSAGE",
    "InitialEvaluationResult",
    "InitialEvaluationStage",
    "MatchService",
    "PTCEEngine",
]
