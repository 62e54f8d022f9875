"""Evaluation source implementations."""

from typing import Optional

from ...domain.tournament.interfaces.evaluation_source import EvaluationSource
from ...domain.tournament.services.heuristic_evaluator import HeuristicEvaluator
from ..config import PTCESettings
from .heuristic_evaluation_source import HeuristicEvaluationSource
from .openai_evaluation_source import OpenAIEvaluationSource


def create_evaluation_source(
    settings: PTCESettings,
    heuristic_evaluator: Optional[HeuristicEvaluator] = None,
    force_heuristic: bool = False,
) -> EvaluationSource:
    """OpenAI source when credentials are configured, heuristic source otherwise."""
    if settings.has_openai_credentials and not force_heuristic:
        return OpenAIEvaluationSource.from_settings(settings)
    return HeuristicEvaluationSource(heuristic_evaluator)


__all__ = [
    "HeuristicEvaluationSource",
    "OpenAIEvaluationSource",
    "create_evaluation_source",
]
