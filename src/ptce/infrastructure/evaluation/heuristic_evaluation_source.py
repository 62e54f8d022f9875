"""Evaluation source that scores contenders from their attributes alone."""

from typing import Optional

from ...domain.tournament.interfaces.evaluation_source import (
    EvaluationOutcome,
    EvaluationRequest,
    EvaluationSource,
    EvaluationSuccess,
)
from ...domain.tournament.services.heuristic_evaluator import HeuristicEvaluator


class HeuristicEvaluationSource(EvaluationSource):
    """Used when no LLM credentials are configured; never fails."""

    def __init__(self, evaluator: Optional[HeuristicEvaluator] = None):
        self.evaluator = evaluator or HeuristicEvaluator()

    @property
    def name(self) -> str:
        return "heuristic"

    async def evaluate(self, request: EvaluationRequest) -> EvaluationOutcome:
        return EvaluationSuccess(
            self.evaluator.evaluate_attributes(
                request.contender_name, request.attributes, request.criterion
            )
        )
