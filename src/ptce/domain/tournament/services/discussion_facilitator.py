"""Discussion stage: one convergence round when evaluators disagree."""

import logging
import statistics
from typing import Dict, Optional, Sequence

from ..exceptions import ValidationError
from ..value_objects.evaluation import DiscussionResult, Evaluation, EvaluationSet
from ..value_objects.interaction_log import InteractionLog, InteractionPhase

logger = logging.getLogger(__name__)

DEFAULT_VARIANCE_THRESHOLD = 2.0
CONVERGENCE_FACTOR = 0.4  # share of the gap to the mean closed per round
CONFIDENCE_BOOST = 0.3  # share of the remaining distance to 1.0 gained per round


def population_variance(scores: Sequence[float]) -> float:
    """Variance dividing by N, not N - 1."""
    if not scores:
        raise ValidationError("Variance requires at least one score")
    return statistics.pvariance(scores)


def _format_variances(variances: Dict[str, float]) -> str:
    return ", ".join(f"{cid}={variance:.2f}" for cid, variance in variances.items())


class DiscussionFacilitator:
    """Detects evaluator disagreement and pulls scores toward their mean.

    At most one round is ever run, regardless of how large the variance is.
    """

    def __init__(self, variance_threshold: float = DEFAULT_VARIANCE_THRESHOLD):
        if variance_threshold < 0:
            raise ValidationError("Variance threshold cannot be negative")
        self.variance_threshold = variance_threshold

    def calculate_variances(self, evaluations: EvaluationSet) -> Dict[str, float]:
        """Population variance of each contender's three slot scores."""
        return {
            contender_id: population_variance(evaluations.scores_for(contender_id))
            for contender_id in evaluations.contender_ids
        }

    def needs_discussion(self, variances: Dict[str, float]) -> bool:
        return any(variance > self.variance_threshold for variance in variances.values())

    def run_convergence_round(self, evaluations: EvaluationSet) -> EvaluationSet:
        """New set with every score moved toward its contender's pre-round mean."""
        means = {
            contender_id: statistics.fmean(evaluations.scores_for(contender_id))
            for contender_id in evaluations.contender_ids
        }

        def converge(slot_number: int, contender_id: str, evaluation: Evaluation) -> Evaluation:
            mean = means[contender_id]
            return evaluation.adjusted(
                score=evaluation.score * (1 - CONVERGENCE_FACTOR) + mean * CONVERGENCE_FACTOR,
                confidence=evaluation.confidence
                + (1 - evaluation.confidence) * CONFIDENCE_BOOST,
            )

        return evaluations.map(converge)

    def facilitate(
        self, evaluations: EvaluationSet, log: Optional[InteractionLog] = None
    ) -> DiscussionResult:
        """Run the discussion stage over an evaluation set."""
        phase = InteractionPhase.DISCUSSION
        if log is not None:
            log.record(phase, "start_discussion", {"initial_evaluations": evaluations.to_dict()})

        variances = self.calculate_variances(evaluations)
        if log is not None:
            for contender_id, variance in variances.items():
                log.record(
                    phase,
                    "calculated_variance",
                    {
                        "contender_id": contender_id,
                        "scores": evaluations.scores_for(contender_id),
                        "variance": variance,
                    },
                )

        if not self.needs_discussion(variances):
            reasoning = (
                f"Agreement achieved in initial evaluation "
                f"(variance: {_format_variances(variances)})."
            )
            if log is not None:
                log.record(
                    phase,
                    "no_discussion_needed",
                    {"variance_by_contender": variances, "reasoning": reasoning},
                )
            return DiscussionResult(
                evaluations=evaluations,
                reasoning=reasoning,
                variances=variances,
                discussion_held=False,
            )

        logger.info(
            f"High disagreement detected (max variance {max(variances.values()):.2f} > "
            f"{self.variance_threshold}); running discussion round"
        )
        if log is not None:
            log.record(
                phase,
                "high_disagreement_detected",
                {"variance_by_contender": variances, "threshold": self.variance_threshold},
            )

        adjusted = self.run_convergence_round(evaluations)
        reasoning = (
            f"Initial disagreement detected (variance: {_format_variances(variances)}). "
            f"After discussion, the evaluations were refined."
        )
        if log is not None:
            log.record(
                phase,
                "discussion_completed",
                {
                    "initial_evaluations": evaluations.to_dict(),
                    "final_evaluations": adjusted.to_dict(),
                    "reasoning": reasoning,
                },
            )

        return DiscussionResult(
            evaluations=adjusted,
            reasoning=reasoning,
            variances=variances,
            discussion_held=True,
        )
