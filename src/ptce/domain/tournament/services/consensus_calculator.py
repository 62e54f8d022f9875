"""Consensus stage: confidence-weighted aggregation per contender."""

from typing import Optional, Sequence

from ..exceptions import AggregationError
from ..value_objects.consensus import DEFAULT_OVERALL_CONFIDENCE, ConsensusEntry, ConsensusScores
from ..value_objects.evaluation import EvaluationSet
from ..value_objects.interaction_log import InteractionLog, InteractionPhase


class ConsensusCalculator:
    """Weights each slot score by its confidence: S = sum(s * c) / sum(c)."""

    def calculate_entry(self, evaluations: EvaluationSet, contender_id: str) -> ConsensusEntry:
        scores = evaluations.scores_for(contender_id)
        confidences = evaluations.confidences_for(contender_id)
        weighted_scores = [score * confidence for score, confidence in zip(scores, confidences)]

        confidence_sum = sum(confidences)
        if confidence_sum <= 0:
            raise AggregationError(
                f"Confidence sum for contender '{contender_id}' is {confidence_sum}; "
                f"cannot weight scores",
                details={"contender_id": contender_id, "confidences": confidences},
            )

        return ConsensusEntry(
            contender_id=contender_id,
            individual_scores=tuple(scores),
            confidence_scores=tuple(confidences),
            weighted_scores=tuple(weighted_scores),
            final_score=sum(weighted_scores) / confidence_sum,
        )

    @staticmethod
    def overall_confidence(first_score: float, second_score: float) -> float:
        """Decision confidence from the score gap: 0.5 at no gap, capped at 1.0."""
        return min(1.0, abs(first_score - second_score) / 2 + 0.5)

    def calculate(
        self,
        evaluations: EvaluationSet,
        contender_ids: Sequence[str],
        log: Optional[InteractionLog] = None,
    ) -> ConsensusScores:
        """Consensus entry per contender plus the shared decision confidence.

        The first two ids are the pair compared for the decision confidence.
        """
        phase = InteractionPhase.CONSENSUS_BUILDING
        if log is not None:
            log.record(phase, "start_consensus_calculation", {"contender_ids": list(contender_ids)})

        entries = {}
        for contender_id in contender_ids:
            entry = self.calculate_entry(evaluations, contender_id)
            entries[contender_id] = entry
            if log is not None:
                log.record(
                    phase,
                    "contender_consensus_calculated",
                    {"contender_id": contender_id, **entry.to_dict()},
                )

        if len(contender_ids) >= 2:
            first, second = contender_ids[0], contender_ids[1]
            score_difference = abs(entries[first].final_score - entries[second].final_score)
            confidence = self.overall_confidence(
                entries[first].final_score, entries[second].final_score
            )
            if log is not None:
                log.record(
                    phase,
                    "overall_confidence_calculated",
                    {
                        "contender_scores": {
                            first: entries[first].final_score,
                            second: entries[second].final_score,
                        },
                        "score_difference": score_difference,
                        "confidence": confidence,
                    },
                )
        else:
            confidence = DEFAULT_OVERALL_CONFIDENCE
            if log is not None:
                log.record(
                    phase,
                    "default_confidence_used",
                    {"confidence": confidence, "reason": "Fewer than two contenders provided"},
                )

        return ConsensusScores(entries=entries, overall_confidence=confidence)
