"""Determination stage: 70/30 blend of consensus and predictive scores."""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from ..entities.contender import Contender
from ..value_objects.consensus import ConsensusScores
from ..value_objects.interaction_log import InteractionLog, InteractionPhase

CONSENSUS_WEIGHT = 0.7
PREDICTIVE_WEIGHT = 0.3
PREDICTIVE_SCALE = 10.0  # maps a (0, 1) probability onto the score range


def blend(final_score: float, predictive_outcome: float) -> float:
    scaled_outcome = predictive_outcome * PREDICTIVE_SCALE
    return CONSENSUS_WEIGHT * final_score + PREDICTIVE_WEIGHT * scaled_outcome


@dataclass(frozen=True)
class Determination:
    winner: Contender
    blended_scores: Dict[str, float]


class WinnerDeterminer:
    """Picks the contender with the higher blended score.

    The comparison is ``first > second``, so an exact tie goes to the second contender.
    """

    def determine(
        self,
        first: Contender,
        second: Contender,
        consensus: ConsensusScores,
        predictive_outcomes: Mapping[str, float],
        log: Optional[InteractionLog] = None,
    ) -> Determination:
        phase = InteractionPhase.FINAL_DETERMINATION
        if log is not None:
            log.record(
                phase,
                "calculating_final_scores",
                {
                    "consensus_scores": {
                        first.id: consensus.final_score(first.id),
                        second.id: consensus.final_score(second.id),
                    },
                    "predictive_outcomes": {
                        first.id: predictive_outcomes[first.id],
                        second.id: predictive_outcomes[second.id],
                    },
                },
            )

        first_score = blend(consensus.final_score(first.id), predictive_outcomes[first.id])
        second_score = blend(consensus.final_score(second.id), predictive_outcomes[second.id])
        blended_scores = {first.id: first_score, second.id: second_score}

        winner = first if first_score > second_score else second

        if log is not None:
            log.record(
                phase,
                "final_scores_calculated",
                {
                    "blended_scores": blended_scores,
                    "consensus_weight": CONSENSUS_WEIGHT,
                    "predictive_weight": PREDICTIVE_WEIGHT,
                },
            )
            log.record(
                phase,
                "winner_determined",
                {
                    "winner_id": winner.id,
                    "winner_name": winner.name,
                    "final_scores": blended_scores,
                },
            )

        return Determination(winner=winner, blended_scores=blended_scores)
