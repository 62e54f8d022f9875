"""Predictive stage: attribute features squashed through a fixed logistic model."""

import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..entities.contender import Contender, ContenderAttributes
from ..exceptions import ValidationError
from ..value_objects.consensus import ConsensusScores
from ..value_objects.interaction_log import InteractionLog, InteractionPhase

FEATURE_NAMES: Tuple[str, ...] = (
    "offense",
    "defense",
    "agility",
    "strategy",
    "endurance",
    "offense_agility",
    "defense_endurance",
    "strategy_emphasis",
)

# Fixed stand-in weights; reused cyclically if the vector length differs
PREDICTION_WEIGHTS: Tuple[float, ...] = (0.2, 0.15, 0.15, 0.25, 0.15, 0.3, 0.25, 0.4)

_SMALLEST_PROBABILITY = math.nextafter(0.0, 1.0)
_LARGEST_PROBABILITY = math.nextafter(1.0, 0.0)


def sigmoid(value: float) -> float:
    """Logistic function, kept strictly inside (0, 1)."""
    if value >= 0:
        result = 1 / (1 + math.exp(-value))
    else:
        exp_value = math.exp(value)
        result = exp_value / (1 + exp_value)
    return min(max(result, _SMALLEST_PROBABILITY), _LARGEST_PROBABILITY)


def build_feature_vector(attributes: ContenderAttributes) -> List[float]:
    """Fixed 8-slot feature layout derived from the five attributes."""
    return [
        attributes.offense / 100,
        attributes.defense / 100,
        attributes.agility / 100,
        attributes.strategy / 100,
        attributes.endurance / 100,
        (attributes.offense + attributes.agility) / 200,
        (attributes.defense + attributes.endurance) / 200,
        attributes.strategy / 100,
    ]


def weight_features(features: Sequence[float], confidences: Sequence[float]) -> List[float]:
    """Multiply feature i by slot confidence i mod len(confidences)."""
    if not confidences:
        raise ValidationError("At least one confidence is required to weight features")
    return [feature * confidences[i % len(confidences)] for i, feature in enumerate(features)]


def linear_combination(
    values: Sequence[float], weights: Sequence[float] = PREDICTION_WEIGHTS
) -> float:
    return sum(value * weights[i % len(weights)] for i, value in enumerate(values))


@dataclass(frozen=True)
class PredictiveOutcome:
    """Intermediate values and the resulting probability for one contender."""

    contender_id: str
    features: Tuple[float, ...]
    weighted_features: Tuple[float, ...]
    probability: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "features": list(self.features),
            "weighted_features": list(self.weighted_features),
            "probability": self.probability,
        }


class OutcomePredictor:
    """Derives a (0, 1) outcome per contender; no learning takes place."""

    def __init__(self, weights: Sequence[float] = PREDICTION_WEIGHTS):
        if not weights:
            raise ValidationError("Prediction weights cannot be empty")
        self.weights = tuple(weights)

    def predict(self, contender: Contender, confidences: Sequence[float]) -> PredictiveOutcome:
        features = build_feature_vector(contender.attributes)
        weighted = weight_features(features, confidences)
        return PredictiveOutcome(
            contender_id=contender.id,
            features=tuple(features),
            weighted_features=tuple(weighted),
            probability=sigmoid(linear_combination(weighted, self.weights)),
        )

    def predict_all(
        self,
        contenders: Sequence[Contender],
        consensus: ConsensusScores,
        log: Optional[InteractionLog] = None,
    ) -> Dict[str, PredictiveOutcome]:
        """Predictive outcome for each contender using its consensus confidences."""
        phase = InteractionPhase.PREDICTIVE_INTEGRATION
        if log is not None:
            log.record(
                phase,
                "start_predictive_outcomes",
                {"contender_ids": [contender.id for contender in contenders]},
            )

        outcomes: Dict[str, PredictiveOutcome] = {}
        for contender in contenders:
            confidences = consensus[contender.id].confidence_scores
            outcome = self.predict(contender, confidences)
            outcomes[contender.id] = outcome

            if log is not None:
                log.record(
                    phase,
                    "feature_vector_generated",
                    {
                        "contender_id": contender.id,
                        "features": dict(zip(FEATURE_NAMES, outcome.features)),
                    },
                )
                log.record(
                    phase,
                    "weighted_features_calculated",
                    {
                        "contender_id": contender.id,
                        "confidence_scores": list(confidences),
                        "weighted_features": list(outcome.weighted_features),
                    },
                )
                log.record(
                    phase,
                    "prediction_generated",
                    {"contender_id": contender.id, "probability": outcome.probability},
                )

        return outcomes


def probabilities(outcomes: Mapping[str, PredictiveOutcome]) -> Dict[str, float]:
    """Flatten outcomes to contender id -> probability."""
    return {contender_id: outcome.probability for contender_id, outcome in outcomes.items()}
