"""Deterministic attribute-based evaluator used when no evaluation source is usable."""

import random
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

from ..entities.contender import Contender
from ..exceptions import ValidationError
from ..value_objects.criterion import EVALUATOR_SLOTS, Criterion
from ..value_objects.evaluation import Evaluation, EvaluationSet

MIN_SCORE = 5.0
MAX_SCORE = 10.0
FALLBACK_CONFIDENCE = 0.7
RANDOM_CONFIDENCE_RANGE: Tuple[float, float] = (0.7, 0.95)

# Attributes averaged into the score basis for each criterion
CRITERION_BASIS: Dict[Criterion, Tuple[str, str]] = {
    Criterion.CREATIVITY: ("strategy", "endurance"),
    Criterion.TECHNICAL: ("defense", "agility"),
    Criterion.PERFORMANCE: ("offense", "agility"),
}

ConfidenceGenerator = Callable[[], float]


def fixed_confidence(value: float = FALLBACK_CONFIDENCE) -> ConfidenceGenerator:
    """Confidence generator that always returns ``value``."""
    if not (0 < value <= 1):
        raise ValidationError("Fallback confidence must be in (0, 1]")
    return lambda: value


def random_confidence(
    rng: Optional[random.Random] = None,
    low: float = RANDOM_CONFIDENCE_RANGE[0],
    high: float = RANDOM_CONFIDENCE_RANGE[1],
) -> ConfidenceGenerator:
    """Uniform confidence generator over [low, high]; pass a seeded rng for repeatability."""
    if not (0 < low <= high <= 1):
        raise ValidationError("Confidence range must satisfy 0 < low <= high <= 1")
    source = rng or random.Random()
    return lambda: low + source.random() * (high - low)


class HeuristicEvaluator:
    """Maps contender attributes onto the 5-10 score scale per criterion."""

    def __init__(self, confidence_generator: Optional[ConfidenceGenerator] = None):
        self._confidence_generator = confidence_generator or fixed_confidence()

    @staticmethod
    def score_basis(attributes: Mapping[str, float], criterion: Criterion) -> float:
        """Mean of the two attributes the criterion is based on."""
        first, second = CRITERION_BASIS[Criterion(criterion)]
        return (attributes[first] + attributes[second]) / 2

    @classmethod
    def score_for(cls, attributes: Mapping[str, float], criterion: Criterion) -> float:
        basis = cls.score_basis(attributes, criterion)
        return MIN_SCORE + (basis / 100) * (MAX_SCORE - MIN_SCORE)

    def evaluate_attributes(
        self, contender_name: str, attributes: Mapping[str, float], criterion: Criterion
    ) -> Evaluation:
        criterion = Criterion(criterion)
        return Evaluation(
            score=self.score_for(attributes, criterion),
            confidence=self._confidence_generator(),
            reasoning=(
                f"Fallback evaluation for {contender_name} based on {criterion.value} criteria."
            ),
        )

    def evaluate(self, contender: Contender, criterion: Criterion) -> Evaluation:
        """Evaluate one contender against one criterion."""
        return self.evaluate_attributes(contender.name, contender.attributes.to_dict(), criterion)

    def evaluate_all(self, contenders: Iterable[Contender]) -> EvaluationSet:
        """Full evaluation set for every contender across all slots."""
        contenders = list(contenders)
        return EvaluationSet(
            {
                slot.number: {
                    contender.id: self.evaluate(contender, slot.criterion)
                    for contender in contenders
                }
                for slot in EVALUATOR_SLOTS
            }
        )
