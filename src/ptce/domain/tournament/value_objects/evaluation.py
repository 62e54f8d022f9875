"""Evaluation value objects."""

import math
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterator, List, Mapping, Tuple

from ..exceptions import ValidationError
from .criterion import EVALUATOR_SLOTS, SLOT_NUMBERS, get_slot


def _coerce_number(value: Any, field_name: str) -> float:
    """Convert a payload value to a finite float or raise."""
    if isinstance(value, bool):
        raise ValidationError(f"Field '{field_name}' must be numeric", field_name=field_name)

    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError(f"Field '{field_name}' must be numeric", field_name=field_name)

    if not isinstance(value, (int, float)):
        raise ValidationError(f"Field '{field_name}' must be numeric", field_name=field_name)

    if not math.isfinite(value):
        raise ValidationError(f"Field '{field_name}' must be finite", field_name=field_name)

    return float(value)


@dataclass(frozen=True)
class Evaluation:
    """One evaluator's judgement of one contender."""

    score: float  # expected in [5, 10]
    confidence: float  # expected in [0, 1]
    reasoning: str

    def __post_init__(self):
        """Reject non-numeric score or confidence."""
        object.__setattr__(self, "score", _coerce_number(self.score, "score"))
        object.__setattr__(self, "confidence", _coerce_number(self.confidence, "confidence"))

        if not isinstance(self.reasoning, str):
            raise ValidationError("Field 'reasoning' must be a string", field_name="reasoning")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Evaluation":
        """Build from an untrusted payload such as a decoded LLM response."""
        if not isinstance(payload, Mapping):
            raise ValidationError("Evaluation payload must be an object")

        missing = [key for key in ("score", "confidence", "reasoning") if key not in payload]
        if missing:
            raise ValidationError(f"Evaluation payload missing fields: {', '.join(missing)}")

        reasoning = payload["reasoning"]
        if not isinstance(reasoning, str) or not reasoning.strip():
            raise ValidationError("Evaluation reasoning cannot be empty", field_name="reasoning")

        evaluation = cls(
            score=payload["score"],
            confidence=payload["confidence"],
            reasoning=reasoning.strip(),
        )

        # Zero or negative values mean the source gave no usable judgement
        for field_name in ("score", "confidence"):
            if getattr(evaluation, field_name) <= 0:
                raise ValidationError(
                    f"Field '{field_name}' must be positive", field_name=field_name
                )

        return evaluation

    def adjusted(self, score: float, confidence: float) -> "Evaluation":
        """Copy with a new score and confidence."""
        return replace(self, score=score, confidence=confidence)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {"score": self.score, "confidence": self.confidence, "reasoning": self.reasoning}


class EvaluationSet:
    """Slot -> contender id -> Evaluation, for exactly three slots.

    Treated as read-only: stages that change evaluations build a new set.
    """

    def __init__(self, evaluations: Mapping[int, Mapping[str, Evaluation]]):
        if set(evaluations.keys()) != set(SLOT_NUMBERS):
            raise ValidationError(
                f"Evaluation set requires slots {list(SLOT_NUMBERS)}, "
                f"got {sorted(evaluations.keys())}"
            )

        first_ids = list(evaluations[SLOT_NUMBERS[0]].keys())
        if not first_ids:
            raise ValidationError("Evaluation set cannot be empty")

        for slot_number in SLOT_NUMBERS:
            slot_ids = list(evaluations[slot_number].keys())
            if set(slot_ids) != set(first_ids):
                raise ValidationError(
                    f"Slot {slot_number} does not cover the same contenders as slot "
                    f"{SLOT_NUMBERS[0]}"
                )
            for contender_id, evaluation in evaluations[slot_number].items():
                if not isinstance(evaluation, Evaluation):
                    raise ValidationError(
                        f"Slot {slot_number} entry for '{contender_id}' is not an Evaluation"
                    )

        self._contender_ids: Tuple[str, ...] = tuple(first_ids)
        self._evaluations: Dict[int, Dict[str, Evaluation]] = {
            slot_number: {cid: evaluations[slot_number][cid] for cid in self._contender_ids}
            for slot_number in SLOT_NUMBERS
        }

    @property
    def contender_ids(self) -> Tuple[str, ...]:
        """Contender ids in insertion order."""
        return self._contender_ids

    def get(self, slot_number: int, contender_id: str) -> Evaluation:
        """Evaluation for one (slot, contender) pair."""
        try:
            return self._evaluations[slot_number][contender_id]
        except KeyError:
            raise ValidationError(
                f"No evaluation for contender '{contender_id}' in slot {slot_number}"
            )

    def evaluations_for(self, contender_id: str) -> List[Evaluation]:
        """The contender's evaluations in slot order."""
        return [self.get(slot_number, contender_id) for slot_number in SLOT_NUMBERS]

    def scores_for(self, contender_id: str) -> List[float]:
        return [evaluation.score for evaluation in self.evaluations_for(contender_id)]

    def confidences_for(self, contender_id: str) -> List[float]:
        return [evaluation.confidence for evaluation in self.evaluations_for(contender_id)]

    def map(self, transform: Callable[[int, str, Evaluation], Evaluation]) -> "EvaluationSet":
        """New set with every evaluation passed through ``transform``."""
        return EvaluationSet(
            {
                slot_number: {
                    cid: transform(slot_number, cid, self._evaluations[slot_number][cid])
                    for cid in self._contender_ids
                }
                for slot_number in SLOT_NUMBERS
            }
        )

    def items(self) -> Iterator[Tuple[int, str, Evaluation]]:
        """Iterate (slot number, contender id, evaluation) in slot order."""
        for slot_number in SLOT_NUMBERS:
            for contender_id in self._contender_ids:
                yield slot_number, contender_id, self._evaluations[slot_number][contender_id]

    def scores_by_slot(self) -> Dict[str, Dict[str, float]]:
        """Scores keyed by slot key, used in log payloads."""
        return {
            get_slot(slot_number).key: {
                cid: evaluation.score for cid, evaluation in by_contender.items()
            }
            for slot_number, by_contender in self._evaluations.items()
        }

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """Convert to dictionary representation keyed by slot key."""
        return {
            slot.key: {
                cid: self._evaluations[slot.number][cid].to_dict() for cid in self._contender_ids
            }
            for slot in EVALUATOR_SLOTS
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, EvaluationSet):
            return False
        return self._evaluations == other._evaluations

    def __repr__(self) -> str:
        return f"EvaluationSet(contenders={list(self._contender_ids)})"


@dataclass(frozen=True)
class DiscussionResult:
    """Output of the discussion stage."""

    evaluations: EvaluationSet
    reasoning: str
    variances: Dict[str, float]
    discussion_held: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "evaluations": self.evaluations.to_dict(),
            "reasoning": self.reasoning,
            "variances": dict(self.variances),
            "discussion_held": self.discussion_held,
        }
