"""Consensus value objects."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..exceptions import ValidationError

DEFAULT_OVERALL_CONFIDENCE = 0.7


@dataclass(frozen=True)
class ConsensusEntry:
    """Confidence-weighted aggregate of one contender's three slot scores."""

    contender_id: str
    individual_scores: Tuple[float, ...]
    confidence_scores: Tuple[float, ...]
    weighted_scores: Tuple[float, ...]
    final_score: float

    def __post_init__(self):
        lengths = {
            len(self.individual_scores),
            len(self.confidence_scores),
            len(self.weighted_scores),
        }
        if len(lengths) != 1:
            raise ValidationError("Consensus entry score lists must have equal length")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "individual_scores": list(self.individual_scores),
            "confidence_scores": list(self.confidence_scores),
            "weighted_scores": list(self.weighted_scores),
            "final_score": self.final_score,
        }


@dataclass(frozen=True)
class ConsensusScores:
    """Per-contender consensus entries plus one shared decision confidence."""

    entries: Dict[str, ConsensusEntry]
    overall_confidence: float = DEFAULT_OVERALL_CONFIDENCE

    def __getitem__(self, contender_id: str) -> ConsensusEntry:
        try:
            return self.entries[contender_id]
        except KeyError:
            raise ValidationError(f"No consensus entry for contender '{contender_id}'")

    def __contains__(self, contender_id: object) -> bool:
        return contender_id in self.entries

    def final_score(self, contender_id: str) -> float:
        return self[contender_id].final_score

    def final_scores(self) -> Dict[str, float]:
        return {cid: entry.final_score for cid, entry in self.entries.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": {cid: entry.to_dict() for cid, entry in self.entries.items()},
            "overall_confidence": self.overall_confidence,
        }
