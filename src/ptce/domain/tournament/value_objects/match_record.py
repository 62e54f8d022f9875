"""Stored match record value objects."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class MatchRecord:
    """What is persisted for one decided match."""

    match_id: str
    contender1_id: str
    contender2_id: str
    winner_id: str
    contender1_score: float
    contender2_score: float
    confidence: float
    reasoning: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_result(
        cls, match_id: str, contender1_id: str, contender2_id: str, result
    ) -> "MatchRecord":
        """Build from a MatchResult (or DetailedMatchResult) of the given pair."""
        return cls(
            match_id=match_id,
            contender1_id=contender1_id,
            contender2_id=contender2_id,
            winner_id=result.winner.id,
            contender1_score=result.scores[contender1_id],
            contender2_score=result.scores[contender2_id],
            confidence=result.confidence,
            reasoning=result.reasoning,
        )

    def involves(self, contender_id: str) -> bool:
        return contender_id in (self.contender1_id, self.contender2_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "match_id": self.match_id,
            "contender1_id": self.contender1_id,
            "contender2_id": self.contender2_id,
            "winner_id": self.winner_id,
            "contender1_score": self.contender1_score,
            "contender2_score": self.contender2_score,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class ContenderPerformance:
    """Win/loss aggregate for one contender across stored matches."""

    contender_id: str
    total_matches: int
    wins: int
    losses: int
    avg_score: float
    avg_confidence: float

    @property
    def win_rate(self) -> float:
        if self.total_matches == 0:
            return 0.0
        return self.wins / self.total_matches

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contender_id": self.contender_id,
            "total_matches": self.total_matches,
            "wins": self.wins,
            "losses": self.losses,
            "avg_score": self.avg_score,
            "avg_confidence": self.avg_confidence,
            "win_rate": self.win_rate,
        }
