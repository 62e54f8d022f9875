"""Match result value objects."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from ..entities.contender import Contender
from .consensus import ConsensusScores
from .evaluation import DiscussionResult, EvaluationSet
from .interaction_log import InteractionLogEntry


@dataclass(frozen=True)
class MatchResult:
    """Externally visible outcome of one pipeline run."""

    winner: Contender
    scores: Dict[str, float]  # contender_id -> blended score
    confidence: float
    reasoning: str
    match_id: Optional[str] = None

    def with_match_id(self, match_id: str) -> "MatchResult":
        return replace(self, match_id=match_id)

    def loser_id(self) -> str:
        return next(cid for cid in self.scores if cid != self.winner.id)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "winner": self.winner.to_dict(),
            "scores": dict(self.scores),
            "confidence": self.confidence,
            "reasoning": self.reasoning,
        }
        if self.match_id is not None:
            result["match_id"] = self.match_id
        return result


@dataclass(frozen=True)
class DetailedMatchResult:
    """Match result plus every intermediate artifact of the run."""

    result: MatchResult
    interactions: Tuple[InteractionLogEntry, ...]
    initial_evaluations: EvaluationSet
    discussion: DiscussionResult
    consensus: ConsensusScores
    predictive_outcomes: Dict[str, float]
    evaluation_mode: str = "source"
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def winner(self) -> Contender:
        return self.result.winner

    @property
    def scores(self) -> Dict[str, float]:
        return self.result.scores

    @property
    def confidence(self) -> float:
        return self.result.confidence

    @property
    def reasoning(self) -> str:
        return self.result.reasoning

    @property
    def match_id(self) -> Optional[str]:
        return self.result.match_id

    def with_match_id(self, match_id: str) -> "DetailedMatchResult":
        return replace(self, result=self.result.with_match_id(match_id))

    def to_dict(self) -> Dict[str, Any]:
        detailed = self.result.to_dict()
        detailed.update(
            {
                "interactions": [entry.to_dict() for entry in self.interactions],
                "initial_evaluations": self.initial_evaluations.to_dict(),
                "discussion_results": self.discussion.to_dict(),
                "consensus_scores": self.consensus.to_dict(),
                "predictive_outcomes": dict(self.predictive_outcomes),
                "evaluation_mode": self.evaluation_mode,
            }
        )
        return detailed
