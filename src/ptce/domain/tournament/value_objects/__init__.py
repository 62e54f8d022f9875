"""Value objects for tournament domain."""

from .consensus import DEFAULT_OVERALL_CONFIDENCE, ConsensusEntry, ConsensusScores
from .criterion import EVALUATOR_SLOTS, SLOT_NUMBERS, Criterion, EvaluatorSlot, get_slot
from .evaluation import DiscussionResult, Evaluation, EvaluationSet
from .interaction_log import InteractionLog, InteractionLogEntry, InteractionPhase
from .match_record import ContenderPerformance, MatchRecord
from .match_result import DetailedMatchResult, MatchResult

__all__ = [
    "ConsensusEntry",
    "ConsensusScores",
    "ContenderPerformance",
    "Criterion",
    "DEFAULT_OVERALL_CONFIDENCE",
    "DetailedMatchResult",
    "DiscussionResult",
    "EVALUATOR_SLOTS",
    "Evaluation",
    "EvaluationSet",
    "EvaluatorSlot",
    "InteractionLog",
    "InteractionLogEntry",
    "InteractionPhase",
    "MatchRecord",
    "MatchResult",
    "SLOT_NUMBERS",
    "get_slot",
]
