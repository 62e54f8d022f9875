"""Pure computation services for the consensus pipeline."""

from .consensus_calculator import ConsensusCalculator
from .discussion_facilitator import (
    CONFIDENCE_BOOST,
    CONVERGENCE_FACTOR,
    DEFAULT_VARIANCE_THRESHOLD,
    DiscussionFacilitator,
    population_variance,
)
from .heuristic_evaluator import (
    HeuristicEvaluator,
    fixed_confidence,
    random_confidence,
)
from .outcome_predictor import (
    PREDICTION_WEIGHTS,
    OutcomePredictor,
    PredictiveOutcome,
    build_feature_vector,
    sigmoid,
)
from .winner_determiner import Determination, WinnerDeterminer, blend

__all__ = [
    "CONFIDENCE_BOOST",
    "CONVERGENCE_FACTOR",
    "DEFAULT_VARIANCE_THRESHOLD",
    "PREDICTION_WEIGHTS",
    "ConsensusCalculator",
    "Determination",
    "DiscussionFacilitator",
    "HeuristicEvaluator",
    "OutcomePredictor",
    "PredictiveOutcome",
    "WinnerDeterminer",
    "blend",
    "build_feature_vector",
    "fixed_confidence",
    "population_variance",
    "random_confidence",
    "sigmoid",
]
