"""Predictive Triadic Consensus Engine.

Runs the five stages in order for one pair of contenders:

1. Initial evaluation: three criterion-bound slots score both contenders.
2. Discussion: one convergence round when slot scores disagree.
3. Consensus: confidence-weighted final score per contender.
4. Predictive integration: attribute features through a fixed logistic model.
5. Determination: 70/30 blend of consensus and prediction picks the winner.

Each call owns a fresh InteractionLog, so concurrent calls never share state.
"""

import logging
import uuid
from typing import Optional

from opentelemetry import trace

from ...domain.tournament.entities.contender import Contender
from ...domain.tournament.exceptions import ValidationError, WinnerDeterminationError
from ...domain.tournament.interfaces.audit_sink import AuditSink
from ...domain.tournament.interfaces.evaluation_source import EvaluationSource
from ...domain.tournament.services.consensus_calculator import ConsensusCalculator
from ...domain.tournament.services.discussion_facilitator import DiscussionFacilitator
from ...domain.tournament.services.heuristic_evaluator import HeuristicEvaluator
from ...domain.tournament.services.outcome_predictor import OutcomePredictor, probabilities
from ...domain.tournament.services.winner_determiner import WinnerDeterminer
from ...domain.tournament.value_objects.interaction_log import InteractionLog, InteractionPhase
from ...domain.tournament.value_objects.match_result import DetailedMatchResult, MatchResult
from .initial_evaluation import InitialEvaluationStage

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to determine winner using PTCE algorithm"


class PTCEEngine:
    """Determines the winner of a two-contender match."""

    def __init__(
        self,
        evaluation_source: EvaluationSource,
        heuristic_evaluator: Optional[HeuristicEvaluator] = None,
        discussion_facilitator: Optional[DiscussionFacilitator] = None,
        consensus_calculator: Optional[ConsensusCalculator] = None,
        outcome_predictor: Optional[OutcomePredictor] = None,
        winner_determiner: Optional[WinnerDeterminer] = None,
        audit_sink: Optional[AuditSink] = None,
        evaluation_timeout: float = 30.0,
    ):
        self.initial_stage = InitialEvaluationStage(
            source=evaluation_source,
            heuristic_evaluator=heuristic_evaluator,
            timeout_seconds=evaluation_timeout,
        )
        self.discussion_facilitator = discussion_facilitator or DiscussionFacilitator()
        self.consensus_calculator = consensus_calculator or ConsensusCalculator()
        self.outcome_predictor = outcome_predictor or OutcomePredictor()
        self.winner_determiner = winner_determiner or WinnerDeterminer()
        self.audit_sink = audit_sink

    @property
    def evaluation_source(self) -> EvaluationSource:
        return self.initial_stage.source

    async def determine_winner(
        self, first: Contender, second: Contender, match_id: Optional[str] = None
    ) -> MatchResult:
        """Run the pipeline and return only the externally visible result."""
        detailed = await self.determine_winner_with_details(first, second, match_id=match_id)
        return detailed.result

    async def determine_winner_with_details(
        self, first: Contender, second: Contender, match_id: Optional[str] = None
    ) -> DetailedMatchResult:
        """Run the pipeline and return the result with every intermediate artifact.

        Raises:
            ValidationError: If the contenders are not two distinct entities
            WinnerDeterminationError: If any stage fails
        """
        self._validate_pair(first, second)

        run_id = match_id or uuid.uuid4().hex
        log = InteractionLog(run_id=run_id, sink=self.audit_sink)

        logger.info(f"Starting PTCE run {run_id}: {first.id} vs {second.id}")

        with tracer.start_as_current_span("ptce.determine_winner") as span:
            span.set_attribute("ptce.run_id", run_id)
            span.set_attribute("ptce.contender_ids", [first.id, second.id])
            try:
                detailed = await self._run(first, second, log)
            except Exception as e:
                logger.error(f"PTCE run {run_id} failed: {e}", exc_info=True)
                span.record_exception(e)
                raise WinnerDeterminationError(
                    GENERIC_FAILURE_MESSAGE,
                    details={"run_id": run_id, "error_type": type(e).__name__},
                ) from e

            span.set_attribute("ptce.winner_id", detailed.winner.id)
            span.set_attribute("ptce.evaluation_mode", detailed.evaluation_mode)

        logger.info(
            f"PTCE run {run_id} complete: winner {detailed.winner.id} "
            f"(confidence {detailed.confidence:.2f}, mode {detailed.evaluation_mode})"
        )
        return detailed.with_match_id(match_id) if match_id else detailed

    async def _run(
        self, first: Contender, second: Contender, log: InteractionLog
    ) -> DetailedMatchResult:
        contenders = [first, second]
        log.record(
            InteractionPhase.FINAL_DETERMINATION,
            "start_evaluation",
            {"contender1": first.summary(), "contender2": second.summary()},
        )

        with tracer.start_as_current_span("ptce.initial_evaluation"):
            initial = await self.initial_stage.run(contenders, log)

        with tracer.start_as_current_span("ptce.discussion"):
            discussion = self.discussion_facilitator.facilitate(initial.evaluations, log)

        with tracer.start_as_current_span("ptce.consensus"):
            consensus = self.consensus_calculator.calculate(
                discussion.evaluations, [first.id, second.id], log
            )

        with tracer.start_as_current_span("ptce.predictive_integration"):
            outcomes = self.outcome_predictor.predict_all(contenders, consensus, log)

        with tracer.start_as_current_span("ptce.determination"):
            predictive = probabilities(outcomes)
            determination = self.winner_determiner.determine(
                first, second, consensus, predictive, log
            )

        result = MatchResult(
            winner=determination.winner,
            scores=determination.blended_scores,
            confidence=consensus.overall_confidence,
            reasoning=discussion.reasoning,
        )
        return DetailedMatchResult(
            result=result,
            interactions=log.entries,
            initial_evaluations=initial.evaluations,
            discussion=discussion,
            consensus=consensus,
            predictive_outcomes=predictive,
            evaluation_mode=initial.mode,
            metadata={
                "run_id": log.run_id,
                "evaluation_source": self.evaluation_source.name,
                "fallback_reason": initial.fallback_reason,
                "predictive_details": {cid: o.to_dict() for cid, o in outcomes.items()},
            },
        )

    @staticmethod
    def _validate_pair(first: Contender, second: Contender) -> None:
        if not isinstance(first, Contender) or not isinstance(second, Contender):
            raise ValidationError("Two contenders are required")
        if first.id == second.id:
            raise ValidationError(
                f"Contenders must be distinct, got '{first.id}' twice", field_name="id"
            )

    async def close(self) -> None:
        await self.evaluation_source.close()
