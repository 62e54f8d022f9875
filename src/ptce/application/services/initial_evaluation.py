"""Initial evaluation stage with all-or-nothing heuristic fallback."""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ...domain.tournament.entities.contender import Contender
from ...domain.tournament.interfaces.evaluation_source import (
    EvaluationFailure,
    EvaluationOutcome,
    EvaluationRequest,
    EvaluationSource,
    EvaluationSuccess,
)
from ...domain.tournament.services.heuristic_evaluator import HeuristicEvaluator
from ...domain.tournament.value_objects.criterion import EVALUATOR_SLOTS, EvaluatorSlot
from ...domain.tournament.value_objects.evaluation import EvaluationSet
from ...domain.tournament.value_objects.interaction_log import InteractionLog, InteractionPhase

logger = logging.getLogger(__name__)

EVALUATION_MODE_SOURCE = "source"
EVALUATION_MODE_HEURISTIC = "heuristic"


@dataclass(frozen=True)
class InitialEvaluationResult:
    """Evaluation set plus how it was produced."""

    evaluations: EvaluationSet
    mode: str
    fallback_reason: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        return self.mode == EVALUATION_MODE_HEURISTIC


class InitialEvaluationStage:
    """Fans out one source call per (contender, slot) and joins on all of them.

    Any failed call discards every source result for the run and the whole
    set is rebuilt by the heuristic evaluator.
    """

    def __init__(
        self,
        source: EvaluationSource,
        heuristic_evaluator: Optional[HeuristicEvaluator] = None,
        timeout_seconds: float = 30.0,
    ):
        self.source = source
        self.heuristic_evaluator = heuristic_evaluator or HeuristicEvaluator()
        self.timeout_seconds = timeout_seconds

    async def run(
        self, contenders: Sequence[Contender], log: InteractionLog
    ) -> InitialEvaluationResult:
        phase = InteractionPhase.INITIAL_EVALUATION
        log.record(
            phase,
            "start_initial_evaluations",
            {"source": self.source.name, "contenders": [c.summary() for c in contenders]},
        )

        calls: List[Tuple[EvaluatorSlot, Contender]] = [
            (slot, contender) for slot in EVALUATOR_SLOTS for contender in contenders
        ]
        outcomes = await asyncio.gather(
            *(self._evaluate(slot, contender, log) for slot, contender in calls)
        )

        failures = [
            (slot, contender, outcome)
            for (slot, contender), outcome in zip(calls, outcomes)
            if not outcome.is_success
        ]
        if failures:
            return self._fall_back(contenders, failures, log)

        evaluations = EvaluationSet(
            {
                slot.number: {
                    contender.id: outcome.evaluation
                    for (call_slot, contender), outcome in zip(calls, outcomes)
                    if call_slot == slot
                }
                for slot in EVALUATOR_SLOTS
            }
        )
        log.record(
            phase,
            "completed_initial_evaluations",
            {"mode": EVALUATION_MODE_SOURCE, "scores": evaluations.scores_by_slot()},
        )
        logger.info(f"Completed initial evaluations with {self.source.name}")
        return InitialEvaluationResult(evaluations=evaluations, mode=EVALUATION_MODE_SOURCE)

    async def _evaluate(
        self, slot: EvaluatorSlot, contender: Contender, log: InteractionLog
    ) -> EvaluationOutcome:
        """One source call; exceptions and timeouts become failures."""
        phase = InteractionPhase.INITIAL_EVALUATION
        log.record(
            phase,
            f"evaluating_{slot.criterion.value}",
            {"contender": contender.summary(), "criterion": slot.criterion.value},
            slot=slot.label,
        )

        request = EvaluationRequest.for_contender(contender, slot.criterion)
        try:
            outcome = await asyncio.wait_for(
                self.source.evaluate(request), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            outcome = EvaluationFailure(
                error=f"Evaluation timed out after {self.timeout_seconds}s",
                error_type="timeout",
            )
        except Exception as e:
            outcome = EvaluationFailure(error=str(e) or type(e).__name__, error_type="source_error")

        if isinstance(outcome, EvaluationSuccess):
            log.record(
                phase,
                "evaluated_model",
                {"contender_id": contender.id, "evaluation": outcome.evaluation.to_dict()},
                slot=slot.label,
            )
        else:
            logger.debug(
                f"{slot.label} evaluation of {contender.id} failed ({outcome.error_type}): "
                f"{outcome.error}"
            )
        return outcome

    def _fall_back(
        self,
        contenders: Sequence[Contender],
        failures: List[Tuple[EvaluatorSlot, Contender, EvaluationFailure]],
        log: InteractionLog,
    ) -> InitialEvaluationResult:
        phase = InteractionPhase.INITIAL_EVALUATION
        first_slot, _, first_failure = failures[0]
        reason = first_failure.error

        logger.warning(
            f"{len(failures)} of {len(EVALUATOR_SLOTS) * len(contenders)} evaluations from "
            f"{self.source.name} failed, falling back to heuristic evaluations: {reason}"
        )
        log.record(
            phase,
            "fallback_to_simulated",
            {
                "error": reason,
                "error_type": first_failure.error_type,
                "failed_calls": [
                    {"slot": slot.label, "contender_id": contender.id, "error": failure.error}
                    for slot, contender, failure in failures
                ],
            },
            slot=first_slot.label,
        )

        evaluations = self.heuristic_evaluator.evaluate_all(contenders)
        log.record(
            phase,
            "completed_initial_evaluations",
            {"mode": EVALUATION_MODE_HEURISTIC, "scores": evaluations.scores_by_slot()},
        )
        return InitialEvaluationResult(
            evaluations=evaluations, mode=EVALUATION_MODE_HEURISTIC, fallback_reason=reason
        )
