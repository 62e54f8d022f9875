"""Tests for the initial evaluation stage."""

import asyncio

import pytest

from ptce.application.services.initial_evaluation import (
    EVALUATION_MODE_HEURISTIC,
    EVALUATION_MODE_SOURCE,
    InitialEvaluationStage,
)
from ptce.domain.tournament.interfaces.evaluation_source import (
    EvaluationRequest,
    EvaluationSource,
)
from ptce.domain.tournament.value_objects.criterion import Criterion
from ptce.domain.tournament.value_objects.interaction_log import InteractionLog


class SlowEvaluationSource(EvaluationSource):
    """Never answers within any reasonable timeout."""

    async def evaluate(self, request: EvaluationRequest):
        await asyncio.sleep(10)


class RaisingEvaluationSource(EvaluationSource):
    async def evaluate(self, request: EvaluationRequest):
        raise ConnectionError("connection reset")


class TestInitialEvaluationStage:
    """Test cases for InitialEvaluationStage."""

    @pytest.mark.asyncio
    async def test_all_calls_succeed(
        self, scripted_source, heuristic_evaluator, red_contender, blue_contender
    ):
        """Six source calls, one per (slot, contender)."""
        stage = InitialEvaluationStage(scripted_source, heuristic_evaluator)
        log = InteractionLog()

        result = await stage.run([red_contender, blue_contender], log)

        assert result.mode == EVALUATION_MODE_SOURCE
        assert not result.used_fallback
        assert len(scripted_source.requests) == 6
        assert result.evaluations.scores_for("1") == [8.0, 7.5, 8.5]
        assert result.evaluations.scores_for("2") == [7.0, 8.0, 6.5]
        assert log.actions()[0] == "start_initial_evaluations"
        assert log.actions()[-1] == "completed_initial_evaluations"

    @pytest.mark.asyncio
    async def test_each_slot_receives_its_criterion(
        self, scripted_source, heuristic_evaluator, red_contender, blue_contender
    ):
        stage = InitialEvaluationStage(scripted_source, heuristic_evaluator)

        await stage.run([red_contender, blue_contender], InteractionLog())

        criteria = {request.criterion for request in scripted_source.requests}
        assert criteria == set(Criterion)

    @pytest.mark.asyncio
    async def test_evaluating_precedes_evaluated_per_slot(
        self, scripted_source, heuristic_evaluator, red_contender, blue_contender
    ):
        stage = InitialEvaluationStage(scripted_source, heuristic_evaluator)
        log = InteractionLog()

        await stage.run([red_contender, blue_contender], log)

        for label, criterion in (
            ("LLM1", "creativity"),
            ("LLM2", "technical"),
            ("LLM3", "performance"),
        ):
            slot_actions = [entry.action for entry in log if entry.slot == label]
            assert slot_actions.index(f"evaluating_{criterion}") < slot_actions.index(
                "evaluated_model"
            )

    @pytest.mark.asyncio
    async def test_single_failure_discards_every_source_result(
        self, scripted_source, heuristic_evaluator, red_contender, blue_contender
    ):
        """One failed call means the whole set comes from the heuristic evaluator."""
        scripted_source.failures[("2", Criterion.TECHNICAL)] = "rate limited"
        stage = InitialEvaluationStage(scripted_source, heuristic_evaluator)
        log = InteractionLog()

        result = await stage.run([red_contender, blue_contender], log)

        expected = heuristic_evaluator.evaluate_all([red_contender, blue_contender])
        assert result.mode == EVALUATION_MODE_HEURISTIC
        assert result.used_fallback
        assert result.fallback_reason == "rate limited"
        assert result.evaluations == expected
        assert all(confidence == 0.7 for confidence in result.evaluations.confidences_for("1"))

        fallback = [entry for entry in log if entry.action == "fallback_to_simulated"]
        assert len(fallback) == 1
        assert fallback[0].details["error"] == "rate limited"
        assert fallback[0].details["failed_calls"] == [
            {"slot": "LLM2", "contender_id": "2", "error": "rate limited"}
        ]

    @pytest.mark.asyncio
    async def test_timeout_triggers_fallback(
        self, heuristic_evaluator, red_contender, blue_contender
    ):
        stage = InitialEvaluationStage(
            SlowEvaluationSource(), heuristic_evaluator, timeout_seconds=0.01
        )
        log = InteractionLog()

        result = await stage.run([red_contender, blue_contender], log)

        assert result.used_fallback
        fallback = next(entry for entry in log if entry.action == "fallback_to_simulated")
        assert fallback.details["error_type"] == "timeout"
        assert len(fallback.details["failed_calls"]) == 6

    @pytest.mark.asyncio
    async def test_raising_source_triggers_fallback(
        self, heuristic_evaluator, red_contender, blue_contender
    ):
        stage = InitialEvaluationStage(RaisingEvaluationSource(), heuristic_evaluator)

        result = await stage.run([red_contender, blue_contender], InteractionLog())

        assert result.used_fallback
        assert result.fallback_reason == "connection reset"
