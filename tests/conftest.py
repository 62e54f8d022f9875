"""Shared test configuration and fixtures."""

import logging

import pytest

from ptce.domain.tournament.entities.contender import Contender
from ptce.domain.tournament.interfaces.audit_sink import CollectingAuditSink
from ptce.domain.tournament.services.heuristic_evaluator import (
    HeuristicEvaluator,
    fixed_confidence,
)
from ptce.domain.tournament.value_objects.criterion import Criterion
from ptce.domain.tournament.value_objects.evaluation import Evaluation
from ptce.infrastructure.config import PTCESettings
from tests.factories import ScriptedEvaluationSource

logging.basicConfig(level=logging.INFO)


@pytest.fixture
def red_contender() -> Contender:
    """Strong attacker."""
    return Contender.create(
        "1",
        "Red Titan",
        {"offense": 90, "defense": 60, "agility": 70, "strategy": 80, "endurance": 50},
    )


@pytest.fixture
def blue_contender() -> Contender:
    """Balanced defender."""
    return Contender.create(
        "2",
        "Blue Warden",
        {"offense": 40, "defense": 85, "agility": 55, "strategy": 65, "endurance": 90},
    )


@pytest.fixture
def heuristic_evaluator() -> HeuristicEvaluator:
    return HeuristicEvaluator(fixed_confidence(0.7))


@pytest.fixture
def audit_sink() -> CollectingAuditSink:
    return CollectingAuditSink()


@pytest.fixture
def scripted_source(red_contender, blue_contender) -> ScriptedEvaluationSource:
    """Source with moderate agreement for both contenders."""
    scores = {
        red_contender.id: {
            Criterion.CREATIVITY: (8.0, 0.9),
            Criterion.TECHNICAL: (7.5, 0.8),
            Criterion.PERFORMANCE: (8.5, 0.85),
        },
        blue_contender.id: {
            Criterion.CREATIVITY: (7.0, 0.75),
            Criterion.TECHNICAL: (8.0, 0.9),
            Criterion.PERFORMANCE: (6.5, 0.8),
        },
    }
    evaluations = {
        (contender_id, criterion): Evaluation(
            score=score, confidence=confidence, reasoning=f"{criterion.value} for {contender_id}"
        )
        for contender_id, by_criterion in scores.items()
        for criterion, (score, confidence) in by_criterion.items()
    }
    return ScriptedEvaluationSource(evaluations)


@pytest.fixture
def sqlite_settings(tmp_path) -> PTCESettings:
    """Heuristic-only settings backed by a throwaway sqlite file."""
    return PTCESettings(
        openai_api_key="",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'ptce-test.db'}",
    )
