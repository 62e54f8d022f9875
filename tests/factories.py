"""Test data factories for generating test objects."""

from typing import Dict

import factory

from ptce.domain.tournament.entities.contender import Contender, ContenderAttributes
from ptce.domain.tournament.interfaces.evaluation_source import (
    EvaluationFailure,
    EvaluationOutcome,
    EvaluationRequest,
    EvaluationSource,
    EvaluationSuccess,
)
from ptce.domain.tournament.value_objects.evaluation import Evaluation
from ptce.domain.tournament.value_objects.match_record import MatchRecord


class ContenderAttributesFactory(factory.Factory):
    """Factory for ContenderAttributes value objects."""

    class Meta:
        model = ContenderAttributes

    offense = factory.Faker("random_int", min=0, max=100)
    defense = factory.Faker("random_int", min=0, max=100)
    agility = factory.Faker("random_int", min=0, max=100)
    strategy = factory.Faker("random_int", min=0, max=100)
    endurance = factory.Faker("random_int", min=0, max=100)


class ContenderFactory(factory.Factory):
    """Factory for Contender entities."""

    class Meta:
        model = Contender

    id = factory.Sequence(lambda n: f"model-{n}")
    name = factory.Sequence(lambda n: f"Model {n}")
    attributes = factory.SubFactory(ContenderAttributesFactory)
    prompt = factory.Faker("sentence", nb_words=6)
    thumbnail_url = None
    model_url = None
    video_url = None
    texture_urls = ()


class EvaluationFactory(factory.Factory):
    """Factory for Evaluation value objects."""

    class Meta:
        model = Evaluation

    score = factory.Faker("pyfloat", min_value=5, max_value=10)
    confidence = factory.Faker("pyfloat", min_value=0.7, max_value=0.95)
    reasoning = factory.Faker("sentence", nb_words=10)


class MatchRecordFactory(factory.Factory):
    """Factory for persisted match records."""

    class Meta:
        model = MatchRecord

    match_id = factory.Faker("uuid4")
    contender1_id = "1"
    contender2_id = "2"
    winner_id = factory.LazyAttribute(lambda obj: obj.contender1_id)
    contender1_score = 8.0
    contender2_score = 7.0
    confidence = 0.9
    reasoning = "Agreement achieved in initial evaluation (variance: 1=0.00, 2=0.00)."


class ScriptedEvaluationSource(EvaluationSource):
    """Evaluation source returning preset outcomes keyed by (contender id, criterion)."""

    def __init__(self, evaluations: Dict[tuple, Evaluation], failures: Dict[tuple, str] = None):
        self.evaluations = evaluations
        self.failures = failures or {}
        self.requests = []

    async def evaluate(self, request: EvaluationRequest) -> EvaluationOutcome:
        self.requests.append(request)
        key = (request.contender_id, request.criterion)
        if key in self.failures:
            return EvaluationFailure(error=self.failures[key])
        return EvaluationSuccess(self.evaluations[key])
