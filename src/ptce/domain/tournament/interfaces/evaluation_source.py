"""Evaluation source interface.

An evaluation source turns (contender, criterion) into an Evaluation. Sources
report failure through the returned outcome instead of raising, so callers can
decide on recovery without exception-driven control flow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Union

from ..entities.contender import Contender
from ..value_objects.criterion import Criterion
from ..value_objects.evaluation import Evaluation


@dataclass(frozen=True)
class EvaluationRequest:
    """Input for one evaluation call."""

    contender_id: str
    contender_name: str
    attributes: Dict[str, float]
    criterion: Criterion

    @classmethod
    def for_contender(cls, contender: Contender, criterion: Criterion) -> "EvaluationRequest":
        return cls(
            contender_id=contender.id,
            contender_name=contender.name,
            attributes=contender.attributes.to_dict(),
            criterion=criterion,
        )


@dataclass(frozen=True)
class EvaluationSuccess:
    """Source produced a well-formed evaluation."""

    evaluation: Evaluation

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class EvaluationFailure:
    """Source could not produce an evaluation."""

    error: str
    error_type: str = "evaluation_failed"
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return False


EvaluationOutcome = Union[EvaluationSuccess, EvaluationFailure]


class EvaluationSource(ABC):
    """Capability producing one evaluation per (contender, criterion)."""

    @property
    def name(self) -> str:
        """Human readable source name used in logs."""
        return type(self).__name__

    @abstractmethod
    async def evaluate(self, request: EvaluationRequest) -> EvaluationOutcome:
        """
        Evaluate one contender against one criterion.

        Args:
            request: Contender identity, attributes and criterion

        Returns:
            EvaluationOutcome: EvaluationSuccess with the evaluation, or
            EvaluationFailure describing why none could be produced
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None
