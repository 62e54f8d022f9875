"""Evaluation criteria and their static binding to evaluator slots."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from ..exceptions import ValidationError


class Criterion(str, Enum):
    """Fixed evaluation dimensions."""

    CREATIVITY = "creativity"
    TECHNICAL = "technical"
    PERFORMANCE = "performance"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EvaluatorSlot:
    """One of the three evaluator roles, bound to exactly one criterion."""

    number: int
    criterion: Criterion
    label: str

    @property
    def key(self) -> str:
        """Stable key used in serialized evaluation sets."""
        return f"llm{self.number}"

    def __str__(self) -> str:
        return f"{self.label} ({self.criterion.value})"


EVALUATOR_SLOTS: Tuple[EvaluatorSlot, ...] = (
    EvaluatorSlot(number=1, criterion=Criterion.CREATIVITY, label="LLM1"),
    EvaluatorSlot(number=2, criterion=Criterion.TECHNICAL, label="LLM2"),
    EvaluatorSlot(number=3, criterion=Criterion.PERFORMANCE, label="LLM3"),
)

SLOT_NUMBERS: Tuple[int, ...] = tuple(slot.number for slot in EVALUATOR_SLOTS)

_SLOTS_BY_NUMBER: Dict[int, EvaluatorSlot] = {slot.number: slot for slot in EVALUATOR_SLOTS}


def get_slot(number: int) -> EvaluatorSlot:
    """Look up an evaluator slot by its number."""
    try:
        return _SLOTS_BY_NUMBER[number]
    except KeyError:
        raise ValidationError(f"Unknown evaluator slot: {number}", field_name="slot")
