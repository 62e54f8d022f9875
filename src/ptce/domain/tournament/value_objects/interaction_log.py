"""Per-run interaction log."""

import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional, Tuple

if TYPE_CHECKING:
    from ..interfaces.audit_sink import AuditSink

logger = logging.getLogger(__name__)


class InteractionPhase(str, Enum):
    """Pipeline phases an interaction can belong to."""

    INITIAL_EVALUATION = "initial_evaluation"
    DISCUSSION = "discussion"
    CONSENSUS_BUILDING = "consensus_building"
    PREDICTIVE_INTEGRATION = "predictive_integration"
    FINAL_DETERMINATION = "final_determination"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InteractionLogEntry:
    """One recorded stage transition or intermediate value."""

    timestamp: datetime
    phase: InteractionPhase
    action: str
    details: Dict[str, Any] = field(default_factory=dict)
    slot: Optional[str] = None
    sequence: int = 0
    run_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        entry = {
            "timestamp": self.timestamp.isoformat(),
            "phase": self.phase.value,
            "action": self.action,
            "details": self.details,
            "sequence": self.sequence,
        }
        if self.slot is not None:
            entry["slot"] = self.slot
        if self.run_id is not None:
            entry["run_id"] = self.run_id
        return entry


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InteractionLog:
    """Append-only, chronologically ordered record owned by a single run.

    Every appended entry is also forwarded to the optional audit sink.
    Each run builds its own instance; instances are never shared.
    """

    def __init__(
        self,
        run_id: Optional[str] = None,
        sink: Optional["AuditSink"] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.run_id = run_id
        self._sink = sink
        self._clock = clock
        self._entries: List[InteractionLogEntry] = []

    def record(
        self,
        phase: InteractionPhase,
        action: str,
        details: Optional[Dict[str, Any]] = None,
        slot: Optional[str] = None,
    ) -> InteractionLogEntry:
        """Append an entry and forward it to the sink."""
        timestamp = self._clock()
        if self._entries and timestamp < self._entries[-1].timestamp:
            # Keep insertion order and timestamp order consistent
            timestamp = self._entries[-1].timestamp

        entry = InteractionLogEntry(
            timestamp=timestamp,
            phase=InteractionPhase(phase),
            action=action,
            details=copy.deepcopy(details) if details else {},
            slot=slot,
            sequence=len(self._entries),
            run_id=self.run_id,
        )
        self._entries.append(entry)

        if self._sink is not None:
            try:
                self._sink.append(entry)
            except Exception as e:
                logger.warning(f"Audit sink rejected entry {entry.sequence} ({action}): {e}")

        return entry

    @property
    def entries(self) -> Tuple[InteractionLogEntry, ...]:
        return tuple(self._entries)

    def by_phase(self, phase: InteractionPhase) -> List[InteractionLogEntry]:
        return [entry for entry in self._entries if entry.phase == phase]

    def actions(self) -> List[str]:
        return [entry.action for entry in self._entries]

    def to_list(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[InteractionLogEntry]:
        return iter(tuple(self._entries))
