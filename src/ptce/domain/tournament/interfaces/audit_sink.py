"""Audit sink interface."""

from abc import ABC, abstractmethod
from typing import List

from ..value_objects.interaction_log import InteractionLogEntry


class AuditSink(ABC):
    """Append-only destination for interaction log entries.

    Call order is log order; no acknowledgement is expected.
    """

    @abstractmethod
    def append(self, entry: InteractionLogEntry) -> None:
        """Append one entry."""
        pass


class CollectingAuditSink(AuditSink):
    """Sink that keeps entries in memory."""

    def __init__(self):
        self.entries: List[InteractionLogEntry] = []

    def append(self, entry: InteractionLogEntry) -> None:
        self.entries.append(entry)
