"""Interfaces the tournament domain depends on."""

from .audit_sink import AuditSink, CollectingAuditSink
from .evaluation_source import (
    EvaluationFailure,
    EvaluationOutcome,
    EvaluationRequest,
    EvaluationSource,
    EvaluationSuccess,
)

__all__ = [
    "AuditSink",
    "CollectingAuditSink",
    "EvaluationFailure",
    "EvaluationOutcome",
    "EvaluationRequest",
    "EvaluationSource",
    "EvaluationSuccess",
]
