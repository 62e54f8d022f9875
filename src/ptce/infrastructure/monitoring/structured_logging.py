"""Structured logging with OpenTelemetry trace correlation."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from opentelemetry import trace

from ...domain.tournament.interfaces.audit_sink import AuditSink
from ...domain.tournament.value_objects.interaction_log import InteractionLogEntry

AUDIT_LOGGER_NAME = "ptce.audit"

# LogRecord attributes that are not user supplied extras
_STANDARD_ATTRIBUTES = frozenset(
    [
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "funcName",
        "lineno",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    ]
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add trace information if available
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            entry["trace_id"] = format(span_context.trace_id, "032x")
            entry["span_id"] = format(span_context.span_id, "016x")

        metadata = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRIBUTES and not key.startswith("_")
        }
        if metadata:
            entry["metadata"] = metadata

        if record.exc_info:
            entry["error"] = {
                "exception_type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "exception_message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str, ensure_ascii=False)


class LoggingAuditSink(AuditSink):
    """Writes each interaction log entry as one structured record on the audit logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)
        self.level = level

    def append(self, entry: InteractionLogEntry) -> None:
        if not self.logger.isEnabledFor(self.level):
            return

        self.logger.log(
            self.level,
            f"[{entry.phase.value}] {entry.action}",
            extra={
                "event_type": "audit",
                "run_id": entry.run_id,
                "sequence": entry.sequence,
                "phase": entry.phase.value,
                "action": entry.action,
                "slot": entry.slot,
                "details": entry.details,
                "entry_timestamp": entry.timestamp.isoformat(),
            },
        )
