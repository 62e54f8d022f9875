"""Logging and audit trail."""

from .logging_setup import setup_logging
from .structured_logging import AUDIT_LOGGER_NAME, JSONFormatter, LoggingAuditSink

__all__ = ["AUDIT_LOGGER_NAME", "JSONFormatter", "LoggingAuditSink", "setup_logging"]
