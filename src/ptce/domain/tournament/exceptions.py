"""Exceptions for tournament domain."""

from typing import Any, Dict, Optional


class TournamentDomainError(Exception):
    """Base exception for tournament domain."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TournamentDomainError):
    """Raised when validation fails."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.field_name = field_name


class EvaluationSourceError(TournamentDomainError):
    """Raised when an evaluation source cannot produce a usable evaluation."""

    pass


class AggregationError(TournamentDomainError):
    """Raised when confidence-weighted aggregation cannot be computed."""

    pass


class ContenderNotFoundError(TournamentDomainError):
    """Raised when a contender record cannot be found."""

    def __init__(
        self,
        message: str,
        contender_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.contender_id = contender_id


class WinnerDeterminationError(TournamentDomainError):
    """Raised when a pipeline run fails as a whole."""

    pass
