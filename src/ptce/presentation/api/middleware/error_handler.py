"""Error handling for the API."""

import logging
from typing import Dict, Type

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ....domain.tournament.exceptions import (
    AggregationError,
    ContenderNotFoundError,
    TournamentDomainError,
    ValidationError,
    WinnerDeterminationError,
)

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Server error processing PTCE determination"

# Most specific first
DOMAIN_ERROR_STATUS: Dict[Type[TournamentDomainError], int] = {
    ContenderNotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    WinnerDeterminationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AggregationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_exception(exc: TournamentDomainError) -> HTTPException:
    """Map a domain error to the HTTP error returned to the client."""
    for error_type, status_code in DOMAIN_ERROR_STATUS.items():
        if isinstance(exc, error_type):
            break
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__}: {exc.message}")

    return HTTPException(status_code=status_code, detail=exc.message)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns anything that escapes a route into a JSON error response."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)

        except TournamentDomainError as e:
            http_error = to_http_exception(e)
            return self._error_response(request, http_error.status_code, http_error.detail)

        except Exception as e:
            logger.error(
                f"Unexpected error: {type(e).__name__}: {e} "
                f"Path: {request.url.path}, Method: {request.method}",
                exc_info=True,
            )
            return self._error_response(
                request, status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_SERVER_ERROR
            )

    @staticmethod
    def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={
                "error": message,
                "status_code": status_code,
                "path": str(request.url.path),
                "method": request.method,
            },
        )
