"""Consensus engine routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ....domain.tournament.exceptions import TournamentDomainError
from ..dependencies.container import Container, get_container
from ..middleware.error_handler import to_http_exception
from ..models.ptce_models import (
    ContenderPerformanceResponse,
    DetailedMatchResultResponse,
    DetermineWinnerByIdsRequest,
    DetermineWinnerRequest,
    HealthResponse,
    MatchResultResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/determine-winner", response_model=MatchResultResponse)
async def determine_winner(
    request: DetermineWinnerRequest, container: Container = Depends(get_container)
):
    """Determine the winner between two models."""
    match_service = await container.get_match_service()
    try:
        result = await match_service.determine_winner(
            request.model1.to_domain(), request.model2.to_domain()
        )
    except TournamentDomainError as e:
        raise to_http_exception(e)
    return MatchResultResponse.from_result(result)


@router.post("/determine-winner-detailed", response_model=DetailedMatchResultResponse)
async def determine_winner_detailed(
    request: DetermineWinnerRequest, container: Container = Depends(get_container)
):
    """Determine the winner between two models with the full interaction log."""
    match_service = await container.get_match_service()
    try:
        result = await match_service.determine_winner(
            request.model1.to_domain(), request.model2.to_domain(), detailed=True
        )
    except TournamentDomainError as e:
        raise to_http_exception(e)
    return DetailedMatchResultResponse.from_result(result)


@router.post("/determine-winner-by-ids", response_model=MatchResultResponse)
async def determine_winner_by_ids(
    request: DetermineWinnerByIdsRequest, container: Container = Depends(get_container)
):
    """Determine the winner between two stored models."""
    match_service = await container.get_match_service()
    try:
        result = await match_service.determine_winner_by_ids(request.model1_id, request.model2_id)
    except TournamentDomainError as e:
        raise to_http_exception(e)
    return MatchResultResponse.from_result(result)


@router.post("/determine-winner-by-ids-detailed", response_model=DetailedMatchResultResponse)
async def determine_winner_by_ids_detailed(
    request: DetermineWinnerByIdsRequest, container: Container = Depends(get_container)
):
    """Determine the winner between two stored models with the full interaction log."""
    match_service = await container.get_match_service()
    try:
        result = await match_service.determine_winner_by_ids(
            request.model1_id, request.model2_id, detailed=True
        )
    except TournamentDomainError as e:
        raise to_http_exception(e)
    return DetailedMatchResultResponse.from_result(result)


@router.get("/models/{model_id}/performance", response_model=ContenderPerformanceResponse)
async def get_model_performance(model_id: str, container: Container = Depends(get_container)):
    """Win/loss record of one model across stored matches."""
    match_service = await container.get_match_service()
    try:
        performance = await match_service.get_contender_performance(model_id)
    except TournamentDomainError as e:
        raise to_http_exception(e)
    return ContenderPerformanceResponse.from_domain(performance)


@router.get("/health", response_model=HealthResponse)
async def health(container: Container = Depends(get_container)):
    """Check if the PTCE service is running."""
    try:
        engine = await container.get_engine()
    except Exception as e:
        logger.error(f"PTCE health check failed: {e}")
        raise HTTPException(status_code=503, detail="PTCE service is unavailable")
    return HealthResponse(
        status="ok",
        message="PTCE service is running",
        evaluation_source=engine.evaluation_source.name,
    )
