"""Candidate management API endpoints"""

from collections import defaultdict
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.score_repository import ScoreRepository
from backend.app.repositories.user_repository import UserRepository
from backend.app.services.candidate_service import CandidateService
from backend.app.services.score_service import ScoreService
from backend.app.services.tabulation_service import TabulationService
from backend.app.schemas.candidate import (
    CandidateCreateRequest, CandidateUpdateRequest, CandidateResponse, CandidateListResponse
)
from backend.app.schemas.score import CandidateScoresResponse, ScoreDetailResponse
from backend.app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


async def get_candidate_service(db: AsyncSession = Depends(get_db)) -> CandidateService:
    """Dependency to get candidate service"""
    return CandidateService(CandidateRepository(db))


async def get_tabulation_service(db: AsyncSession = Depends(get_db)) -> TabulationService:
    """Dependency to get tabulation service"""
    return TabulationService(ScoreRepository(db), CandidateRepository(db))


async def get_score_service(db: AsyncSession = Depends(get_db)) -> ScoreService:
    """Dependency to get score service"""
    return ScoreService(ScoreRepository(db), CandidateRepository(db), UserRepository(db))


@router.get("", response_model=CandidateListResponse)
async def list_candidates(
    active: Optional[bool] = Query(None, description="Only active (true) or inactive (false) candidates"),
    search: Optional[str] = Query(None, description="Name or candidate number substring"),
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    candidate_service: CandidateService = Depends(get_candidate_service),
    tabulation_service: TabulationService = Depends(get_tabulation_service)
):
    """
    List candidates in candidate-number order

    Each entry carries its category averages and weighted total.
    """
    candidates = await candidate_service.list_candidates(active=active, search=search, skip=skip, limit=limit)
    breakdowns = await tabulation_service.breakdowns_for(candidates)

    return CandidateListResponse(
        candidates=[CandidateResponse.from_candidate(c, breakdowns[c.id]) for c in candidates],
        total=len(candidates)
    )


@router.post("", response_model=CandidateResponse, status_code=status.HTTP_201_CREATED)
async def create_candidate(
    request: CandidateCreateRequest,
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """
    Register a candidate

    **Errors:**
    - 409 if the candidate number is already taken
    """
    candidate = await candidate_service.create_candidate(
        candidate_number=request.candidate_number,
        name=request.name,
        is_active=request.is_active
    )
    return CandidateResponse.from_candidate(candidate)


@router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(
    candidate_id: UUID,
    tabulation_service: TabulationService = Depends(get_tabulation_service),
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """Get a candidate with its scores breakdown"""
    candidate = await candidate_service.get_candidate(candidate_id)
    breakdown = await tabulation_service.scores_breakdown(candidate_id)
    return CandidateResponse.from_candidate(candidate, breakdown)


@router.put("/{candidate_id}", response_model=CandidateResponse)
async def update_candidate(
    candidate_id: UUID,
    request: CandidateUpdateRequest,
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """Update a candidate's number, name or status"""
    candidate = await candidate_service.update_candidate(
        candidate_id,
        candidate_number=request.candidate_number,
        name=request.name,
        is_active=request.is_active
    )
    return CandidateResponse.from_candidate(candidate)


@router.delete("/{candidate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_candidate(
    candidate_id: UUID,
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """Delete a candidate and every score it received"""
    await candidate_service.delete_candidate(candidate_id)
    logger.info(f"Candidate deleted via API: {candidate_id}")


@router.post("/{candidate_id}/toggle-status", response_model=CandidateResponse)
async def toggle_candidate_status(
    candidate_id: UUID,
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """Switch a candidate between active and inactive"""
    candidate = await candidate_service.toggle_status(candidate_id)
    return CandidateResponse.from_candidate(candidate)


@router.get("/{candidate_id}/scores", response_model=CandidateScoresResponse)
async def get_candidate_scores(
    candidate_id: UUID,
    candidate_service: CandidateService = Depends(get_candidate_service),
    score_service: ScoreService = Depends(get_score_service),
    tabulation_service: TabulationService = Depends(get_tabulation_service)
):
    """Every score a candidate received, grouped by category, with the breakdown"""
    candidate = await candidate_service.get_candidate(candidate_id)
    scores = await score_service.list_scores(candidate_id=candidate_id)
    breakdown = await tabulation_service.scores_breakdown(candidate_id)

    grouped = defaultdict(list)
    for score in scores:
        grouped[score.category].append(ScoreDetailResponse.from_score(score))

    return CandidateScoresResponse(
        candidate_id=candidate.id,
        candidate_number=candidate.candidate_number,
        name=candidate.name,
        breakdown=breakdown,
        scores=dict(grouped)
    )
