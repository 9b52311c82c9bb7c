"""Judge management and judging workflow API endpoints"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.score_repository import ScoreRepository
from backend.app.repositories.user_repository import UserRepository
from backend.app.services.judge_service import JudgeService
from backend.app.services.progress_service import ProgressService
from backend.app.services.score_service import ScoreService
from backend.app.schemas.candidate import CandidateResponse
from backend.app.schemas.judge import (
    JudgeCreateRequest, JudgeUpdateRequest, JudgeResponse, JudgeListResponse,
    ProgressResponse, NextCandidateResponse, JudgingCandidateResponse, JudgingListResponse
)
from backend.app.schemas.score import ScoreListResponse, ScoreDetailResponse
from backend.app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


async def get_judge_service(db: AsyncSession = Depends(get_db)) -> JudgeService:
    """Dependency to get judge service"""
    return JudgeService(UserRepository(db))


async def get_progress_service(db: AsyncSession = Depends(get_db)) -> ProgressService:
    """Dependency to get progress service"""
    return ProgressService(ScoreRepository(db), CandidateRepository(db), UserRepository(db))


async def get_score_service(db: AsyncSession = Depends(get_db)) -> ScoreService:
    """Dependency to get score service"""
    return ScoreService(ScoreRepository(db), CandidateRepository(db), UserRepository(db))


@router.get("", response_model=JudgeListResponse)
async def list_judges(
    active: Optional[bool] = Query(None, description="Only active (true) or inactive (false) judges"),
    search: Optional[str] = Query(None, description="Name or email substring"),
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    judge_service: JudgeService = Depends(get_judge_service),
    progress_service: ProgressService = Depends(get_progress_service)
):
    """
    List judges ordered by name

    Each entry carries the judge's progress in every category.
    """
    judges = await judge_service.list_judges(active=active, search=search, skip=skip, limit=limit)

    entries = []
    for judge in judges:
        progress = await progress_service.progress_by_category(judge.id)
        entries.append(JudgeResponse.from_user(judge, progress))

    return JudgeListResponse(judges=entries, total=len(entries))


@router.post("", response_model=JudgeResponse, status_code=status.HTTP_201_CREATED)
async def create_judge(
    request: JudgeCreateRequest,
    judge_service: JudgeService = Depends(get_judge_service)
):
    """
    Create a judge account

    **Errors:**
    - 409 if the email is already registered
    """
    judge = await judge_service.create_judge(
        name=request.name,
        email=request.email,
        is_active=request.is_active
    )
    return JudgeResponse.from_user(judge)


@router.get("/{judge_id}", response_model=JudgeResponse)
async def get_judge(
    judge_id: UUID,
    judge_service: JudgeService = Depends(get_judge_service),
    progress_service: ProgressService = Depends(get_progress_service)
):
    """Get a judge with per-category progress"""
    judge = await judge_service.get_judge(judge_id)
    progress = await progress_service.progress_by_category(judge_id)
    return JudgeResponse.from_user(judge, progress)


@router.put("/{judge_id}", response_model=JudgeResponse)
async def update_judge(
    judge_id: UUID,
    request: JudgeUpdateRequest,
    judge_service: JudgeService = Depends(get_judge_service)
):
    judge = await judge_service.update_judge(
        judge_id,
        name=request.name,
        email=request.email,
        is_active=request.is_active
    )
    return JudgeResponse.from_user(judge)


@router.delete("/{judge_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_judge(
    judge_id: UUID,
    judge_service: JudgeService = Depends(get_judge_service)
):
    """Delete a judge and every score the judge submitted"""
    await judge_service.delete_judge(judge_id)
    logger.info(f"Judge deleted via API: {judge_id}")


@router.post("/{judge_id}/toggle-status", response_model=JudgeResponse)
async def toggle_judge_status(
    judge_id: UUID,
    judge_service: JudgeService = Depends(get_judge_service)
):
    """Switch a judge between active and inactive"""
    judge = await judge_service.toggle_status(judge_id)
    return JudgeResponse.from_user(judge)


@router.get("/{judge_id}/scores", response_model=ScoreListResponse)
async def get_judge_scores(
    judge_id: UUID,
    category: Optional[str] = Query(None, description="Restrict to one category"),
    score_service: ScoreService = Depends(get_score_service)
):
    """Scores submitted by a judge, newest first"""
    scores = await score_service.judge_scores(judge_id, category=category)
    return ScoreListResponse(
        scores=[ScoreDetailResponse.from_score(s) for s in scores],
        total=len(scores)
    )


@router.get("/{judge_id}/progress", response_model=ProgressResponse)
async def get_judge_progress(
    judge_id: UUID,
    category: str = Query(..., description="Category of the active scheme"),
    progress_service: ProgressService = Depends(get_progress_service)
):
    """
    Judge's progress in a category

    **Returns:** total active candidates, completed, remaining and the
    completion percentage rounded to two decimals.
    """
    progress = await progress_service.progress(judge_id, category)
    return ProgressResponse(**progress)


@router.get("/{judge_id}/next-candidate", response_model=NextCandidateResponse)
async def get_next_candidate(
    judge_id: UUID,
    category: str = Query(..., description="Category of the active scheme"),
    progress_service: ProgressService = Depends(get_progress_service)
):
    """Lowest-numbered active candidate the judge still has to score"""
    result = await progress_service.next_candidate(judge_id, category)
    candidate = result['candidate']

    return NextCandidateResponse(
        category=category,
        candidate=CandidateResponse.from_candidate(candidate) if candidate else None,
        progress=ProgressResponse(**result['progress']),
        completed=candidate is None
    )


@router.get("/{judge_id}/candidates", response_model=JudgingListResponse)
async def get_candidates_for_judging(
    judge_id: UUID,
    category: str = Query(..., description="Category of the active scheme"),
    progress_service: ProgressService = Depends(get_progress_service)
):
    """Active candidates with a has_voted flag for this judge and category"""
    result = await progress_service.candidates_for_judging(judge_id, category)

    return JudgingListResponse(
        category=category,
        candidates=[
            JudgingCandidateResponse(
                id=entry['candidate'].id,
                candidate_number=entry['candidate'].candidate_number,
                name=entry['candidate'].name,
                has_voted=entry['has_voted']
            )
            for entry in result['candidates']
        ],
        progress=ProgressResponse(**result['progress'])
    )
