"""Score submission, progress and analytics API endpoints"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.score_repository import ScoreRepository
from backend.app.repositories.user_repository import UserRepository
from backend.app.services.score_service import ScoreService
from backend.app.services.progress_service import ProgressService
from backend.app.services.tabulation_service import TabulationService
from backend.app.scoring.weights import CATEGORY_LABELS, get_weights
from backend.app.schemas.score import (
    ScoreSubmitRequest, ScoreResponse, ScoreListResponse, ScoreDetailResponse,
    AnalyticsResponse, CategoriesResponse, CategoryInfo
)
from backend.app.schemas.judge import ProgressSummaryResponse
from backend.app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


async def get_score_service(db: AsyncSession = Depends(get_db)) -> ScoreService:
    """Dependency to get score service"""
    return ScoreService(ScoreRepository(db), CandidateRepository(db), UserRepository(db))


async def get_progress_service(db: AsyncSession = Depends(get_db)) -> ProgressService:
    """Dependency to get progress service"""
    return ProgressService(ScoreRepository(db), CandidateRepository(db), UserRepository(db))


async def get_tabulation_service(db: AsyncSession = Depends(get_db)) -> TabulationService:
    """Dependency to get tabulation service"""
    return TabulationService(ScoreRepository(db), CandidateRepository(db))


@router.post("", response_model=ScoreResponse, status_code=status.HTTP_201_CREATED)
async def submit_score(
    request: ScoreSubmitRequest,
    score_service: ScoreService = Depends(get_score_service)
):
    """
    Submit a judge's score for a candidate in a category

    **Checks, in order:**
    1. Category belongs to the active scheme (422)
    2. Value is between 0 and 100 (422)
    3. Judge exists (404) and is active (403)
    4. Candidate exists (404) and is active (403)
    5. No score yet for this judge, candidate and category (409)

    Scores are write-once and stored rounded to two decimals.
    """
    score = await score_service.submit_score(
        judge_id=request.judge_id,
        candidate_id=request.candidate_id,
        category=request.category,
        value=request.value
    )
    return ScoreResponse.from_score(score)


@router.get("", response_model=ScoreListResponse)
async def list_scores(
    judge_id: Optional[UUID] = Query(None),
    candidate_id: Optional[UUID] = Query(None),
    category: Optional[str] = Query(None),
    score_service: ScoreService = Depends(get_score_service)
):
    """List scores newest first"""
    scores = await score_service.list_scores(
        judge_id=judge_id,
        candidate_id=candidate_id,
        category=category
    )
    return ScoreListResponse(
        scores=[ScoreDetailResponse.from_score(s) for s in scores],
        total=len(scores)
    )


@router.get("/progress", response_model=ProgressSummaryResponse)
async def get_progress_summary(
    progress_service: ProgressService = Depends(get_progress_service)
):
    """Active candidates, active judges and submission progress per category"""
    summary = await progress_service.progress_summary()
    return ProgressSummaryResponse(**summary)


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    category: Optional[str] = Query(None, description="Rank by this category; overall total when omitted"),
    tabulation_service: TabulationService = Depends(get_tabulation_service)
):
    """
    Rankings of active candidates

    Ranks are assigned after sorting by the metric, highest first; ties
    keep candidate-number order.
    """
    analytics = await tabulation_service.analytics(category)
    return AnalyticsResponse(**analytics)


@router.get("/categories", response_model=CategoriesResponse)
async def get_categories():
    """Categories of the active scoring scheme with their weights"""
    weights = get_weights()
    return CategoriesResponse(
        scheme=weights.name,
        categories=[
            CategoryInfo(name=category, label=CATEGORY_LABELS[category], weight=float(weight))
            for category, weight in weights.items()
        ]
    )
