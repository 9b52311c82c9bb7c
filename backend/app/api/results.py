"""Result table API endpoint"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.score_repository import ScoreRepository
from backend.app.services.tabulation_service import TabulationService
from backend.app.schemas.score import ResultsResponse

router = APIRouter()


async def get_tabulation_service(db: AsyncSession = Depends(get_db)) -> TabulationService:
    return TabulationService(ScoreRepository(db), CandidateRepository(db))


@router.get("", response_model=ResultsResponse)
async def get_results(
    filter: str = Query("overall", description="overall or top_<category>"),
    tabulation_service: TabulationService = Depends(get_tabulation_service)
):
    """
    Ranked result table for export

    **Filters:**
    - `overall`: every category average and the weighted total
    - `top_<category>`: ranked by that category alone

    All numeric cells are strings with exactly two decimals.
    """
    results = await tabulation_service.results(filter)
    return ResultsResponse(**results)
