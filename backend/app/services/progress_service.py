"""Judging progress service"""

from typing import List, Optional, Dict, Any
from uuid import UUID

from backend.app.repositories.score_repository import ScoreRepository
from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.repositories.user_repository import UserRepository
from backend.app.models.user import User
from backend.app.scoring.progress import judge_progress, category_progress
from backend.app.scoring.weights import CategoryWeights, get_weights
from backend.app.core.logging import get_logger
from backend.app.core.exceptions import NotFoundException

logger = get_logger(__name__)


class ProgressService:
    """Service reporting how far judges have got through the candidates"""

    def __init__(
        self,
        score_repository: ScoreRepository,
        candidate_repository: CandidateRepository,
        user_repository: UserRepository,
        weights: Optional[CategoryWeights] = None
    ):
        self.score_repo = score_repository
        self.candidate_repo = candidate_repository
        self.user_repo = user_repository
        self.weights = weights or get_weights()

    async def _get_judge(self, judge_id: UUID) -> User:
        judge = await self.user_repo.get_judge(judge_id)
        if not judge:
            raise NotFoundException(f"Judge not found: {judge_id}")
        return judge

    async def progress(self, judge_id: UUID, category: str) -> Dict[str, Any]:
        """
        Progress of one judge in one category

        Args:
            judge_id: Judge UUID
            category: Category of the active scheme

        Returns:
            {total, completed, remaining, percentage}

        Raises:
            ValidationException: If the category is invalid
            NotFoundException: If the judge does not exist
        """
        self.weights.require(category)
        await self._get_judge(judge_id)

        total = await self.candidate_repo.count_active()
        completed = await self.score_repo.count_for_judge(judge_id, category)
        return judge_progress(total, completed)

    async def progress_by_category(self, judge_id: UUID) -> Dict[str, Dict[str, Any]]:
        """Progress of one judge in every category of the active scheme"""
        await self._get_judge(judge_id)

        total = await self.candidate_repo.count_active()
        result = {}
        for category in self.weights:
            completed = await self.score_repo.count_for_judge(judge_id, category)
            result[category] = judge_progress(total, completed)
        return result

    async def category_progress(self, category: str) -> Dict[str, Any]:
        """
        Progress of all active judges in one category

        Returns:
            {total_possible, submitted, percentage}
        """
        self.weights.require(category)

        active_judges = await self.user_repo.count_active_judges()
        active_candidates = await self.candidate_repo.count_active()
        submitted = await self.score_repo.count_for_category(category)
        return category_progress(active_judges, active_candidates, submitted)

    async def progress_summary(self) -> Dict[str, Any]:
        """
        Competition-wide progress

        Returns:
            {total_candidates, total_judges, categories_progress: {category: {...}}}
        """
        active_judges = await self.user_repo.count_active_judges()
        active_candidates = await self.candidate_repo.count_active()

        categories = {}
        for category in self.weights:
            submitted = await self.score_repo.count_for_category(category)
            categories[category] = category_progress(active_judges, active_candidates, submitted)

        return {
            'total_candidates': active_candidates,
            'total_judges': active_judges,
            'categories_progress': categories,
        }

    async def next_candidate(self, judge_id: UUID, category: str) -> Dict[str, Any]:
        """
        Lowest-numbered active candidate the judge has not scored in a category

        Returns:
            {candidate: Candidate or None, progress: {...}}; candidate is None
            once the judge has scored every active candidate
        """
        self.weights.require(category)
        await self._get_judge(judge_id)

        scored = await self.score_repo.scored_candidate_ids(judge_id, category)
        candidates = await self.candidate_repo.list_active()
        upcoming = next((c for c in candidates if c.id not in scored), None)

        completed = sum(1 for c in candidates if c.id in scored)
        return {
            'candidate': upcoming,
            'progress': judge_progress(len(candidates), completed),
        }

    async def candidates_for_judging(self, judge_id: UUID, category: str) -> Dict[str, Any]:
        """
        Active candidates with a has_voted flag for one judge and category

        Returns:
            {candidates: [{candidate, has_voted}], progress: {...}}
        """
        self.weights.require(category)
        await self._get_judge(judge_id)

        scored = await self.score_repo.scored_candidate_ids(judge_id, category)
        candidates = await self.candidate_repo.list_active()

        entries: List[Dict[str, Any]] = [
            {'candidate': candidate, 'has_voted': candidate.id in scored}
            for candidate in candidates
        ]
        completed = sum(1 for entry in entries if entry['has_voted'])
        return {
            'candidates': entries,
            'progress': judge_progress(len(candidates), completed),
        }
