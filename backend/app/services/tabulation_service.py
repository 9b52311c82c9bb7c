"""Tabulation service: averages, totals, rankings and result tables"""

from datetime import datetime
from typing import List, Optional, Dict, Any
from uuid import UUID

from backend.app.repositories.score_repository import ScoreRepository
from backend.app.repositories.candidate_repository import CandidateRepository
from backend.app.models.candidate import Candidate
from backend.app.scoring.aggregation import AggregationEngine
from backend.app.scoring.ranking import CandidateStanding, RankedStanding, RankingService, TOTAL_METRIC
from backend.app.scoring.results import ResultsBuilder, OVERALL_FILTER
from backend.app.scoring.weights import CategoryWeights, get_weights
from backend.app.core.logging import get_logger
from backend.app.core.exceptions import NotFoundException

logger = get_logger(__name__)


class TabulationService:
    """
    Reads scores and turns them into averages, totals and leaderboards

    Nothing is cached: every call recomputes from the stored scores.
    """

    def __init__(
        self,
        score_repository: ScoreRepository,
        candidate_repository: CandidateRepository,
        weights: Optional[CategoryWeights] = None
    ):
        """
        Initialize tabulation service

        Args:
            score_repository: Score repository
            candidate_repository: Candidate repository
            weights: Active category weight table (loaded from settings if None)
        """
        self.score_repo = score_repository
        self.candidate_repo = candidate_repository
        self.weights = weights or get_weights()
        self.engine = AggregationEngine(self.weights)
        self.ranking = RankingService(self.weights)
        self.results_builder = ResultsBuilder(self.weights)

    async def _get_candidate(self, candidate_id: UUID) -> Candidate:
        candidate = await self.candidate_repo.get_by_id(candidate_id)
        if not candidate:
            raise NotFoundException(f"Candidate not found: {candidate_id}")
        return candidate

    async def average_score(self, candidate_id: UUID, category: str) -> float:
        """
        Mean of a candidate's scores in one category

        Returns 0.0 when no judge has scored the candidate in the category.

        Raises:
            ValidationException: If the category is not in the active scheme
            NotFoundException: If the candidate does not exist
        """
        self.weights.require(category)
        await self._get_candidate(candidate_id)
        values = await self.score_repo.values_by_category(candidate_id)
        return self.engine.average(values.get(category, []))

    async def total_score(self, candidate_id: UUID) -> float:
        """Weighted sum of a candidate's category averages"""
        breakdown = await self.scores_breakdown(candidate_id)
        return breakdown[TOTAL_METRIC]

    async def scores_breakdown(self, candidate_id: UUID) -> Dict[str, float]:
        """
        Per-category averages plus the weighted total for one candidate

        Returns:
            {category: average, ..., "total": total}

        Raises:
            NotFoundException: If the candidate does not exist
        """
        await self._get_candidate(candidate_id)
        values = await self.score_repo.values_by_category(candidate_id)
        return self.engine.breakdown(values)

    async def breakdowns_for(self, candidates: List[Candidate]) -> Dict[UUID, Dict[str, float]]:
        """Breakdowns for several candidates from a single score query"""
        grouped = await self.score_repo.values_by_candidate([c.id for c in candidates])
        return {
            candidate.id: self.engine.breakdown(grouped.get(candidate.id, {}))
            for candidate in candidates
        }

    async def standings(self) -> List[CandidateStanding]:
        """Active candidates in candidate-number order with their breakdowns"""
        candidates = await self.candidate_repo.list_active()
        breakdowns = await self.breakdowns_for(candidates)

        return [
            CandidateStanding(
                candidate_id=candidate.id,
                candidate_number=candidate.candidate_number,
                name=candidate.name,
                scores=breakdowns[candidate.id],
                is_active=candidate.is_active
            )
            for candidate in candidates
        ]

    async def rank(self, metric: str = TOTAL_METRIC, limit: Optional[int] = None) -> List[RankedStanding]:
        """
        Leaderboard of active candidates

        Args:
            metric: "total" or a category of the active scheme
            limit: Optional number of leading entries to keep

        Returns:
            Ranked standings, highest first

        Raises:
            ValidationException: If the metric is invalid
        """
        self.ranking.validate_metric(metric)
        standings = await self.standings()
        return self.ranking.rank(standings, metric, limit=limit)

    async def analytics(self, category: Optional[str] = None) -> Dict[str, Any]:
        """
        Rankings for a category, or overall when no category is given

        Returns:
            {metric, weights, rankings: [{rank, candidate_id, candidate_number, name, value, scores}]}
        """
        metric = category or TOTAL_METRIC
        ranked = await self.rank(metric)

        logger.info(f"Computed analytics for {metric}: {len(ranked)} candidates")
        return {
            'metric': metric,
            'weights': self.weights.as_dict(),
            'rankings': [entry.to_dict() for entry in ranked],
        }

    async def results(
        self,
        filter_name: str = OVERALL_FILTER,
        generated_at: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Export-ready result table

        Args:
            filter_name: "overall" or "top_<category>"
            generated_at: Timestamp to stamp on the table (now if None)

        Returns:
            {title, filter, headings, results, generated_at}

        Raises:
            ValidationException: If the filter is invalid
        """
        self.results_builder.metric_for(filter_name)
        standings = await self.standings()
        return self.results_builder.build(standings, filter_name, generated_at=generated_at)
