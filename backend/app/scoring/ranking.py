"""Ranking of candidates by a category average or the weighted total"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from backend.app.core.exceptions import ValidationException
from backend.app.core.logging import get_logger
from backend.app.scoring.weights import CategoryWeights, STANDARD_WEIGHTS

logger = get_logger(__name__)

TOTAL_METRIC = "total"


@dataclass
class CandidateStanding:
    """A candidate together with its score breakdown"""
    candidate_id: UUID
    candidate_number: int
    name: str
    scores: Dict[str, float]  # {category: average, ..., "total": weighted total}
    is_active: bool = True

    def metric(self, metric: str) -> float:
        return self.scores.get(metric, 0.0)


@dataclass
class RankedStanding:
    """A standing with its 1-based leaderboard position"""
    rank: int
    standing: CandidateStanding
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rank': self.rank,
            'candidate_id': str(self.standing.candidate_id),
            'candidate_number': self.standing.candidate_number,
            'name': self.standing.name,
            'value': self.value,
            'scores': dict(self.standing.scores),
        }


class RankingService:
    """Orders standings into a leaderboard"""

    def __init__(self, weights: Optional[CategoryWeights] = None):
        self.weights = weights or STANDARD_WEIGHTS

    def validate_metric(self, metric: str) -> str:
        """
        Check a ranking metric

        Args:
            metric: "total" or a category of the weight table

        Returns:
            The metric

        Raises:
            ValidationException: If the metric is neither
        """
        if metric == TOTAL_METRIC or metric in self.weights:
            return metric
        raise ValidationException(
            f"Invalid ranking metric: {metric}",
            details={"allowed": [TOTAL_METRIC, *self.weights.categories]}
        )

    def rank(
        self,
        standings: Sequence[CandidateStanding],
        metric: str = TOTAL_METRIC,
        limit: Optional[int] = None
    ) -> List[RankedStanding]:
        """
        Sort standings by a metric, highest first

        Equal values keep their input order (Python's sort is stable), so
        callers pass standings in candidate-number order.

        Args:
            standings: Candidates with their breakdowns
            metric: "total" or a category name
            limit: Optional cut-off after ranking

        Returns:
            Ranked standings; rank is the 1-based position
        """
        self.validate_metric(metric)

        ordered = sorted(standings, key=lambda s: s.metric(metric), reverse=True)
        if limit is not None:
            ordered = ordered[:limit]

        ranked = [
            RankedStanding(rank=position, standing=standing, value=standing.metric(metric))
            for position, standing in enumerate(ordered, start=1)
        ]

        logger.debug(f"Ranked {len(ranked)} candidates by {metric}")
        return ranked
