"""Scoring engine: weights, aggregation, ranking, progress and result tables"""

from backend.app.scoring.weights import (
    CategoryWeights, STANDARD_WEIGHTS, TALENT_WEIGHTS, load_weights, get_weights
)
from backend.app.scoring.aggregation import AggregationEngine
from backend.app.scoring.ranking import CandidateStanding, RankedStanding, RankingService, TOTAL_METRIC
from backend.app.scoring.results import ResultsBuilder, format_score

__all__ = [
    "CategoryWeights",
    "STANDARD_WEIGHTS",
    "TALENT_WEIGHTS",
    "load_weights",
    "get_weights",
    "AggregationEngine",
    "CandidateStanding",
    "RankedStanding",
    "RankingService",
    "TOTAL_METRIC",
    "ResultsBuilder",
    "format_score",
]
