"""Result tables handed to the export and report collaborators"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Sequence

from backend.app.core.exceptions import ValidationException
from backend.app.scoring.ranking import CandidateStanding, RankingService, TOTAL_METRIC
from backend.app.scoring.weights import CategoryWeights, CATEGORY_LABELS, STANDARD_WEIGHTS

OVERALL_FILTER = "overall"
TOP_PREFIX = "top_"

TWO_PLACES = Decimal("0.01")


def format_score(value: float) -> str:
    """Two-decimal string, halves rounded away from zero"""
    return str(Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def _format_weight(weight: Decimal) -> str:
    return f"{weight.normalize():f}"


class ResultsBuilder:
    """
    Builds ranked result rows

    ``overall`` rows carry every category average and the total; a
    ``top_<category>`` filter ranks by that category alone. All numbers
    are two-decimal strings and ranks are assigned after sorting.
    """

    def __init__(self, weights: Optional[CategoryWeights] = None):
        self.weights = weights or STANDARD_WEIGHTS
        self.ranking = RankingService(self.weights)

    @property
    def filters(self) -> List[str]:
        return [OVERALL_FILTER] + [f"{TOP_PREFIX}{category}" for category in self.weights]

    def metric_for(self, filter_name: str) -> str:
        """Map a results filter onto a ranking metric"""
        if filter_name == OVERALL_FILTER:
            return TOTAL_METRIC
        if filter_name.startswith(TOP_PREFIX):
            category = filter_name[len(TOP_PREFIX):]
            if category in self.weights:
                return category
        raise ValidationException(
            f"Invalid results filter: {filter_name}",
            details={"allowed": self.filters}
        )

    def title_for(self, filter_name: str) -> str:
        metric = self.metric_for(filter_name)
        if metric == TOTAL_METRIC:
            return "Overall Results"
        return f"Top {CATEGORY_LABELS.get(metric, metric)} Results"

    def headings_for(self, filter_name: str) -> List[str]:
        metric = self.metric_for(filter_name)
        if metric == TOTAL_METRIC:
            category_headings = [
                f"{CATEGORY_LABELS.get(category, category)} ({_format_weight(weight)}%)"
                for category, weight in self.weights.items()
            ]
            return ['Rank', 'Candidate #', 'Name', *category_headings, 'Total']
        return ['Rank', 'Candidate #', 'Name', f"{CATEGORY_LABELS.get(metric, metric)} Score"]

    def rows(self, standings: Sequence[CandidateStanding], filter_name: str = OVERALL_FILTER) -> List[Dict[str, Any]]:
        """
        Ranked rows for a filter

        Args:
            standings: Active candidates in candidate-number order
            filter_name: "overall" or "top_<category>"

        Returns:
            Row dictionaries in rank order
        """
        metric = self.metric_for(filter_name)
        ranked = self.ranking.rank(standings, metric)

        rows = []
        for entry in ranked:
            row: Dict[str, Any] = {
                'rank': entry.rank,
                'candidate_number': entry.standing.candidate_number,
                'name': entry.standing.name,
            }
            if metric == TOTAL_METRIC:
                for category in self.weights:
                    row[category] = format_score(entry.standing.metric(category))
                row['total'] = format_score(entry.standing.metric(TOTAL_METRIC))
            else:
                row['score'] = format_score(entry.value)
            rows.append(row)
        return rows

    def build(
        self,
        standings: Sequence[CandidateStanding],
        filter_name: str = OVERALL_FILTER,
        generated_at: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """Complete results document: title, headings, rows and generation time"""
        generated_at = generated_at or datetime.now(timezone.utc)
        return {
            'title': self.title_for(filter_name),
            'filter': filter_name,
            'headings': self.headings_for(filter_name),
            'results': self.rows(standings, filter_name),
            'generated_at': generated_at.strftime('%Y-%m-%d %H:%M:%S'),
        }
