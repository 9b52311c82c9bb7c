"""Aggregation engine: category averages and weighted totals"""

from decimal import Decimal
from typing import Dict, Iterable, Mapping, Optional, Sequence, Union

from backend.app.scoring.weights import CategoryWeights, STANDARD_WEIGHTS

Number = Union[int, float, str, Decimal]

HUNDRED = Decimal("100")
ZERO = Decimal("0")


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 85.1 as 85.1 instead of its binary float expansion
    return Decimal(str(value))


class AggregationEngine:
    """
    Computes per-category averages and the overall weighted total

    Arithmetic is carried out in Decimal and converted to float on the way
    out. An empty category averages to 0.0, never None.
    """

    def __init__(self, weights: Optional[CategoryWeights] = None):
        """
        Initialize aggregation engine

        Args:
            weights: Category weight table (defaults to the standard scheme)
        """
        self.weights = weights or STANDARD_WEIGHTS

    @staticmethod
    def mean(values: Iterable[Number]) -> Decimal:
        """Arithmetic mean as Decimal; 0 for no values"""
        total = ZERO
        count = 0
        for value in values:
            total += _to_decimal(value)
            count += 1
        if count == 0:
            return ZERO
        return total / count

    def average(self, values: Iterable[Number]) -> float:
        """Average of one candidate's scores in one category"""
        return float(self.mean(values))

    def weighted_total(self, averages: Mapping[str, Number]) -> Decimal:
        """
        Weighted sum of category averages

        Categories missing from ``averages`` count as 0. Categories outside
        the weight table are ignored.
        """
        total = ZERO
        for category, weight in self.weights.items():
            average = _to_decimal(averages.get(category, ZERO))
            total += average * weight / HUNDRED
        return total

    def total(self, averages: Mapping[str, Number]) -> float:
        return float(self.weighted_total(averages))

    def breakdown(self, values_by_category: Mapping[str, Sequence[Number]]) -> Dict[str, float]:
        """
        Build the {category: average, ..., "total": weighted total} map

        Args:
            values_by_category: Raw score values per category for one candidate

        Returns:
            Breakdown with one entry per weighted category plus "total"
        """
        averages = {
            category: self.mean(values_by_category.get(category, ()))
            for category in self.weights
        }
        result = {category: float(average) for category, average in averages.items()}
        result["total"] = float(self.weighted_total(averages))
        return result

    def breakdown_from_averages(self, averages: Mapping[str, Number]) -> Dict[str, float]:
        """Same as breakdown() when the per-category averages are already known"""
        decimals = {category: _to_decimal(averages.get(category, ZERO)) for category in self.weights}
        result = {category: float(average) for category, average in decimals.items()}
        result["total"] = float(self.weighted_total(decimals))
        return result
