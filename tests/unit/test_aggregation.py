"""Unit tests for the aggregation engine"""

import pytest
from decimal import Decimal

from backend.app.scoring.aggregation import AggregationEngine
from backend.app.scoring.weights import CategoryWeights, TALENT_WEIGHTS


class TestAggregationEngine:
    """Unit tests for AggregationEngine"""

    @pytest.fixture
    def engine(self):
        return AggregationEngine()

    def test_average(self, engine):
        assert engine.average([80, 90]) == 85.0

    def test_average_of_nothing_is_zero(self, engine):
        assert engine.average([]) == 0.0

    def test_average_accepts_decimals(self, engine):
        assert engine.average([Decimal("85.25"), Decimal("90.75")]) == 88.0

    def test_mean_is_exact(self, engine):
        """0.1 + 0.2 style float noise must not leak into the mean"""
        assert AggregationEngine.mean([0.1, 0.2]) == Decimal("0.15")

    def test_gown_only_total(self, engine):
        """Gown [80, 90] averages 85 and contributes 85 * 30% to the total"""
        breakdown = engine.breakdown({"gown": [80, 90]})

        assert breakdown["gown"] == 85.0
        assert breakdown["total"] == 25.5
        assert breakdown["sports_attire"] == 0.0
        assert breakdown["swimsuit"] == 0.0
        assert breakdown["qa"] == 0.0

    def test_full_breakdown(self, engine):
        breakdown = engine.breakdown({
            "sports_attire": [90, 80],
            "swimsuit": [70],
            "gown": [95, 85, 90],
            "qa": [88],
        })

        # 85*0.2 + 70*0.2 + 90*0.3 + 88*0.3
        assert breakdown["total"] == pytest.approx(84.4)
        assert set(breakdown) == {"sports_attire", "swimsuit", "gown", "qa", "total"}

    def test_categories_outside_table_ignored(self, engine):
        breakdown = engine.breakdown({"talent": [100], "qa": [50]})

        assert "talent" not in breakdown
        assert breakdown["total"] == 15.0

    def test_talent_scheme(self):
        engine = AggregationEngine(TALENT_WEIGHTS)
        breakdown = engine.breakdown({"talent": [100], "gown": [100]})

        assert breakdown["talent"] == 100.0
        assert breakdown["total"] == 30.0

    def test_perfect_scores_total_100(self):
        engine = AggregationEngine(CategoryWeights({"gown": "33.3", "qa": "33.3", "swimsuit": "33.4"}))
        total = engine.total({"gown": 100, "qa": 100, "swimsuit": 100})
        assert total == 100.0

    def test_equal_inputs_give_equal_totals(self, engine):
        a = engine.breakdown({"gown": [81.1, 79.3], "qa": [90.05]})
        b = engine.breakdown({"qa": [90.05], "gown": [79.3, 81.1]})
        assert a["total"] == b["total"]

    def test_breakdown_from_averages_matches_breakdown(self, engine):
        values = {"sports_attire": [70, 80], "gown": [90]}
        averages = {"sports_attire": 75, "gown": 90}
        assert engine.breakdown_from_averages(averages) == engine.breakdown(values)
