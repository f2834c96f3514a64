"""
Tests for strategy recommendation, recovery estimates and comparison.
"""

import pytest

from helpers import make_traveler
from jetshift.strategy import (
    compare_strategies,
    effective_strategy,
    estimate_recovery_days,
    explain_strategy,
    recommend_strategy,
    strategies_match,
)
from jetshift.types import FullAdjustment, MinimizeTotal, NoAdjustment, PartialAdjustment


class TestRecommendStrategy:
    """Decision table by trip length, shift size and ages."""

    @pytest.mark.parametrize(
        "days, offset, ages, expected",
        [
            (0, 8, [35], NoAdjustment()),
            (3, 8, [35], NoAdjustment()),
            (4, 3, [35], PartialAdjustment(percentage=0.5)),
            (6, -6, [35], PartialAdjustment(percentage=0.6)),
            (7, 4, [35, 8], PartialAdjustment(percentage=0.7)),
            (10, 5, [35, 40], MinimizeTotal()),
            (10, -9, [35, 40], PartialAdjustment(percentage=0.7)),
            (11, 2, [35, 3], FullAdjustment()),
            (30, -12, [], FullAdjustment()),
        ],
    )
    def test_decision_table(self, days, offset, ages, expected):
        assert recommend_strategy(days, offset, ages) == expected

    def test_moderate_shift_boundary_is_inclusive(self):
        """6-day trip with exactly a 5 hour shift stays at 50%."""
        assert recommend_strategy(6, 5, [6]) == PartialAdjustment(percentage=0.5)
        assert recommend_strategy(6, -5, [6]) == PartialAdjustment(percentage=0.5)

    def test_young_child_age_boundary(self):
        assert recommend_strategy(8, 4, [9]) == MinimizeTotal()
        assert recommend_strategy(8, 4, [9, 8]) == PartialAdjustment(percentage=0.7)


class TestEffectiveStrategy:
    def test_override_wins(self):
        traveler = make_traveler(strategy_override=NoAdjustment())
        assert effective_strategy(traveler, FullAdjustment()) == NoAdjustment()

    def test_trip_default_without_override(self):
        traveler = make_traveler()
        assert effective_strategy(traveler, MinimizeTotal()) == MinimizeTotal()

    def test_strategies_match_ignores_percentage(self):
        assert strategies_match(PartialAdjustment(0.5), PartialAdjustment(0.7))
        assert not strategies_match(PartialAdjustment(0.7), MinimizeTotal())


class TestEstimateRecoveryDays:
    @pytest.mark.parametrize(
        "strategy, offset, expected",
        [
            (NoAdjustment(), 9, 0),
            (PartialAdjustment(percentage=0.6), 5, 2),
            (PartialAdjustment(percentage=0.7), 10, 3),
            (PartialAdjustment(percentage=0.5), -3, 2),
            (PartialAdjustment(percentage=1.0), 5, 1),
            (MinimizeTotal(), 6, 2),
            (MinimizeTotal(), -2, 1),
            (MinimizeTotal(), 10, 3),
            (FullAdjustment(), 5, 5),
            (FullAdjustment(), -8, 6),
            (FullAdjustment(), -1, 1),
            (FullAdjustment(), 0, 1),
        ],
    )
    def test_estimates(self, strategy, offset, expected):
        assert estimate_recovery_days(strategy, offset) == expected

    def test_eastward_full_takes_longer(self):
        assert estimate_recovery_days(FullAdjustment(), 6) > estimate_recovery_days(
            FullAdjustment(), -6
        )


class TestExplainStrategy:
    def test_no_adjustment(self):
        text = explain_strategy(NoAdjustment(), 3, 5, [35])
        assert "3-day trip" in text
        assert "Stay on home time" in text

    def test_partial_lists_reasons(self):
        text = explain_strategy(PartialAdjustment(0.6), 5, 7, [35, 5])

        assert text.startswith("We recommend 60% adjustment because")
        assert "your 5-day trip is short" in text
        assert "the 7-hour eastward shift is significant" in text
        assert "young children naturally wake early anyway" in text

    def test_partial_without_reasons(self):
        text = explain_strategy(PartialAdjustment(0.7), 9, -3, [35])
        assert text.startswith("We recommend 70% adjustment. ")

    def test_minimize_total(self):
        text = explain_strategy(MinimizeTotal(), 9, 4, [35])
        assert "9-day trip with a 4-hour shift" in text

    def test_full_mentions_teens_and_eastward(self):
        text = explain_strategy(FullAdjustment(), 14, 5, [15])

        assert text.startswith("With 14 days at your destination")
        assert "Teens" in text
        assert "Eastward travel takes longer" in text

    def test_full_westward_has_no_eastward_note(self):
        text = explain_strategy(FullAdjustment(), 14, -5, [35])
        assert "Eastward" not in text


class TestCompareStrategies:
    def test_all_four_strategies_in_order(self):
        comparisons = compare_strategies(14, 5, [35])

        assert [c.strategy.kind for c in comparisons] == [
            "full",
            "partial",
            "minimize_total",
            "none",
        ]
        assert [c.recovery_days for c in comparisons] == [5, 2, 1, 0]

    def test_exactly_one_recommended(self):
        comparisons = compare_strategies(5, 6, [35])
        recommended = [c for c in comparisons if c.is_recommended]

        assert len(recommended) == 1
        assert recommended[0].strategy == PartialAdjustment(percentage=0.6)

    def test_partial_recommendation_matches_regardless_of_percentage(self):
        comparisons = compare_strategies(5, 3, [35])
        recommended = [c.strategy.kind for c in comparisons if c.is_recommended]

        assert recommended == ["partial"]

    def test_explanations_present(self):
        for comparison in compare_strategies(8, -7, [35, 10]):
            assert comparison.explanation
