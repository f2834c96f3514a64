"""
Tests for the wake-by clamp and bedtime rebalance.
"""

from dataclasses import replace
from datetime import datetime

from helpers import make_traveler
from jetshift.scheduling import apply_wake_constraint, clamp_to_wake_constraint, rebalance_bedtime


class TestClampToWakeConstraint:
    def test_later_wake_is_clamped_on_same_day(self):
        traveler = make_traveler(wake_by="07:00")
        proposed = datetime(2025, 6, 15, 8, 30)

        assert clamp_to_wake_constraint(proposed, traveler) == datetime(2025, 6, 15, 7, 0)

    def test_earlier_wake_unchanged(self):
        traveler = make_traveler(wake_by="07:00")
        proposed = datetime(2025, 6, 15, 6, 15)

        assert clamp_to_wake_constraint(proposed, traveler) == proposed

    def test_equal_wake_unchanged(self):
        traveler = make_traveler(wake_by="07:00")
        proposed = datetime(2025, 6, 15, 7, 0)

        assert clamp_to_wake_constraint(proposed, traveler) is proposed

    def test_no_constraint(self):
        traveler = make_traveler()
        proposed = datetime(2025, 6, 15, 11, 0)

        assert clamp_to_wake_constraint(proposed, traveler) == proposed

    def test_flag_without_time_is_ignored(self):
        traveler = replace(make_traveler(), has_wake_constraint=True)
        proposed = datetime(2025, 6, 15, 11, 0)

        assert clamp_to_wake_constraint(proposed, traveler) == proposed


class TestRebalanceBedtime:
    def test_moves_bedtime_by_clamped_amount(self):
        bedtime = datetime(2025, 6, 14, 23, 30)
        proposed = datetime(2025, 6, 15, 8, 0)
        clamped = datetime(2025, 6, 15, 7, 15)

        assert rebalance_bedtime(bedtime, proposed, clamped) == datetime(2025, 6, 14, 22, 45)

    def test_unclamped_keeps_bedtime(self):
        bedtime = datetime(2025, 6, 14, 23, 30)
        wake = datetime(2025, 6, 15, 7, 0)

        assert rebalance_bedtime(bedtime, wake, wake) is bedtime


class TestApplyWakeConstraint:
    def test_preserves_sleep_duration(self):
        traveler = make_traveler(wake_by="06:45")
        bedtime = datetime(2025, 6, 14, 23, 30)
        wake = datetime(2025, 6, 15, 7, 30)

        new_bed, new_wake = apply_wake_constraint(bedtime, wake, traveler)

        assert new_wake == datetime(2025, 6, 15, 6, 45)
        assert new_bed == datetime(2025, 6, 14, 22, 45)
        assert new_wake - new_bed == wake - bedtime
