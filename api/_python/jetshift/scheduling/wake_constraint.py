"""
Wake-by constraint handling.

A traveler with a fixed wake-by time (work, school) never gets a wake time
later than that clock time. When a wake time is pulled earlier, bedtime moves
earlier by the same amount so planned sleep duration is preserved.
"""

from datetime import datetime

from ..time_math import on_date, shift_minutes, time_to_minutes
from ..types import Traveler


def clamp_to_wake_constraint(proposed_wake: datetime, traveler: Traveler) -> datetime:
    """
    Clamp a wake time to the traveler's wake-by time.

    Comparison is on time of day only (minute resolution). A clamped wake time
    stays on the proposed wake time's calendar day.

    Args:
        proposed_wake: Wake time computed by a planner
        traveler: Traveler with optional wake constraint

    Returns:
        proposed_wake, or the wake-by time on the same day if proposed is later
    """
    if not traveler.has_wake_constraint or traveler.wake_by_time is None:
        return proposed_wake

    wake_minutes = time_to_minutes(proposed_wake.time())
    constraint_minutes = time_to_minutes(traveler.wake_by_time)

    if wake_minutes > constraint_minutes:
        return on_date(proposed_wake.date(), traveler.wake_by_time)

    return proposed_wake


def rebalance_bedtime(
    proposed_bedtime: datetime, proposed_wake: datetime, clamped_wake: datetime
) -> datetime:
    """
    Move bedtime earlier by however much the wake time was clamped.

    Args:
        proposed_bedtime: Bedtime computed by a planner
        proposed_wake: Wake time before clamping
        clamped_wake: Wake time after clamping

    Returns:
        Bedtime preserving the intended sleep duration
    """
    proposed_minutes = time_to_minutes(proposed_wake.time())
    clamped_minutes = time_to_minutes(clamped_wake.time())

    if proposed_minutes == clamped_minutes:
        return proposed_bedtime

    clamped_by = proposed_minutes - clamped_minutes
    return shift_minutes(proposed_bedtime, -clamped_by)


def apply_wake_constraint(
    proposed_bedtime: datetime, proposed_wake: datetime, traveler: Traveler
) -> tuple[datetime, datetime]:
    """Clamp wake time and rebalance bedtime. Returns (bedtime, wake_time)."""
    clamped_wake = clamp_to_wake_constraint(proposed_wake, traveler)
    bedtime = rebalance_bedtime(proposed_bedtime, proposed_wake, clamped_wake)
    return bedtime, clamped_wake
