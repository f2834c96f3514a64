"""
Strategy recommendation and recovery estimates.

Decision table (evaluated in order):
- 3 days or fewer at destination: no adjustment
- 4-6 days: partial (50% for shifts up to 5h, 60% beyond)
- 7-10 days: partial 70% with young children (8 or under) or shifts over 5h,
  otherwise minimize total
- More than 10 days: full adjustment

Recovery estimates (days at home after the return flight):
- Eastward full adjustment takes ~1 day per hour of shift
- Westward is easier, ~0.7 days per hour
- Partial and minimize-total leave less to undo
"""

import math
from collections.abc import Sequence

from ..types import (
    ALL_MAIN_STRATEGIES,
    FullAdjustment,
    MinimizeTotal,
    NoAdjustment,
    PartialAdjustment,
    Strategy,
    StrategyComparison,
    Traveler,
    clamp_percentage,
)

# Trip length thresholds (days at destination)
NO_ADJUSTMENT_MAX_DAYS = 3
SHORT_TRIP_MAX_DAYS = 6
MEDIUM_TRIP_MAX_DAYS = 10

# Shifts up to this many hours count as moderate
MODERATE_SHIFT_HOURS = 5

# Travelers this age or younger count as young children
YOUNG_CHILD_MAX_AGE = 8

WESTWARD_RECOVERY_DAYS_PER_HOUR = 0.7


def recommend_strategy(
    days_at_destination: int, timezone_offset_hours: int, traveler_ages: Sequence[int]
) -> Strategy:
    """
    Recommend an adjustment strategy for a trip.

    Args:
        days_at_destination: Days between outbound and return departure
        timezone_offset_hours: Signed offset (positive = east, negative = west)
        traveler_ages: Ages of everyone on the trip

    Returns:
        Recommended Strategy
    """
    abs_offset = abs(timezone_offset_hours)

    if days_at_destination <= NO_ADJUSTMENT_MAX_DAYS:
        return NoAdjustment()

    if days_at_destination <= SHORT_TRIP_MAX_DAYS:
        if abs_offset <= MODERATE_SHIFT_HOURS:
            return PartialAdjustment(percentage=0.5)
        return PartialAdjustment(percentage=0.6)

    if days_at_destination <= MEDIUM_TRIP_MAX_DAYS:
        has_young_children = any(age <= YOUNG_CHILD_MAX_AGE for age in traveler_ages)
        if has_young_children:
            return PartialAdjustment(percentage=0.7)
        if abs_offset <= MODERATE_SHIFT_HOURS:
            return MinimizeTotal()
        return PartialAdjustment(percentage=0.7)

    return FullAdjustment()


def effective_strategy(traveler: Traveler, trip_default: Strategy) -> Strategy:
    """Traveler's override if set, otherwise the trip default."""
    return traveler.effective_strategy(trip_default)


def strategies_match(a: Strategy, b: Strategy) -> bool:
    """True if both strategies are the same kind (ignores partial percentage)."""
    return a.kind == b.kind


def _ceil_days(value: float) -> int:
    # Round away float noise first so 10 * (1 - 0.7) gives 3, not 4
    return math.ceil(round(value, 6))


def estimate_recovery_days(strategy: Strategy, timezone_offset_hours: int) -> int:
    """
    Estimate days needed to readjust at home after the return flight.

    Args:
        strategy: Strategy used for the trip
        timezone_offset_hours: Signed outbound offset (positive = east)

    Returns:
        Recovery days (0 for no adjustment, otherwise at least 1)
    """
    abs_offset = abs(timezone_offset_hours)

    if isinstance(strategy, NoAdjustment):
        return 0
    elif isinstance(strategy, PartialAdjustment):
        percentage = clamp_percentage(strategy.percentage)
        return max(1, _ceil_days(abs_offset * (1.0 - percentage)))
    elif isinstance(strategy, MinimizeTotal):
        return max(1, abs_offset // 3)
    elif isinstance(strategy, FullAdjustment):
        if timezone_offset_hours > 0:
            return abs_offset
        return max(1, _ceil_days(abs_offset * WESTWARD_RECOVERY_DAYS_PER_HOUR))
    raise TypeError(f"Unknown strategy: {strategy!r}")


def explain_strategy(
    strategy: Strategy,
    days_at_destination: int,
    timezone_offset_hours: int,
    traveler_ages: Sequence[int],
) -> str:
    """Generate a human-readable explanation for a strategy on this trip."""
    direction = "east" if timezone_offset_hours > 0 else "west"
    abs_offset = abs(timezone_offset_hours)
    has_young_children = any(age <= YOUNG_CHILD_MAX_AGE for age in traveler_ages)
    has_teens = any(13 <= age < 18 for age in traveler_ages)

    if isinstance(strategy, NoAdjustment):
        return (
            f"For a {days_at_destination}-day trip, adjusting your schedule isn't worth "
            "the disruption. Stay on home time and enjoy the trip!"
        )

    elif isinstance(strategy, PartialAdjustment):
        reasons: list[str] = []
        if days_at_destination <= SHORT_TRIP_MAX_DAYS:
            reasons.append(f"your {days_at_destination}-day trip is short")
        if abs_offset >= MODERATE_SHIFT_HOURS:
            reasons.append(f"the {abs_offset}-hour {direction}ward shift is significant")
        if has_young_children:
            reasons.append("young children naturally wake early anyway")

        reason_text = f" because {' and '.join(reasons)}" if reasons else ""
        percent = round(clamp_percentage(strategy.percentage) * 100)
        return (
            f"We recommend {percent}% adjustment{reason_text}. You'll wake earlier than "
            "locals (around 5-6am) but beat the crowds at attractions. Recovery at home "
            "will be faster."
        )

    elif isinstance(strategy, MinimizeTotal):
        return (
            f"For a {days_at_destination}-day trip with a {abs_offset}-hour shift, balancing "
            "adjustment between outbound and return minimizes total disruption. You'll "
            "start shifting back 2 days before coming home."
        )

    elif isinstance(strategy, FullAdjustment):
        text = f"With {days_at_destination} days at your destination, you have time to fully adjust."
        if has_teens:
            text += " Teens can handle the full shift well and will want to enjoy evening activities."
        if timezone_offset_hours > 0:
            text += " Note: Eastward travel takes longer to adjust (about 1 day per timezone)."
        return text

    raise TypeError(f"Unknown strategy: {strategy!r}")


def compare_strategies(
    days_at_destination: int, timezone_offset_hours: int, traveler_ages: Sequence[int]
) -> list[StrategyComparison]:
    """
    Compare the four main strategies for a trip.

    Returns:
        One StrategyComparison per strategy in ALL_MAIN_STRATEGIES order
    """
    recommended = recommend_strategy(days_at_destination, timezone_offset_hours, traveler_ages)

    return [
        StrategyComparison(
            strategy=strategy,
            recovery_days=estimate_recovery_days(strategy, timezone_offset_hours),
            explanation=explain_strategy(
                strategy, days_at_destination, timezone_offset_hours, traveler_ages
            ),
            is_recommended=strategies_match(strategy, recommended),
        )
        for strategy in ALL_MAIN_STRATEGIES
    ]
