"""
Data structures for sleep schedule generation.

Inputs (Traveler, FlightLeg, Trip, strategies) are plain records supplied by
the app; outputs (DailyScheduleEntry, StrategyComparison) are frozen values
rebuilt on every request.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import ClassVar, Literal

from .time_math import calculate_timezone_offset_hours

# =============================================================================
# Strategies
# =============================================================================

StrategyKind = Literal["full", "partial", "minimize_total", "none"]


@dataclass(frozen=True)
class FullAdjustment:
    """Shift completely to destination time."""

    kind: ClassVar[StrategyKind] = "full"
    display_name: ClassVar[str] = "Full Adjustment"
    short_description: ClassVar[str] = "Fully adjust to destination time"

    @property
    def adjustment_percentage(self) -> float:
        return 1.0


@dataclass(frozen=True)
class PartialAdjustment:
    """
    Shift only part of the way toward destination time.

    The app restricts percentage to 0.5-0.8; planners clamp it to [0, 1].
    """

    percentage: float

    kind: ClassVar[StrategyKind] = "partial"
    short_description: ClassVar[str] = "Partially adjust, wake early at destination"

    @property
    def adjustment_percentage(self) -> float:
        return self.percentage

    @property
    def display_name(self) -> str:
        return f"Partial ({round(self.percentage * 100)}%)"


@dataclass(frozen=True)
class MinimizeTotal:
    """Adjust 70% outbound and start shifting back two days before returning."""

    kind: ClassVar[StrategyKind] = "minimize_total"
    display_name: ClassVar[str] = "Minimize Total"
    short_description: ClassVar[str] = "Balance outbound and return adjustment"

    @property
    def adjustment_percentage(self) -> float:
        return 0.7


@dataclass(frozen=True)
class NoAdjustment:
    """Stay on home time throughout."""

    kind: ClassVar[StrategyKind] = "none"
    display_name: ClassVar[str] = "No Adjustment"
    short_description: ClassVar[str] = "Stay on home time"

    @property
    def adjustment_percentage(self) -> float:
        return 0.0


Strategy = FullAdjustment | PartialAdjustment | MinimizeTotal | NoAdjustment

# Strategy picker options, in display order
ALL_MAIN_STRATEGIES: tuple[Strategy, ...] = (
    FullAdjustment(),
    PartialAdjustment(percentage=0.6),
    MinimizeTotal(),
    NoAdjustment(),
)

PARTIAL_OPTIONS: tuple[PartialAdjustment, ...] = (
    PartialAdjustment(percentage=0.5),
    PartialAdjustment(percentage=0.6),
    PartialAdjustment(percentage=0.7),
)


def clamp_percentage(percentage: float) -> float:
    """Clamp an adjustment percentage to [0, 1]."""
    return min(1.0, max(0.0, percentage))


# =============================================================================
# Travelers
# =============================================================================


@dataclass(frozen=True)
class AgeBand:
    """Age-dependent sleep parameters."""

    min_age: int
    max_age: int
    adjustment_increment_minutes: int  # Daily shift per adjustment step
    recommended_sleep_hours: tuple[int, int]
    suggested_bedtime: time
    suggested_wake_time: time


# Younger children tolerate smaller daily shifts:
# - 0-5: 20 min/day
# - 6-12: 25 min/day
# - 13+: 30 min/day
AGE_BANDS: tuple[AgeBand, ...] = (
    AgeBand(0, 2, 20, (11, 14), time(19, 0), time(6, 30)),
    AgeBand(3, 5, 20, (10, 13), time(19, 30), time(6, 30)),
    AgeBand(6, 12, 25, (9, 12), time(20, 0), time(7, 0)),
    AgeBand(13, 17, 30, (8, 10), time(21, 30), time(7, 30)),
    AgeBand(18, 120, 30, (7, 9), time(22, 30), time(7, 0)),
)


def get_age_band(age: int) -> AgeBand:
    """Get the age band for an age (out-of-range ages use the nearest band)."""
    for band in AGE_BANDS:
        if band.min_age <= age <= band.max_age:
            return band
    return AGE_BANDS[0] if age < 0 else AGE_BANDS[-1]


@dataclass(frozen=True)
class Traveler:
    """One person's sleep profile."""

    name: str
    age: int  # 0-120, validated upstream
    current_bedtime: time
    current_wake_time: time
    has_wake_constraint: bool = False
    wake_by_time: time | None = None  # Latest allowed wake (work/school)
    strategy_override: Strategy | None = None  # None = use trip default

    @property
    def adjustment_increment_minutes(self) -> int:
        """Minutes to shift per day, by age."""
        return get_age_band(self.age).adjustment_increment_minutes

    @property
    def recommended_sleep_hours(self) -> tuple[int, int]:
        """Recommended nightly sleep range (display only)."""
        return get_age_band(self.age).recommended_sleep_hours

    def effective_strategy(self, trip_default: Strategy) -> Strategy:
        """Personal override if set, otherwise the trip's strategy."""
        return self.strategy_override if self.strategy_override is not None else trip_default

    @staticmethod
    def suggested_bedtime(age: int) -> time:
        """Typical bedtime for an age, used to pre-fill forms."""
        return get_age_band(age).suggested_bedtime

    @staticmethod
    def suggested_wake_time(age: int) -> time:
        """Typical wake time for an age, used to pre-fill forms."""
        return get_age_band(age).suggested_wake_time


# =============================================================================
# Flights and trips
# =============================================================================

TravelDirection = Literal["east", "west", "none"]

DIRECTION_DESCRIPTIONS: dict[TravelDirection, str] = {
    "east": "Eastward",
    "west": "Westward",
    "none": "No change",
}


def direction_for_offset(offset_hours: int) -> TravelDirection:
    """Direction of travel for a signed timezone offset."""
    if offset_hours > 0:
        return "east"
    elif offset_hours < 0:
        return "west"
    return "none"


@dataclass(frozen=True)
class FlightLeg:
    """Single flight. Dates and times are local to each end."""

    departure_city: str
    departure_timezone: str  # IANA timezone (e.g., "America/New_York")
    arrival_city: str
    arrival_timezone: str  # IANA timezone (e.g., "Europe/London")
    departure_date: date
    departure_time: time
    arrival_date: date
    arrival_time: time

    @property
    def departure_datetime(self) -> datetime:
        return datetime.combine(self.departure_date, self.departure_time)

    @property
    def arrival_datetime(self) -> datetime:
        return datetime.combine(self.arrival_date, self.arrival_time)

    @property
    def timezone_offset_hours(self) -> int:
        """Timezone difference in hours (positive = eastward, negative = westward)."""
        return calculate_timezone_offset_hours(
            self.departure_timezone, self.arrival_timezone, self.departure_datetime
        )

    @property
    def travel_direction(self) -> TravelDirection:
        return direction_for_offset(self.timezone_offset_hours)

    @property
    def formatted_timezone_offset(self) -> str:
        """E.g. "5 hours eastward" or "Same timezone"."""
        offset = self.timezone_offset_hours
        if offset == 0:
            return "Same timezone"
        direction = "eastward" if offset > 0 else "westward"
        hours = abs(offset)
        hour_word = "hour" if hours == 1 else "hours"
        return f"{hours} {hour_word} {direction}"


@dataclass(frozen=True)
class Trip:
    """Outbound flight, optional return flight and the default strategy."""

    home_timezone: str
    outbound_leg: FlightLeg | None
    return_leg: FlightLeg | None = None
    strategy: Strategy = field(default_factory=FullAdjustment)
    name: str = ""

    @property
    def has_return_leg(self) -> bool:
        return self.return_leg is not None

    @property
    def days_at_destination(self) -> int:
        """Calendar days from outbound departure to return departure (0 if one-way)."""
        if self.outbound_leg is None or self.return_leg is None:
            return 0
        days = (self.return_leg.departure_date - self.outbound_leg.departure_date).days
        return max(0, days)

    @property
    def timezone_offset_hours(self) -> int:
        if self.outbound_leg is None:
            return 0
        return self.outbound_leg.timezone_offset_hours

    @property
    def travel_direction(self) -> TravelDirection:
        return direction_for_offset(self.timezone_offset_hours)

    @property
    def trip_summary(self) -> str:
        """E.g. "New York → London → New York"."""
        if self.outbound_leg is None:
            return ""
        outbound = self.outbound_leg
        if self.has_return_leg:
            return f"{outbound.departure_city} → {outbound.arrival_city} → {outbound.departure_city}"
        return f"{outbound.departure_city} → {outbound.arrival_city}"


# =============================================================================
# Schedule output
# =============================================================================

ScheduleStage = Literal[
    "pre_adjustment",  # Days before departure
    "travel_day_outbound",  # Outbound flight day
    "at_destination",  # Days at destination (round trip)
    "post_arrival",  # Days after arrival (one-way trip)
    "pre_return",  # Shifting back before return (Minimize Total only)
    "travel_day_return",  # Return flight day
    "post_return",  # Recovery days at home
]

STAGE_ORDER: tuple[ScheduleStage, ...] = (
    "pre_adjustment",
    "travel_day_outbound",
    "at_destination",
    "post_arrival",
    "pre_return",
    "travel_day_return",
    "post_return",
)

STAGE_DESCRIPTIONS: dict[ScheduleStage, str] = {
    "pre_adjustment": "Pre-flight adjustment",
    "travel_day_outbound": "Travel day",
    "at_destination": "At destination",
    "post_arrival": "Post-arrival",
    "pre_return": "Pre-return adjustment",
    "travel_day_return": "Return travel day",
    "post_return": "Post-return recovery",
}

# Body clock within this many minutes of local time counts as adjusted
IN_SYNC_THRESHOLD_MINUTES = 30


@dataclass(frozen=True)
class DailyScheduleEntry:
    """
    One day of one traveler's plan.

    bedtime and wake_time are placed on the entry's date (bedtime may roll past
    midnight). body_clock_offset_minutes is positive when the body clock is
    ahead of local time (wants to sleep and wake earlier), negative when behind.
    """

    date: date
    day_label: str  # "2 days before", "Travel Day", "Day 3"
    bedtime: datetime
    wake_time: datetime
    stage: ScheduleStage
    strategy_message: str | None = None  # Travel days only
    hotel_arrival: datetime | None = None  # Outbound travel day only
    travel_direction: TravelDirection | None = None
    body_clock_offset_minutes: int = 0

    @property
    def has_strategy(self) -> bool:
        return self.strategy_message is not None

    @property
    def is_in_sync(self) -> bool:
        """True if the body clock is within 30 minutes of local time."""
        return abs(self.body_clock_offset_minutes) < IN_SYNC_THRESHOLD_MINUTES

    @property
    def formatted_body_clock_offset(self) -> str:
        """E.g. "In sync", "+3 hrs off", "-1.5 hrs off"."""
        if self.is_in_sync:
            return "In sync"

        hours = self.body_clock_offset_minutes / 60
        abs_hours = abs(hours)
        sign = "+" if hours > 0 else "-"

        if abs_hours == round(abs_hours):
            hrs = int(abs_hours)
            return f"{sign}{'1 hr' if hrs == 1 else f'{hrs} hrs'} off"
        return f"{sign}{abs_hours:.1f} hrs off"

    def is_today(self, current_date: date) -> bool:
        """Display helper; the plan itself never depends on today's date."""
        return self.date == current_date


@dataclass(frozen=True)
class TravelerSchedule:
    """A traveler's complete plan for one trip."""

    traveler: Traveler
    entries: list[DailyScheduleEntry]


@dataclass(frozen=True)
class StrategyComparison:
    """One row of the strategy comparison table."""

    strategy: Strategy
    recovery_days: int
    explanation: str
    is_recommended: bool
