"""
Phase planners for the sleep schedule.

Each trip phase has its own rule for bedtime, wake time and body clock offset:
- PRE_ADJUSTMENT: 3 days before departure, shift toward destination
- TRAVEL_DAY: fixed clock anchors for the flight day
- AT_DESTINATION / POST_ARRIVAL: gradual approach to normal times in local clock
- PRE_RETURN: 2 days shifting back toward home (Minimize Total only)
- POST_RETURN: recovery days back home

Direction conventions:
- Eastbound: body clock lags destination, so pre-flight times move EARLIER
  and at-destination bedtimes are pulled earlier
- Westbound: body clock leads destination, so pre-flight times move LATER
  and at-destination wake times start early

Body clock offset is negative while an eastbound traveler is catching up and
positive while a westbound traveler is. Pre-return and post-return phases use
the mirrored sign since the traveler is now shifting back.
"""

import logging
from datetime import datetime

from ..strategy.recommendation import estimate_recovery_days
from ..time_math import add_days, at_time, on_date, shift_minutes
from ..types import (
    DailyScheduleEntry,
    FlightLeg,
    MinimizeTotal,
    ScheduleStage,
    Strategy,
    TravelDirection,
    Traveler,
    clamp_percentage,
    direction_for_offset,
)
from .wake_constraint import apply_wake_constraint, clamp_to_wake_constraint

logger = logging.getLogger(__name__)

# Phase lengths
PRE_FLIGHT_DAYS = 3
POST_ARRIVAL_DAYS = 4  # Gradual days shown at destination
PRE_RETURN_DAYS = 2
POST_RETURN_DAYS = 3  # Cap on recovery days shown
MAX_MAINTAINED_DAYS = 7  # Cap on steady-state days shown at destination
MAX_NO_ADJUSTMENT_DAYS = 14

# Flight arrival to hotel check-in
HOTEL_ARRIVAL_BUFFER_HOURS = 2

# Travel day anchors (local clock on the departure date)
WESTWARD_TRAVEL_BEDTIME = (23, 0)  # Stay up late
WESTWARD_TRAVEL_WAKE = (8, 0)
EASTWARD_TRAVEL_BEDTIME = (22, 0)
EASTWARD_TRAVEL_WAKE = (7, 0)

# Steady state at destination before shifting back (Minimize Total)
PRE_RETURN_ANCHORS: dict[TravelDirection, tuple[tuple[int, int], tuple[int, int]]] = {
    "east": ((22, 0), (5, 30)),
    "west": ((22, 0), (6, 30)),
}

TRAVEL_DAY_MESSAGES: dict[TravelDirection, str] = {
    "west": "Stay up as late as possible",
    "east": "Short morning nap if tired, then stay awake as long as possible",
    "none": "Maintain regular schedule",
}
NO_ADJUSTMENT_MESSAGE = "Stay on home time"


def pre_flight_day_label(days_remaining: int) -> str:
    if days_remaining == 1:
        return "1 day before"
    return f"{days_remaining} days before"


def pre_return_day_label(days_remaining: int) -> str:
    if days_remaining == 1:
        return "1 day before return"
    return f"{days_remaining} days before return"


class PhasePlanner:
    """
    Plan each phase of one traveler's trip.

    All amounts derive from the outbound leg's timezone offset, the traveler's
    age-based increment and the effective strategy's adjustment percentage.
    """

    def __init__(self, traveler: Traveler, strategy: Strategy, outbound: FlightLeg):
        """
        Initialize planner.

        Args:
            traveler: Traveler to plan for
            strategy: Effective strategy (override or trip default)
            outbound: Outbound flight
        """
        self.traveler = traveler
        self.strategy = strategy
        self.outbound = outbound

        self.offset_hours = outbound.timezone_offset_hours
        self.direction = direction_for_offset(self.offset_hours)
        self.increment = traveler.adjustment_increment_minutes

        percentage = clamp_percentage(strategy.adjustment_percentage)
        self.total_offset_minutes = abs(self.offset_hours) * 60
        self.target_minutes = round(self.total_offset_minutes * percentage)
        self.pre_flight_adjustment = min(PRE_FLIGHT_DAYS * self.increment, self.target_minutes)

    @property
    def pre_return_days(self) -> int:
        return PRE_RETURN_DAYS if isinstance(self.strategy, MinimizeTotal) else 0

    @property
    def residual_minutes(self) -> int:
        """Displacement from home time still carried when flying home."""
        if isinstance(self.strategy, MinimizeTotal):
            return max(0, self.target_minutes - PRE_RETURN_DAYS * self.increment)
        return self.target_minutes

    # -------------------------------------------------------------------------
    # Sign helpers
    # -------------------------------------------------------------------------

    def _toward_destination(self, minutes: int) -> int:
        """Signed clock shift toward destination time (east earlier, west later)."""
        if self.direction == "east":
            return -minutes
        elif self.direction == "west":
            return minutes
        return 0

    def _outbound_offset(self, remaining: int) -> int:
        """Body clock offset while adjusting to the destination."""
        return self._toward_destination(remaining)

    def _return_offset(self, remaining: int) -> int:
        """Body clock offset while shifting back home (mirrored sign)."""
        return -self._toward_destination(remaining)

    def _normal_times(self, entry_date) -> tuple[datetime, datetime]:
        bedtime = on_date(entry_date, self.traveler.current_bedtime)
        wake_time = on_date(entry_date, self.traveler.current_wake_time)
        return bedtime, wake_time

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def plan_pre_adjustment(self) -> list[DailyScheduleEntry]:
        """Shift both bedtime and wake time toward destination for 3 days."""
        entries = []

        for day in range(1, PRE_FLIGHT_DAYS + 1):
            days_remaining = PRE_FLIGHT_DAYS - day + 1
            entry_date = add_days(self.outbound.departure_date, -days_remaining)

            cumulative = min(day * self.increment, self.target_minutes)
            shift = self._toward_destination(cumulative)

            bedtime, wake_time = self._normal_times(entry_date)
            bedtime, wake_time = apply_wake_constraint(
                shift_minutes(bedtime, shift), shift_minutes(wake_time, shift), self.traveler
            )

            entries.append(
                DailyScheduleEntry(
                    date=entry_date,
                    day_label=pre_flight_day_label(days_remaining),
                    bedtime=bedtime,
                    wake_time=wake_time,
                    stage="pre_adjustment",
                    travel_direction=self.direction,
                    body_clock_offset_minutes=self._outbound_offset(
                        self.target_minutes - cumulative
                    ),
                )
            )

        return entries

    def plan_travel_day(self, leg: FlightLeg, is_return: bool = False) -> DailyScheduleEntry:
        """
        Plan a flight day.

        Bedtime and wake time are fixed anchors on the departure date rather
        than shifted traveler times. Wake time still respects the wake-by
        constraint but bedtime is not rebalanced.

        The return flight's offset is what the leg itself would leave after a
        full pre-flight window, signed by the return leg's direction.
        """
        leg_offset_hours = leg.timezone_offset_hours
        direction = direction_for_offset(leg_offset_hours)
        travel_date = leg.departure_date

        if direction == "west":
            bedtime = at_time(travel_date, *WESTWARD_TRAVEL_BEDTIME)
            wake_time = at_time(travel_date, *WESTWARD_TRAVEL_WAKE)
        elif direction == "east":
            bedtime = at_time(travel_date, *EASTWARD_TRAVEL_BEDTIME)
            wake_time = at_time(travel_date, *EASTWARD_TRAVEL_WAKE)
        else:
            bedtime, wake_time = self._normal_times(travel_date)

        wake_time = clamp_to_wake_constraint(wake_time, self.traveler)

        if is_return:
            remaining = max(0, abs(leg_offset_hours) * 60 - PRE_FLIGHT_DAYS * self.increment)
            offset = -remaining if direction == "east" else remaining
            hotel_arrival = None
        else:
            offset = self._outbound_offset(self.target_minutes - self.pre_flight_adjustment)
            hotel_arrival = shift_minutes(leg.arrival_datetime, HOTEL_ARRIVAL_BUFFER_HOURS * 60)

        return DailyScheduleEntry(
            date=travel_date,
            day_label="Return Flight" if is_return else "Travel Day",
            bedtime=bedtime,
            wake_time=wake_time,
            stage="travel_day_return" if is_return else "travel_day_outbound",
            strategy_message=TRAVEL_DAY_MESSAGES[direction],
            hotel_arrival=hotel_arrival,
            travel_direction=direction,
            body_clock_offset_minutes=offset if direction != "none" else 0,
        )

    def plan_at_destination(self, return_leg: FlightLeg) -> list[DailyScheduleEntry]:
        """
        Plan days between the outbound and return flights.

        Shows up to 4 gradual days, then up to 7 steady-state days that repeat
        the last computed clock times. Days needed for pre-return are left out.
        """
        days_at_destination = max(
            0, (return_leg.departure_date - self.outbound.departure_date).days
        )
        pre_return_days = self.pre_return_days
        days_to_show = min(POST_ARRIVAL_DAYS, max(1, days_at_destination - pre_return_days - 1))

        entries = self._plan_arrival_days(days_to_show, "at_destination")

        maintained_days = days_at_destination - days_to_show - pre_return_days - 1
        if maintained_days > 0 and entries:
            last = entries[-1]
            last_day = days_to_show + min(maintained_days, MAX_MAINTAINED_DAYS)
            for day in range(days_to_show + 1, last_day + 1):
                entry_date = add_days(self.outbound.departure_date, day)
                minutes_later = (entry_date - last.date).days * 24 * 60

                entries.append(
                    DailyScheduleEntry(
                        date=entry_date,
                        day_label=f"Day {day}",
                        bedtime=shift_minutes(last.bedtime, minutes_later),
                        wake_time=shift_minutes(last.wake_time, minutes_later),
                        stage="at_destination",
                        travel_direction=self.direction,
                        body_clock_offset_minutes=0,
                    )
                )

        return entries

    def plan_post_arrival(self) -> list[DailyScheduleEntry]:
        """Plan the fixed 4 days after arrival on a one-way trip."""
        return self._plan_arrival_days(POST_ARRIVAL_DAYS, "post_arrival")

    def _plan_arrival_days(self, count: int, stage: ScheduleStage) -> list[DailyScheduleEntry]:
        """
        Gradual approach to normal times after landing.

        Westbound: body wakes early, so wake time starts early and bedtime stays
        at normal to encourage staying up. Eastbound: body sleeps late, so
        bedtime is pulled earlier and wake time stays at normal (alarm).
        """
        entries = []
        still_to_adjust = self.target_minutes - self.pre_flight_adjustment

        for day in range(1, count + 1):
            entry_date = add_days(self.outbound.departure_date, day)

            adjusted = self.pre_flight_adjustment + min(day * self.increment, still_to_adjust)
            remaining = max(0, self.target_minutes - adjusted)

            bedtime, wake_time = self._normal_times(entry_date)
            if self.direction == "west":
                wake_time = shift_minutes(wake_time, -remaining)
            elif self.direction == "east":
                bedtime = shift_minutes(bedtime, -remaining)

            bedtime, wake_time = apply_wake_constraint(bedtime, wake_time, self.traveler)

            entries.append(
                DailyScheduleEntry(
                    date=entry_date,
                    day_label=f"Day {day}",
                    bedtime=bedtime,
                    wake_time=wake_time,
                    stage=stage,
                    travel_direction=self.direction,
                    body_clock_offset_minutes=self._outbound_offset(remaining),
                )
            )

        return entries

    def plan_pre_return(self, return_leg: FlightLeg) -> list[DailyScheduleEntry]:
        """
        Shift back toward home for the 2 days before the return flight.

        Starts from a fixed destination steady state and moves by one increment
        per day: later after an eastbound trip, earlier after a westbound one.
        """
        entries = []

        for day in range(1, PRE_RETURN_DAYS + 1):
            days_remaining = PRE_RETURN_DAYS - day + 1
            entry_date = add_days(return_leg.departure_date, -days_remaining)
            shift_back = day * self.increment

            if self.direction in PRE_RETURN_ANCHORS:
                (bed_hour, bed_minute), (wake_hour, wake_minute) = PRE_RETURN_ANCHORS[self.direction]
                shift = -self._toward_destination(shift_back)
                bedtime = shift_minutes(at_time(entry_date, bed_hour, bed_minute), shift)
                wake_time = shift_minutes(at_time(entry_date, wake_hour, wake_minute), shift)
            else:
                bedtime, wake_time = self._normal_times(entry_date)

            wake_time = clamp_to_wake_constraint(wake_time, self.traveler)

            entries.append(
                DailyScheduleEntry(
                    date=entry_date,
                    day_label=pre_return_day_label(days_remaining),
                    bedtime=bedtime,
                    wake_time=wake_time,
                    stage="pre_return",
                    travel_direction=self.direction,
                    body_clock_offset_minutes=self._return_offset(
                        max(0, self.target_minutes - shift_back)
                    ),
                )
            )

        return entries

    def plan_post_return(self, return_leg: FlightLeg) -> list[DailyScheduleEntry]:
        """
        Recovery days after the return flight.

        Times move linearly from the residual displacement back to normal over
        the recovery window, reaching normal on the last day. Wake constraint
        always applies since work or school usually starts right away.
        """
        entries = []
        recovery_days = estimate_recovery_days(self.strategy, self.offset_hours)
        days_to_show = max(1, min(recovery_days, POST_RETURN_DAYS))
        residual = self.residual_minutes
        return_direction = return_leg.travel_direction

        for day in range(1, days_to_show + 1):
            entry_date = add_days(return_leg.departure_date, day)
            remaining = round(residual * (1 - day / days_to_show))

            # Body is still displaced toward the destination
            shift = self._toward_destination(remaining)
            bedtime, wake_time = self._normal_times(entry_date)
            bedtime, wake_time = apply_wake_constraint(
                shift_minutes(bedtime, shift), shift_minutes(wake_time, shift), self.traveler
            )

            entries.append(
                DailyScheduleEntry(
                    date=entry_date,
                    day_label=f"Recovery Day {day}",
                    bedtime=bedtime,
                    wake_time=wake_time,
                    stage="post_return",
                    travel_direction=return_direction,
                    body_clock_offset_minutes=self._return_offset(remaining),
                )
            )

        return entries

    def plan_no_adjustment(self, return_leg: FlightLeg | None) -> list[DailyScheduleEntry]:
        """Keep home times throughout; only travel days carry a message."""
        departure_date = self.outbound.departure_date
        bedtime, wake_time = self._normal_times(departure_date)

        entries = [
            DailyScheduleEntry(
                date=departure_date,
                day_label="Travel Day",
                bedtime=bedtime,
                wake_time=wake_time,
                stage="travel_day_outbound",
                strategy_message=NO_ADJUSTMENT_MESSAGE,
                hotel_arrival=shift_minutes(
                    self.outbound.arrival_datetime, HOTEL_ARRIVAL_BUFFER_HOURS * 60
                ),
                travel_direction=self.direction,
                body_clock_offset_minutes=0,
            )
        ]

        if return_leg is None:
            return entries

        days_at_destination = max(0, (return_leg.departure_date - departure_date).days)
        for day in range(1, min(max(1, days_at_destination - 1), MAX_NO_ADJUSTMENT_DAYS) + 1):
            entry_date = add_days(departure_date, day)
            bedtime, wake_time = self._normal_times(entry_date)
            entries.append(
                DailyScheduleEntry(
                    date=entry_date,
                    day_label=f"Day {day}",
                    bedtime=bedtime,
                    wake_time=wake_time,
                    stage="at_destination",
                    travel_direction=self.direction,
                    body_clock_offset_minutes=0,
                )
            )

        bedtime, wake_time = self._normal_times(return_leg.departure_date)
        entries.append(
            DailyScheduleEntry(
                date=return_leg.departure_date,
                day_label="Return Flight",
                bedtime=bedtime,
                wake_time=wake_time,
                stage="travel_day_return",
                strategy_message=NO_ADJUSTMENT_MESSAGE,
                travel_direction=return_leg.travel_direction,
                body_clock_offset_minutes=0,
            )
        )

        logger.debug("No-adjustment plan with %d entries", len(entries))
        return entries
