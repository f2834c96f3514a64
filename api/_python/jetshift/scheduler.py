"""
Schedule assembly.

Sequences phase planner output into one ordered list of daily entries per
traveler:

    Round trip: PRE_ADJUSTMENT(3) → TRAVEL_DAY_OUTBOUND → AT_DESTINATION(n)
                → [PRE_RETURN(2), Minimize Total only] → TRAVEL_DAY_RETURN
                → POST_RETURN(recovery days)
    One-way:    PRE_ADJUSTMENT(3) → TRAVEL_DAY_OUTBOUND → POST_ARRIVAL(4)

No Adjustment skips all shifting and keeps home times throughout. Nothing is
cached: every call recomputes the plan from the current traveler and trip.
"""

import logging
from collections.abc import Iterable

from .scheduling.phase_planner import PhasePlanner
from .types import (
    STAGE_ORDER,
    DailyScheduleEntry,
    MinimizeTotal,
    NoAdjustment,
    ScheduleStage,
    Traveler,
    TravelerSchedule,
    Trip,
)

logger = logging.getLogger(__name__)


class ScheduleAssembler:
    """
    Build a traveler's full trip plan from the phase planners.

    Total over well-typed input: a trip without an outbound leg yields an
    empty plan and a trip without a return leg yields the one-way arc.
    """

    def compute_schedule(self, traveler: Traveler, trip: Trip) -> list[DailyScheduleEntry]:
        """
        Compute a traveler's daily schedule for a trip.

        Args:
            traveler: Traveler sleep profile
            trip: Trip with outbound leg, optional return leg and default strategy

        Returns:
            Ordered daily entries (empty if the trip has no outbound leg)
        """
        outbound = trip.outbound_leg
        if outbound is None:
            logger.debug("Trip %r has no outbound leg, nothing to schedule", trip.name)
            return []

        strategy = traveler.effective_strategy(trip.strategy)
        planner = PhasePlanner(traveler, strategy, outbound)
        return_leg = trip.return_leg

        logger.debug(
            "Scheduling %s: strategy=%s offset=%dh return=%s",
            traveler.name,
            strategy.kind,
            planner.offset_hours,
            return_leg is not None,
        )

        if isinstance(strategy, NoAdjustment):
            return planner.plan_no_adjustment(return_leg)

        entries: list[DailyScheduleEntry] = []

        # 1. Pre-outbound adjustment
        entries.extend(planner.plan_pre_adjustment())

        # 2. Outbound travel day
        entries.append(planner.plan_travel_day(outbound))

        if return_leg is None:
            # 3. One-way: post-arrival adjustment only
            entries.extend(planner.plan_post_arrival())
            return entries

        # 3. At destination
        entries.extend(planner.plan_at_destination(return_leg))

        # 4. Shift back before returning
        if isinstance(strategy, MinimizeTotal):
            entries.extend(planner.plan_pre_return(return_leg))

        # 5. Return travel day
        entries.append(planner.plan_travel_day(return_leg, is_return=True))

        # 6. Recovery at home
        entries.extend(planner.plan_post_return(return_leg))

        return entries

    def compute_family_schedules(
        self, travelers: Iterable[Traveler], trip: Trip
    ) -> list[TravelerSchedule]:
        """Compute one independent schedule per traveler."""
        return [
            TravelerSchedule(traveler=traveler, entries=self.compute_schedule(traveler, trip))
            for traveler in travelers
        ]


def compute_schedule(traveler: Traveler, trip: Trip) -> list[DailyScheduleEntry]:
    """
    Convenience function to compute one traveler's schedule.

    Args:
        traveler: Traveler sleep profile
        trip: Trip to plan for

    Returns:
        Ordered daily entries
    """
    return ScheduleAssembler().compute_schedule(traveler, trip)


def compute_family_schedules(
    travelers: Iterable[Traveler], trip: Trip
) -> list[TravelerSchedule]:
    """Convenience function to compute schedules for a group of travelers."""
    return ScheduleAssembler().compute_family_schedules(travelers, trip)


def group_entries_by_stage(
    entries: Iterable[DailyScheduleEntry],
) -> dict[ScheduleStage, list[DailyScheduleEntry]]:
    """
    Group entries by stage for display, in trip order.

    Stages with no entries are omitted.
    """
    grouped: dict[ScheduleStage, list[DailyScheduleEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.stage, []).append(entry)
    return {stage: grouped[stage] for stage in STAGE_ORDER if stage in grouped}
