"""
JetShift Sleep Schedule Generation

Builds per-traveler day-by-day bedtime and wake time plans that shift a
family's sleep toward a destination timezone and back home again.

Main entry point: ScheduleAssembler (phase-based)
"""

from .scheduler import (
    ScheduleAssembler,
    compute_family_schedules,
    compute_schedule,
    group_entries_by_stage,
)
from .strategy import compare_strategies, estimate_recovery_days, recommend_strategy
from .types import (
    DailyScheduleEntry,
    FlightLeg,
    FullAdjustment,
    MinimizeTotal,
    NoAdjustment,
    PartialAdjustment,
    ScheduleStage,
    Strategy,
    StrategyComparison,
    Traveler,
    TravelerSchedule,
    Trip,
)

__all__ = [
    # Types
    "Traveler",
    "FlightLeg",
    "Trip",
    "Strategy",
    "FullAdjustment",
    "PartialAdjustment",
    "MinimizeTotal",
    "NoAdjustment",
    "DailyScheduleEntry",
    "TravelerSchedule",
    "StrategyComparison",
    "ScheduleStage",
    # Scheduler
    "ScheduleAssembler",
    "compute_schedule",
    "compute_family_schedules",
    "group_entries_by_stage",
    # Strategy
    "recommend_strategy",
    "estimate_recovery_days",
    "compare_strategies",
]
