"""
Phase Scheduling Layer.

Turns a traveler, a strategy and flight legs into daily bedtime/wake entries.

Modules:
- phase_planner: Bedtime/wake rules for each trip phase
- wake_constraint: Wake-by clamp and bedtime rebalance
"""

from .phase_planner import PhasePlanner
from .wake_constraint import apply_wake_constraint, clamp_to_wake_constraint, rebalance_bedtime

__all__ = [
    "PhasePlanner",
    "apply_wake_constraint",
    "clamp_to_wake_constraint",
    "rebalance_bedtime",
]
