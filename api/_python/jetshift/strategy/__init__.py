"""
Strategy Layer.

Recommends an adjustment strategy for a trip and estimates recovery time.
Pure functions of trip length, timezone offset and traveler ages.
"""

from .recommendation import (
    compare_strategies,
    effective_strategy,
    estimate_recovery_days,
    explain_strategy,
    recommend_strategy,
    strategies_match,
)

__all__ = [
    "recommend_strategy",
    "effective_strategy",
    "estimate_recovery_days",
    "explain_strategy",
    "compare_strategies",
    "strategies_match",
]
