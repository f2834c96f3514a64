"""
JSON payload conversion and request validation.

Wire formats:
- time: "HH:MM"
- date: "YYYY-MM-DD"
- datetime: "YYYY-MM-DDTHH:MM"
- strategy: {"type": "full" | "partial" | "minimize_total" | "none", "percentage": 0.6}
"""

from datetime import date
from typing import Any

from .strategy.recommendation import compare_strategies, recommend_strategy
from .time_math import format_time, parse_time
from .types import (
    DIRECTION_DESCRIPTIONS,
    PARTIAL_OPTIONS,
    STAGE_DESCRIPTIONS,
    DailyScheduleEntry,
    FlightLeg,
    FullAdjustment,
    MinimizeTotal,
    NoAdjustment,
    PartialAdjustment,
    Strategy,
    StrategyComparison,
    Traveler,
    TravelerSchedule,
    Trip,
)

# Validation patterns
TIMEZONE_PATTERN_CHARS = set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_/-+0123456789")
STRATEGY_TYPES = ("full", "partial", "minimize_total", "none")
MAX_TRAVELERS = 8
MAX_AGE = 120


class PayloadError(ValueError):
    """Raised when a payload field cannot be converted."""


# =============================================================================
# Validation
# =============================================================================


def validate_timezone(tz: Any) -> bool:
    """Validate IANA timezone format like 'America/Los_Angeles'."""
    if not isinstance(tz, str) or not tz or "/" not in tz:
        return False
    return all(c in TIMEZONE_PATTERN_CHARS for c in tz)


def validate_date(d: Any) -> bool:
    """Validate ISO date format like '2025-06-15'."""
    if not isinstance(d, str) or len(d) != 10:
        return False
    try:
        date.fromisoformat(d)
        return True
    except ValueError:
        return False


def validate_time(t: Any) -> bool:
    """Validate time format like '07:00'."""
    if not isinstance(t, str) or len(t) != 5:
        return False
    try:
        parts = t.split(":")
        if len(parts) != 2:
            return False
        hour = int(parts[0])
        minute = int(parts[1])
        return 0 <= hour <= 23 and 0 <= minute <= 59
    except (ValueError, IndexError):
        return False


def validate_strategy(data: Any) -> str | None:
    """Validate a strategy object, return error message or None if valid."""
    if not isinstance(data, dict):
        return "strategy must be an object"
    strategy_type = data.get("type")
    if strategy_type not in STRATEGY_TYPES:
        return f"Invalid strategy type: {strategy_type}"
    if strategy_type == "partial":
        percentage = data.get("percentage")
        if isinstance(percentage, bool) or not isinstance(percentage, (int, float)):
            return "Partial strategy requires a numeric percentage"
        if not 0 <= percentage <= 1:
            return "percentage must be between 0 and 1"
    return None


def validate_leg(data: Any, label: str) -> str | None:
    """Validate a flight leg object, return error message or None if valid."""
    if not isinstance(data, dict):
        return f"{label} must be an object"

    required_fields = [
        "departure_timezone",
        "arrival_timezone",
        "departure_date",
        "departure_time",
        "arrival_date",
        "arrival_time",
    ]
    for field in required_fields:
        if field not in data:
            return f"Missing required field: {label}.{field}"

    for field in ("departure_timezone", "arrival_timezone"):
        if not validate_timezone(data[field]):
            return f"Invalid {label}.{field} format: {data[field]}"
    for field in ("departure_date", "arrival_date"):
        if not validate_date(data[field]):
            return f"Invalid {label}.{field} format: {data[field]}"
    for field in ("departure_time", "arrival_time"):
        if not validate_time(data[field]):
            return f"Invalid {label}.{field} format: {data[field]}"

    return None


def validate_traveler(data: Any, index: int) -> str | None:
    """Validate a traveler object, return error message or None if valid."""
    label = f"travelers[{index}]"
    if not isinstance(data, dict):
        return f"{label} must be an object"

    for field in ("name", "age", "bedtime", "wake_time"):
        if field not in data:
            return f"Missing required field: {label}.{field}"

    age = data["age"]
    if isinstance(age, bool) or not isinstance(age, int) or not 0 <= age <= MAX_AGE:
        return f"{label}.age must be a number between 0 and {MAX_AGE}"

    for field in ("bedtime", "wake_time"):
        if not validate_time(data[field]):
            return f"Invalid {label}.{field} format: {data[field]}"

    if data.get("has_wake_constraint"):
        if not validate_time(data.get("wake_by_time")):
            return f"{label}.wake_by_time is required when has_wake_constraint is set"

    if data.get("strategy_override") is not None:
        error = validate_strategy(data["strategy_override"])
        if error:
            return f"{label}.strategy_override: {error}"

    return None


def validate_schedule_request(data: Any) -> str | None:
    """Validate a schedule request, return error message or None if valid."""
    if not isinstance(data, dict):
        return "Request body must be an object"

    trip = data.get("trip")
    if not isinstance(trip, dict):
        return "Missing required field: trip"

    if trip.get("outbound") is not None:
        error = validate_leg(trip["outbound"], "trip.outbound")
        if error:
            return error
    if trip.get("return") is not None:
        error = validate_leg(trip["return"], "trip.return")
        if error:
            return error
    if trip.get("strategy") is not None:
        error = validate_strategy(trip["strategy"])
        if error:
            return f"trip.strategy: {error}"

    travelers = data.get("travelers")
    if not isinstance(travelers, list) or not travelers:
        return "travelers must be a non-empty list"
    if len(travelers) > MAX_TRAVELERS:
        return f"At most {MAX_TRAVELERS} travelers are supported"

    for index, traveler in enumerate(travelers):
        error = validate_traveler(traveler, index)
        if error:
            return error

    return None


def validate_compare_request(data: Any) -> str | None:
    """Validate a strategy comparison request, return error message or None if valid."""
    if not isinstance(data, dict):
        return "Request body must be an object"

    for field in ("days_at_destination", "timezone_offset_hours"):
        value = data.get(field)
        if isinstance(value, bool) or not isinstance(value, int):
            return f"{field} must be an integer"

    ages = data.get("traveler_ages", [])
    if not isinstance(ages, list) or not all(
        isinstance(age, int) and not isinstance(age, bool) for age in ages
    ):
        return "traveler_ages must be a list of integers"

    return None


# =============================================================================
# Decoding
# =============================================================================


def strategy_from_dict(data: dict[str, Any]) -> Strategy:
    """Build a Strategy from its wire format."""
    strategy_type = data.get("type")
    if strategy_type == "full":
        return FullAdjustment()
    elif strategy_type == "partial":
        try:
            return PartialAdjustment(percentage=float(data["percentage"]))
        except (KeyError, TypeError, ValueError) as e:
            raise PayloadError(f"Invalid partial percentage: {data.get('percentage')}") from e
    elif strategy_type == "minimize_total":
        return MinimizeTotal()
    elif strategy_type == "none":
        return NoAdjustment()
    raise PayloadError(f"Invalid strategy type: {strategy_type}")


def _parse_time_field(data: dict[str, Any], field: str):
    try:
        return parse_time(data[field])
    except (KeyError, ValueError, IndexError, AttributeError) as e:
        raise PayloadError(f"Invalid time for {field}: {data.get(field)}") from e


def _parse_date_field(data: dict[str, Any], field: str) -> date:
    try:
        return date.fromisoformat(data[field])
    except (KeyError, ValueError, TypeError) as e:
        raise PayloadError(f"Invalid date for {field}: {data.get(field)}") from e


def leg_from_dict(data: dict[str, Any]) -> FlightLeg:
    """Build a FlightLeg from its wire format."""
    return FlightLeg(
        departure_city=data.get("departure_city", ""),
        departure_timezone=data["departure_timezone"],
        arrival_city=data.get("arrival_city", ""),
        arrival_timezone=data["arrival_timezone"],
        departure_date=_parse_date_field(data, "departure_date"),
        departure_time=_parse_time_field(data, "departure_time"),
        arrival_date=_parse_date_field(data, "arrival_date"),
        arrival_time=_parse_time_field(data, "arrival_time"),
    )


def trip_from_dict(data: dict[str, Any]) -> Trip:
    """Build a Trip from its wire format."""
    outbound = data.get("outbound")
    return_leg = data.get("return")
    strategy = data.get("strategy")

    return Trip(
        name=data.get("name", ""),
        home_timezone=data.get("home_timezone") or (outbound or {}).get("departure_timezone", ""),
        outbound_leg=leg_from_dict(outbound) if outbound else None,
        return_leg=leg_from_dict(return_leg) if return_leg else None,
        strategy=strategy_from_dict(strategy) if strategy else FullAdjustment(),
    )


def traveler_from_dict(data: dict[str, Any]) -> Traveler:
    """Build a Traveler from its wire format."""
    has_wake_constraint = bool(data.get("has_wake_constraint", False))
    override = data.get("strategy_override")

    return Traveler(
        name=data["name"],
        age=int(data["age"]),
        current_bedtime=_parse_time_field(data, "bedtime"),
        current_wake_time=_parse_time_field(data, "wake_time"),
        has_wake_constraint=has_wake_constraint,
        wake_by_time=_parse_time_field(data, "wake_by_time") if data.get("wake_by_time") else None,
        strategy_override=strategy_from_dict(override) if override else None,
    )


# =============================================================================
# Encoding
# =============================================================================


def strategy_to_dict(strategy: Strategy) -> dict[str, Any]:
    """Convert a Strategy to its wire format."""
    result: dict[str, Any] = {
        "type": strategy.kind,
        "display_name": strategy.display_name,
        "adjustment_percentage": strategy.adjustment_percentage,
    }
    if isinstance(strategy, PartialAdjustment):
        result["percentage"] = strategy.percentage
    return result


def entry_to_dict(entry: DailyScheduleEntry) -> dict[str, Any]:
    """Convert a DailyScheduleEntry to its wire format."""
    return {
        "date": entry.date.isoformat(),
        "day_label": entry.day_label,
        "bedtime": entry.bedtime.strftime("%Y-%m-%dT%H:%M"),
        "wake_time": entry.wake_time.strftime("%Y-%m-%dT%H:%M"),
        "stage": entry.stage,
        "stage_description": STAGE_DESCRIPTIONS[entry.stage],
        "strategy_message": entry.strategy_message,
        "hotel_arrival": entry.hotel_arrival.strftime("%Y-%m-%dT%H:%M")
        if entry.hotel_arrival
        else None,
        "travel_direction": entry.travel_direction,
        "direction_description": DIRECTION_DESCRIPTIONS[entry.travel_direction]
        if entry.travel_direction
        else None,
        "body_clock_offset_minutes": entry.body_clock_offset_minutes,
        "body_clock_label": entry.formatted_body_clock_offset,
    }


def traveler_schedule_to_dict(schedule: TravelerSchedule) -> dict[str, Any]:
    """Convert a TravelerSchedule to its wire format."""
    traveler = schedule.traveler
    return {
        "traveler": {
            "name": traveler.name,
            "age": traveler.age,
            "bedtime": format_time(traveler.current_bedtime),
            "wake_time": format_time(traveler.current_wake_time),
            "adjustment_increment_minutes": traveler.adjustment_increment_minutes,
        },
        "entries": [entry_to_dict(entry) for entry in schedule.entries],
    }


def comparison_to_dict(comparison: StrategyComparison) -> dict[str, Any]:
    """Convert a StrategyComparison to its wire format."""
    return {
        "strategy": strategy_to_dict(comparison.strategy),
        "recovery_days": comparison.recovery_days,
        "explanation": comparison.explanation,
        "is_recommended": comparison.is_recommended,
    }


def strategy_report(
    days_at_destination: int, timezone_offset_hours: int, traveler_ages: list[int]
) -> dict[str, Any]:
    """Recommended strategy, the full comparison table and the partial presets."""
    recommended = recommend_strategy(days_at_destination, timezone_offset_hours, traveler_ages)
    comparisons = compare_strategies(days_at_destination, timezone_offset_hours, traveler_ages)
    return {
        "recommended": strategy_to_dict(recommended),
        "comparisons": [comparison_to_dict(c) for c in comparisons],
        "partial_options": [strategy_to_dict(s) for s in PARTIAL_OPTIONS],
    }
