"""
Shared test helpers for JetShift schedule tests.

Builders for traveler and trip records plus small accessors for inspecting
generated entries.
"""

from datetime import date, time, timedelta

from jetshift.types import (
    DailyScheduleEntry,
    FlightLeg,
    FullAdjustment,
    ScheduleStage,
    Strategy,
    Traveler,
    Trip,
)

# Cities used across tests (June 2025: NYC EDT -4, London BST +1,
# Los Angeles PDT -7, Paris CEST +2, Dublin IST +1)
CITIES = {
    "New York": "America/New_York",
    "London": "Europe/London",
    "Los Angeles": "America/Los_Angeles",
    "Paris": "Europe/Paris",
    "Dublin": "Europe/Dublin",
}


def make_traveler(
    age: int = 35,
    bedtime: str = "23:00",
    wake_time: str = "07:00",
    wake_by: str | None = None,
    strategy_override: Strategy | None = None,
    name: str = "Alex",
) -> Traveler:
    """Build a traveler from "HH:MM" strings."""
    bed_h, bed_m = map(int, bedtime.split(":"))
    wake_h, wake_m = map(int, wake_time.split(":"))
    wake_by_time = None
    if wake_by is not None:
        by_h, by_m = map(int, wake_by.split(":"))
        wake_by_time = time(by_h, by_m)

    return Traveler(
        name=name,
        age=age,
        current_bedtime=time(bed_h, bed_m),
        current_wake_time=time(wake_h, wake_m),
        has_wake_constraint=wake_by is not None,
        wake_by_time=wake_by_time,
        strategy_override=strategy_override,
    )


def make_leg(
    origin: str,
    destination: str,
    departure: date,
    departure_time: time = time(18, 0),
    arrival: date | None = None,
    arrival_time: time = time(8, 0),
) -> FlightLeg:
    """Build a flight leg between two cities in CITIES."""
    return FlightLeg(
        departure_city=origin,
        departure_timezone=CITIES[origin],
        arrival_city=destination,
        arrival_timezone=CITIES[destination],
        departure_date=departure,
        departure_time=departure_time,
        arrival_date=arrival or departure + timedelta(days=1),
        arrival_time=arrival_time,
    )


def make_trip(
    origin: str,
    destination: str,
    departure: date,
    return_date: date | None = None,
    strategy: Strategy | None = None,
) -> Trip:
    """Build a trip, round trip if return_date is given."""
    outbound = make_leg(origin, destination, departure)
    return_leg = make_leg(destination, origin, return_date) if return_date else None
    return Trip(
        name=f"{destination} trip",
        home_timezone=CITIES[origin],
        outbound_leg=outbound,
        return_leg=return_leg,
        strategy=strategy or FullAdjustment(),
    )


def entries_for_stage(
    entries: list[DailyScheduleEntry], stage: ScheduleStage
) -> list[DailyScheduleEntry]:
    """Entries in a given stage, in plan order."""
    return [e for e in entries if e.stage == stage]


def entry_by_label(entries: list[DailyScheduleEntry], label: str) -> DailyScheduleEntry:
    """First entry with a given day label."""
    for entry in entries:
        if entry.day_label == label:
            return entry
    raise AssertionError(f"No entry labelled {label!r}")


def offsets(entries: list[DailyScheduleEntry]) -> list[int]:
    return [e.body_clock_offset_minutes for e in entries]


def clock(dt) -> str:
    """Time of day of a datetime as "HH:MM"."""
    return dt.strftime("%H:%M")
