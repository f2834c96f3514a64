"""
Pytest fixtures for JetShift schedule tests.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from helpers import make_traveler, make_trip  # noqa: E402

DEPARTURE = date(2025, 6, 15)


@pytest.fixture
def adult():
    """Adult with 23:00-07:00 sleep, 30 minute increment."""
    return make_traveler(age=35, bedtime="23:00", wake_time="07:00")


@pytest.fixture
def teen():
    """Teen with 22:00-07:00 sleep, 30 minute increment."""
    return make_traveler(age=14, bedtime="22:00", wake_time="07:00", name="Sam")


@pytest.fixture
def young_child():
    """Preschooler with 19:30-06:30 sleep, 20 minute increment."""
    return make_traveler(age=4, bedtime="19:30", wake_time="06:30", name="Mia")


@pytest.fixture
def nyc_london_round_trip():
    """NYC → London (5h east) for 14 days."""
    return make_trip("New York", "London", DEPARTURE, date(2025, 6, 29))


@pytest.fixture
def nyc_london_one_way():
    """NYC → London (5h east), no return."""
    return make_trip("New York", "London", DEPARTURE)


@pytest.fixture
def london_la_round_trip():
    """London → Los Angeles (8h west) for 14 days."""
    return make_trip("London", "Los Angeles", DEPARTURE, date(2025, 6, 29))


@pytest.fixture
def london_dublin_round_trip():
    """London → Dublin (same timezone) for 7 days."""
    return make_trip("London", "Dublin", DEPARTURE, date(2025, 6, 22))
