from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest

from api_pydantic_models.live_data import LiveDataBundle
from openf1_pydantic_models.f1_car_data import F1CarData
from openf1_pydantic_models.f1_drivers import F1Driver
from openf1_pydantic_models.f1_laps import F1Lap
from openf1_pydantic_models.f1_race_control import F1RaceControlEvent
from openf1_pydantic_models.f1_sessions import F1Session
from openf1_pydantic_models.f1_timing import F1Interval, F1Position
from openf1_pydantic_models.f1_weather import F1Weather

SESSION_KEY = 9158
NOW = datetime(2024, 9, 22, 12, 30, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class FakeOpenF1Client:
    """Returns queued bundles from get_live_data and records every call."""

    def __init__(self, *bundles: LiveDataBundle):
        self.bundles = list(bundles)
        self.calls: List[Optional[int]] = []

    async def get_live_data(self, session_key=None):
        self.calls.append(session_key)
        result = self.bundles.pop(0) if len(self.bundles) > 1 else self.bundles[0]
        if isinstance(result, Exception):
            raise result
        return result


def make_driver(number: int, acronym: str, team: str = "Red Bull Racing", colour: str = "3671C6") -> F1Driver:
    return F1Driver(
        meeting_key=1243,
        session_key=SESSION_KEY,
        driver_number=number,
        broadcast_name=f"X {acronym}",
        full_name=f"Driver {acronym}",
        name_acronym=acronym,
        team_name=team,
        team_colour=colour,
        first_name="Driver",
        last_name=acronym,
        headshot_url=None,
        country_code="NED",
    )


def make_position(number: int, position: int, seconds_ago: int = 0) -> F1Position:
    return F1Position(
        date=NOW - timedelta(seconds=seconds_ago),
        driver_number=number,
        position=position,
        session_key=SESSION_KEY,
    )


def make_interval(number: int, gap) -> F1Interval:
    return F1Interval(date=NOW, driver_number=number, gap_to_leader=gap, session_key=SESSION_KEY)


def make_lap(number: int, lap_number: int, duration: Optional[float], pit_out: bool = False) -> F1Lap:
    return F1Lap(
        session_key=SESSION_KEY,
        driver_number=number,
        lap_number=lap_number,
        lap_duration=duration,
        is_pit_out_lap=pit_out,
    )


def make_car_data(number: int, speed: int, throttle: int, seconds_ago: int = 0, drs: int = 0) -> F1CarData:
    return F1CarData(
        date=NOW - timedelta(seconds=seconds_ago),
        driver_number=number,
        speed=speed,
        throttle=throttle,
        brake=0,
        n_gear=7,
        rpm=11000,
        drs=drs,
        session_key=SESSION_KEY,
    )


def make_race_control(message: str, minutes_ago: float = 0, flag=None, category="Other", driver_number=None):
    return F1RaceControlEvent(
        date=NOW - timedelta(minutes=minutes_ago),
        session_key=SESSION_KEY,
        category=category,
        message=message,
        flag=flag,
        driver_number=driver_number,
    )


def make_session(**overrides) -> F1Session:
    values = dict(
        circuit_short_name="Singapore",
        country_name="Singapore",
        date_start=NOW - timedelta(hours=1),
        date_end=NOW + timedelta(hours=1),
        location="Marina Bay",
        session_key=SESSION_KEY,
        session_name="Race",
        session_type="Race",
        year=2024,
    )
    values.update(overrides)
    return F1Session(**values)


def make_bundle(**overrides) -> LiveDataBundle:
    values = dict(session=make_session(), session_key=SESSION_KEY)
    values.update(overrides)
    return LiveDataBundle(**values)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def grid_bundle() -> LiveDataBundle:
    """Three drivers with full timing and telemetry."""
    return make_bundle(
        drivers=[make_driver(1, "VER"), make_driver(16, "LEC", "Ferrari", "E80020"), make_driver(44, "HAM", "Mercedes")],
        positions=[
            make_position(1, 2, seconds_ago=60),
            make_position(1, 1),
            make_position(16, 2),
            make_position(44, 3),
        ],
        intervals=[make_interval(1, None), make_interval(16, 0.333), make_interval(44, 75.0)],
        car_data=[
            make_car_data(1, 300, 80),
            make_car_data(16, 280, 100, drs=12),
            make_car_data(44, 30, 5),
            make_car_data(44, 250, 90, seconds_ago=10),
        ],
        laps=[make_lap(1, 14, 78.456), make_lap(16, 14, 78.123), make_lap(44, 14, 80.5, pit_out=True)],
        weather=F1Weather(air_temperature=28.4, track_temperature=35.6, humidity=70, rainfall=0),
        race_control=[make_race_control("GREEN LIGHT - PIT EXIT OPEN", minutes_ago=1, flag="GREEN")],
    )
