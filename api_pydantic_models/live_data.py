"""
Pydantic model for one refresh cycle of upstream OpenF1 data.
"""
from pydantic import BaseModel, ConfigDict
from typing import List, Optional

from openf1_pydantic_models.f1_car_data import F1CarData
from openf1_pydantic_models.f1_drivers import F1Driver
from openf1_pydantic_models.f1_laps import F1Lap
from openf1_pydantic_models.f1_race_control import F1RaceControlEvent
from openf1_pydantic_models.f1_sessions import F1Session
from openf1_pydantic_models.f1_timing import F1Interval, F1Position
from openf1_pydantic_models.f1_weather import F1Weather


class LiveDataBundle(BaseModel):
    """
    Snapshot of every upstream resource for a single session.
    Frozen so a cached bundle is swapped as a whole and never mutated in place.
    """
    model_config = ConfigDict(frozen=True)

    session: Optional[F1Session] = None
    drivers: List[F1Driver] = []
    positions: List[F1Position] = []
    intervals: List[F1Interval] = []
    car_data: List[F1CarData] = []
    weather: Optional[F1Weather] = None
    race_control: List[F1RaceControlEvent] = []
    laps: List[F1Lap] = []
    session_key: int = 0
    is_mock: bool = False

    @classmethod
    def empty(cls, is_mock: bool = False) -> "LiveDataBundle":
        return cls(is_mock=is_mock)
