from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class F1Weather(BaseModel):
    # https://openf1.org/#weather
    air_temperature: Optional[float] = None
    date: Optional[datetime] = None
    humidity: Optional[float] = None
    meeting_key: Optional[int] = None
    pressure: Optional[float] = None
    rainfall: Optional[float] = None
    session_key: Optional[int] = None
    track_temperature: Optional[float] = None
    wind_direction: Optional[float] = None
    wind_speed: Optional[float] = None
