from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class F1CarData(BaseModel):
    # https://openf1.org/#car-data
    brake: Optional[int] = None
    date: datetime
    driver_number: int
    drs: Optional[int] = None
    meeting_key: Optional[int] = None
    n_gear: Optional[int] = None
    rpm: Optional[int] = None
    session_key: Optional[int] = None
    speed: Optional[int] = None
    throttle: Optional[int] = None
