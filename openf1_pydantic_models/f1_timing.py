"""
Pydantic models for the OpenF1 timing feeds: position and intervals.
"""
from pydantic import BaseModel
from datetime import datetime
from typing import Optional, Union


class F1Position(BaseModel):
    # https://openf1.org/#position
    date: datetime
    driver_number: int
    meeting_key: Optional[int] = None
    position: Optional[int] = None
    session_key: Optional[int] = None


class F1Interval(BaseModel):
    # https://openf1.org/#intervals
    date: Optional[datetime] = None
    driver_number: int
    # None for the leader, a float in seconds, or a string such as '+1 LAP'
    gap_to_leader: Union[float, str, None] = None
    interval: Union[float, str, None] = None
    meeting_key: Optional[int] = None
    session_key: Optional[int] = None
