"""
Pydantic models for OpenF1 API lap data responses.
These models represent the raw data structure from the OpenF1 API.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class F1Lap(BaseModel):
    """
    Model representing a single lap from OpenF1 API.
    Matches the structure returned by https://api.openf1.org/v1/laps
    """
    meeting_key: Optional[int] = None
    session_key: Optional[int] = None
    driver_number: int
    lap_number: int
    date_start: Optional[datetime] = None
    duration_sector_1: Optional[float] = None
    duration_sector_2: Optional[float] = None
    duration_sector_3: Optional[float] = None
    i1_speed: Optional[int] = None
    i2_speed: Optional[int] = None
    is_pit_out_lap: bool = False
    lap_duration: Optional[float] = None
    segments_sector_1: Optional[List[Optional[int]]] = None
    segments_sector_2: Optional[List[Optional[int]]] = None
    segments_sector_3: Optional[List[Optional[int]]] = None
    st_speed: Optional[int] = None
