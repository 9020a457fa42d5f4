"""
Pydantic models for the live dashboard API responses.
These are the display-ready records handed to the render layer.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum


class DriverStatus(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class TrackFlag(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    SAFETY = "safety"
    UNKNOWN = "unknown"


class DriverView(BaseModel):
    """One timing-table row: identity, position, timing and telemetry joined together."""
    pos: int = 0
    driver: str
    team: Optional[str] = None
    gap: str
    last_lap: str
    status: DriverStatus
    driver_number: int
    team_color: str

    # Telemetry, absent when no recent car_data sample exists
    speed: Optional[int] = None
    drs: Optional[str] = None
    gear: Optional[int] = None
    throttle: Optional[int] = None
    brake: Optional[int] = None

    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    headshot_url: Optional[str] = None
    country_code: Optional[str] = None
    broadcast_name: Optional[str] = None

    # Numeric companions of last_lap
    lap_number: Optional[int] = None
    lap_duration: Optional[float] = None


class TrackStatus(BaseModel):
    flag: TrackFlag
    message: str
    description: str


class SessionInfo(BaseModel):
    event: str
    session: str
    weather: str
    track_temp: str
    track_status: TrackStatus
    circuit: str
    location: str
    session_key: int
    is_live: bool = False


class CurrentLeader(BaseModel):
    driver: str
    team: Optional[str] = None


class FastestLap(BaseModel):
    time: str
    driver: str


class LapProgress(BaseModel):
    current: int
    total: int
    percentage: int


class DashboardStats(BaseModel):
    current_leader: CurrentLeader
    fastest_lap: FastestLap
    lap_progress: LapProgress
    total_drivers: int


class WeatherData(BaseModel):
    air_temp: Optional[float] = None
    track_temp: Optional[float] = None
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_direction: Optional[float] = None
    pressure: Optional[float] = None
    rainfall: bool = False


class RaceControlMessage(BaseModel):
    time: str
    category: Optional[str] = None
    message: Optional[str] = None
    flag: Optional[str] = None
    driver: Optional[str] = None


class DriverColumnsResponse(BaseModel):
    """Timing table split into two display columns."""
    left: List[DriverView] = Field(default_factory=list)
    right: List[DriverView] = Field(default_factory=list)
