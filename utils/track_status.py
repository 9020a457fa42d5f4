"""
Track status and session liveness derived from race control messages and session timing.
"""
import re
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from api_pydantic_models.live_dashboard import TrackFlag, TrackStatus
from config.dashboard_config import DashboardConfig
from openf1_pydantic_models.f1_car_data import F1CarData
from openf1_pydantic_models.f1_race_control import F1RaceControlEvent
from openf1_pydantic_models.f1_sessions import F1Session
from openf1_pydantic_models.f1_timing import F1Interval

LIVE_TIMING_SESSION_TYPES = ("Race", "Qualifying")

# "CHEQUERED FLAG" must not read as a red flag
RED_FLAG_PATTERN = re.compile(r"\bred flag\b")


def to_utc(dt: datetime) -> datetime:
    """OpenF1 timestamps are UTC; treat naive values as UTC and convert the rest."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _is_virtual_safety_car(text: str) -> bool:
    return "virtual safety car" in text or "vsc" in text.split()


def classify_message(event: F1RaceControlEvent) -> Optional[TrackStatus]:
    """
    Map a single race control message to a track status.

    Returns None for messages that say nothing about track conditions
    (DRS, track limits, penalties and so on).
    """
    flag = (event.flag or "").lower()
    category = (event.category or "").lower()
    text = (event.message or "").lower()

    if "red" in flag.split() or RED_FLAG_PATTERN.search(text):
        return TrackStatus(
            flag=TrackFlag.RED,
            message="Session Stopped",
            description=event.message or "Red flag - Session suspended",
        )

    if "safetycar" in category or "safety car" in text:
        return TrackStatus(
            flag=TrackFlag.SAFETY,
            message="Safety Car",
            description=event.message or "Safety car deployed",
        )

    if "yellow" in flag.split() or "yellow" in text:
        return TrackStatus(
            flag=TrackFlag.YELLOW,
            message="Caution",
            description=event.message or "Yellow flag - Caution",
        )

    if _is_virtual_safety_car(text):
        return TrackStatus(
            flag=TrackFlag.YELLOW,
            message="Virtual Safety Car",
            description=event.message or "Virtual Safety Car deployed",
        )

    return None


def is_recent(dt: datetime, now: datetime, window_seconds: int) -> bool:
    return to_utc(dt) > now - timedelta(seconds=window_seconds)


def get_session_based_status(session: Optional[F1Session], now: Optional[datetime] = None) -> TrackStatus:
    """Track status from the session start/end window alone."""
    if session is None:
        return TrackStatus(
            flag=TrackFlag.UNKNOWN,
            message="No Session Data",
            description="Unable to determine track status",
        )

    now = now or datetime.now(timezone.utc)
    name = session.session_name or "Session"

    if session.date_start and session.date_end:
        start = to_utc(session.date_start)
        end = to_utc(session.date_end)
        if now < start:
            return TrackStatus(
                flag=TrackFlag.YELLOW,
                message="Session Not Started",
                description=f"{name} starts at {start.strftime('%H:%M:%S')} UTC",
            )
        if now > end:
            return TrackStatus(
                flag=TrackFlag.YELLOW,
                message="Session Ended",
                description=f"{name} ended at {end.strftime('%H:%M:%S')} UTC",
            )
        return TrackStatus(
            flag=TrackFlag.GREEN,
            message="Session Active",
            description=f"{name} in progress",
        )

    return TrackStatus(
        flag=TrackFlag.UNKNOWN,
        message="Track Status Unknown",
        description="Live data may not be available",
    )


def get_track_status(
    race_control: List[F1RaceControlEvent],
    session: Optional[F1Session],
    now: Optional[datetime] = None,
    recent_window_seconds: int = DashboardConfig.RECENT_MESSAGE_SECONDS,
) -> TrackStatus:
    """
    Derive the current track status.

    Messages are scanned newest first and the first one that carries a
    red flag, safety car, yellow flag or VSC decides the status. With no
    such message a recent message means a clear track; otherwise the
    session timing decides.
    """
    now = now or datetime.now(timezone.utc)
    if not race_control:
        return get_session_based_status(session, now)

    messages = sorted(race_control, key=lambda event: to_utc(event.date), reverse=True)
    for event in messages:
        status = classify_message(event)
        if status is not None:
            return status

    if is_recent(messages[0].date, now, recent_window_seconds):
        return TrackStatus(
            flag=TrackFlag.GREEN,
            message="Track Clear",
            description="Normal racing conditions",
        )

    return get_session_based_status(session, now)


def is_session_live(
    session: Optional[F1Session],
    intervals: List[F1Interval],
    car_data: List[F1CarData],
    now: Optional[datetime] = None,
    activity_window_seconds: int = DashboardConfig.LIVE_ACTIVITY_SECONDS,
) -> bool:
    """
    Whether the session is running right now.

    Races and qualifying are live when interval data arrived recently,
    practice when car data did. Anything else falls back to the
    session's start/end window.
    """
    if session is None:
        return False
    now = now or datetime.now(timezone.utc)

    if session.session_type in LIVE_TIMING_SESSION_TYPES:
        dated = [interval.date for interval in intervals if interval.date is not None]
        if dated:
            return is_recent(max(dated, key=to_utc), now, activity_window_seconds)

    if session.session_type == "Practice" and car_data:
        latest = max((sample.date for sample in car_data), key=to_utc)
        return is_recent(latest, now, activity_window_seconds)

    if session.date_start and session.date_end:
        return to_utc(session.date_start) <= now <= to_utc(session.date_end)
    return False
