"""
Display formatting helpers for timing values coming from OpenF1.
"""
from typing import Optional, Union

NO_TIME_PLACEHOLDER = "--:--:---"
LEADER_GAP = "Leader"
LAPPED_GAP = "+1 LAP"

# A gap over a minute means the car has been lapped
LAPPED_GAP_SECONDS = 60

DRS_STATUS = {
    0: "OFF",
    1: "OFF",
    8: "ELIGIBLE",
    10: "ON",
    12: "ON",
    14: "ON",
}


def format_gap(gap: Union[float, str, None]) -> str:
    """
    Format a gap to the leader for display.

    OpenF1 sends None (or 0) for the leader and a string such as '+1 LAP'
    for lapped cars, which is passed through unchanged.
    """
    if gap is None or gap == 0:
        return LEADER_GAP
    if isinstance(gap, str):
        return gap
    if gap > LAPPED_GAP_SECONDS:
        return LAPPED_GAP
    return f"+{gap:.3f}"


def format_fallback_gap(index: int) -> str:
    """Synthesized gap for a car ranked purely by arrival order."""
    if index == 0:
        return LEADER_GAP
    return f"+{index * 0.5:.1f}s"


def format_lap_time(seconds: Optional[float]) -> str:
    """
    Format a lap duration in seconds as M:SS.mmm.

    Works on whole milliseconds so a value such as 59.9996 renders as
    1:00.000 rather than 0:60.000.
    """
    if not seconds:
        return NO_TIME_PLACEHOLDER
    total_ms = int(round(seconds * 1000))
    minutes, remainder_ms = divmod(total_ms, 60_000)
    secs, millis = divmod(remainder_ms, 1000)
    return f"{minutes}:{secs:02d}.{millis:03d}"


def drs_status(drs_value: Optional[int]) -> str:
    if drs_value is None:
        return "UNKNOWN"
    return DRS_STATUS.get(drs_value, "UNKNOWN")


def format_temperature(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    return f"{round(value)}°C"


def format_team_colour(colour: Optional[str]) -> str:
    if not colour:
        return "#FFFFFF"
    return colour if colour.startswith("#") else f"#{colour}"
