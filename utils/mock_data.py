"""
Canonical sample data served when no real OpenF1 data has ever been observed.
All fallbacks in the dashboard come from here.
"""
from typing import List

from api_pydantic_models.live_data import LiveDataBundle
from api_pydantic_models.live_dashboard import (
    CurrentLeader,
    DashboardStats,
    DriverStatus,
    DriverView,
    FastestLap,
    LapProgress,
    SessionInfo,
    TrackFlag,
    TrackStatus,
)

# (pos, acronym, team, driver number, team colour, gap, last lap, status)
_MOCK_GRID = [
    (1, "VER", "Red Bull", 1, "#3671C6", "Leader", "1:18.456", DriverStatus.GREEN),
    (2, "LEC", "Ferrari", 16, "#F91536", "+0.333", "1:18.789", DriverStatus.GREEN),
    (3, "HAM", "Mercedes", 44, "#6CD3BF", "+0.667", "1:19.123", DriverStatus.YELLOW),
    (4, "RUS", "Mercedes", 63, "#6CD3BF", "+1.000", "1:19.456", DriverStatus.GREEN),
    (5, "SAI", "Ferrari", 55, "#F91536", "+1.333", "1:19.789", DriverStatus.GREEN),
    (6, "NOR", "McLaren", 4, "#F58020", "+1.667", "1:20.123", DriverStatus.GREEN),
    (7, "PIA", "McLaren", 81, "#F58020", "+2.000", "1:20.456", DriverStatus.GREEN),
    (8, "ALO", "Aston Martin", 14, "#358C75", "+2.333", "1:20.789", DriverStatus.GREEN),
    (9, "STR", "Aston Martin", 18, "#358C75", "+2.667", "1:21.123", DriverStatus.GREEN),
    (10, "GAS", "Alpine", 10, "#2293D1", "+3.000", "1:21.456", DriverStatus.GREEN),
    (11, "OCO", "Alpine", 31, "#2293D1", "+3.333", "1:21.789", DriverStatus.GREEN),
    (12, "ALB", "Williams", 23, "#37BEDD", "+3.667", "1:22.123", DriverStatus.GREEN),
    (13, "SAR", "Williams", 2, "#37BEDD", "+4.000", "1:22.456", DriverStatus.GREEN),
    (14, "TSU", "AlphaTauri", 22, "#5E8FAA", "+4.333", "1:22.789", DriverStatus.GREEN),
    (15, "RIC", "AlphaTauri", 3, "#5E8FAA", "+4.667", "1:23.123", DriverStatus.GREEN),
    (16, "BOT", "Alfa Romeo", 77, "#C92D4B", "+5.000", "1:23.456", DriverStatus.GREEN),
    (17, "ZHO", "Alfa Romeo", 24, "#C92D4B", "+5.333", "1:23.789", DriverStatus.GREEN),
    (18, "HUL", "Haas", 27, "#B6BABD", "+5.667", "1:24.123", DriverStatus.GREEN),
    (19, "MAG", "Haas", 20, "#B6BABD", "+6.000", "1:24.456", DriverStatus.GREEN),
    (20, "PER", "Red Bull", 11, "#3671C6", "+1 LAP", "1:25.789", DriverStatus.RED),
]


def get_mock_live_data() -> LiveDataBundle:
    return LiveDataBundle.empty(is_mock=True)


def get_mock_drivers() -> List[DriverView]:
    return [
        DriverView(
            pos=pos,
            driver=acronym,
            team=team,
            gap=gap,
            last_lap=last_lap,
            status=status,
            driver_number=number,
            team_color=colour,
        )
        for pos, acronym, team, number, colour, gap, last_lap, status in _MOCK_GRID
    ]


def get_mock_session_info() -> SessionInfo:
    return SessionInfo(
        event="Singapore Grand Prix",
        session="Race",
        weather="28°C",
        track_temp="35°C",
        track_status=TrackStatus(
            flag=TrackFlag.GREEN,
            message="Session Active",
            description="Race in progress - Normal racing conditions",
        ),
        circuit="Marina Bay",
        location="Singapore",
        session_key=0,
        is_live=False,
    )


def get_mock_dashboard_stats() -> DashboardStats:
    return DashboardStats(
        current_leader=CurrentLeader(driver="VER", team="Red Bull Racing"),
        fastest_lap=FastestLap(time="1:18.123", driver="LEC"),
        lap_progress=LapProgress(current=15, total=61, percentage=25),
        total_drivers=20,
    )
