"""
Live dashboard service.
Joins the cached OpenF1 snapshot into display-ready records and applies the
fallback policy for missing drivers and degenerate position data.
"""
import math
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from api_pydantic_models.live_data import LiveDataBundle
from api_pydantic_models.live_dashboard import (
    CurrentLeader,
    DashboardStats,
    DriverStatus,
    DriverView,
    FastestLap,
    LapProgress,
    RaceControlMessage,
    SessionInfo,
    WeatherData,
)
from config.dashboard_config import DashboardConfig
from openf1_pydantic_models.f1_car_data import F1CarData
from openf1_pydantic_models.f1_drivers import F1Driver
from openf1_pydantic_models.f1_laps import F1Lap
from openf1_pydantic_models.f1_timing import F1Interval, F1Position
from utils import mock_data
from utils.formatting import (
    NO_TIME_PLACEHOLDER,
    drs_status,
    format_fallback_gap,
    format_gap,
    format_lap_time,
    format_team_colour,
    format_temperature,
)
from utils.openf1_client import OpenF1Client
from utils.snapshot_cache import SnapshotCache
from utils.track_status import get_track_status, is_session_live, to_utc
import logging

logger = logging.getLogger(__name__)

NO_FASTEST_LAP = FastestLap(time="99:99.999", driver="N/A")


def get_driver_status(car_data: Optional[F1CarData], lap: Optional[F1Lap]) -> DriverStatus:
    """
    Status light for a timing row.

    Red when the car is stopped, yellow on a pit-out lap or when there is
    no telemetry to judge by, green otherwise.
    """
    if car_data is None:
        return DriverStatus.YELLOW

    speed = car_data.speed
    throttle = car_data.throttle
    if speed is not None and throttle is not None and speed < 50 and throttle < 10:
        return DriverStatus.RED

    if lap is not None and lap.is_pit_out_lap:
        return DriverStatus.YELLOW

    return DriverStatus.GREEN


def split_drivers_into_columns(drivers: List[DriverView]) -> Tuple[List[DriverView], List[DriverView]]:
    """Split the timing table in two, the left column taking the extra row."""
    midpoint = math.ceil(len(drivers) / 2)
    return drivers[:midpoint], drivers[midpoint:]


def _latest_by_date(rows) -> Dict[int, object]:
    latest = {}
    for row in rows:
        existing = latest.get(row.driver_number)
        if existing is None or row.date > existing.date:
            latest[row.driver_number] = row
    return latest


def build_driver_view(
    driver: F1Driver,
    position: Optional[F1Position],
    interval: Optional[F1Interval],
    lap: Optional[F1Lap],
    car_data: Optional[F1CarData],
) -> DriverView:
    """Join one driver's identity with their timing and telemetry."""
    lap_duration = lap.lap_duration if lap else None
    return DriverView(
        pos=(position.position or 0) if position else 0,
        driver=driver.name_acronym,
        team=driver.team_name,
        gap=format_gap(interval.gap_to_leader) if interval else NO_TIME_PLACEHOLDER,
        last_lap=format_lap_time(lap_duration),
        status=get_driver_status(car_data, lap),
        driver_number=driver.driver_number,
        team_color=format_team_colour(driver.team_colour),
        speed=car_data.speed if car_data else None,
        drs=drs_status(car_data.drs) if car_data else None,
        gear=car_data.n_gear if car_data else None,
        throttle=car_data.throttle if car_data else None,
        brake=car_data.brake if car_data else None,
        full_name=driver.full_name,
        first_name=driver.first_name,
        last_name=driver.last_name,
        headshot_url=driver.headshot_url,
        country_code=driver.country_code,
        broadcast_name=driver.broadcast_name,
        lap_number=lap.lap_number if lap else None,
        lap_duration=lap_duration,
    )


class LiveDashboardService:
    """
    Aggregates OpenF1 data for the live dashboard.

    Owns the snapshot cache and the last-known-good positions. Every public
    coroutine is total: unexpected errors are logged and mapped to the
    canonical mock data so the render layer always has something to show.
    """

    def __init__(
        self,
        client: OpenF1Client,
        cache: Optional[SnapshotCache] = None,
        now: Optional[Callable[[], datetime]] = None,
        placeholder_total_laps: int = DashboardConfig.PLACEHOLDER_TOTAL_LAPS,
    ):
        self.client = client
        self.cache = cache or SnapshotCache()
        self._now = now or (lambda: datetime.now(timezone.utc))
        self.placeholder_total_laps = placeholder_total_laps
        self.last_valid_positions: List[DriverView] = []

    async def get_live_data(self, session_key: Optional[int] = None) -> LiveDataBundle:
        """
        Return the current snapshot, refreshing from OpenF1 when the cache has expired.

        A refresh without drivers is treated as a transient upstream gap: the
        previous snapshot is kept and returned, or the mock snapshot when no
        real data has been seen yet.
        """
        cached = self.cache.get_fresh()
        if cached is not None:
            logger.debug("Using cached live data for session_key=%s", cached.session_key)
            return cached

        async with self.cache.lock:
            # Another request may have refreshed while we waited
            cached = self.cache.get_fresh()
            if cached is not None:
                return cached

            logger.info("Fetching fresh live data from OpenF1 for session_key=%s", session_key)
            try:
                data = await self.client.get_live_data(session_key)
            except Exception:
                logger.exception("Error fetching live data for session_key=%s", session_key)
                return self._fallback_live_data()

            if data.drivers:
                self.cache.store(data)
                logger.info("Cached fresh live data with %d drivers", len(data.drivers))
                return data

            logger.warning("Received live data without drivers for session_key=%s, not caching", session_key)
            return self._fallback_live_data()

    def _fallback_live_data(self) -> LiveDataBundle:
        previous = self.cache.value
        if previous is not None:
            logger.info("Returning previous cached live data")
            return previous
        logger.info("No cached live data available, returning mock data")
        return mock_data.get_mock_live_data()

    async def get_driver_views(self, session_key: Optional[int] = None) -> List[DriverView]:
        """
        Build the timing table: one DriverView per driver, sorted by position.
        """
        try:
            live_data = await self.get_live_data(session_key)
            if not live_data.drivers:
                logger.info("No drivers data, returning mock drivers")
                return mock_data.get_mock_drivers()
            return self._build_driver_views(live_data)
        except Exception:
            logger.exception("Error building driver views for session_key=%s", session_key)
            return mock_data.get_mock_drivers()

    def _build_driver_views(self, live_data: LiveDataBundle) -> List[DriverView]:
        views = self._join_drivers(live_data)
        self._apply_position_fallback(views)

        views.sort(key=lambda view: view.pos)
        logger.debug("Driver positions: %s", [f"{view.pos}: {view.driver}" for view in views])
        return views

    def _join_drivers(self, live_data: LiveDataBundle) -> List[DriverView]:
        positions = _latest_by_date(live_data.positions)
        car_data = _latest_by_date(live_data.car_data)
        intervals = {interval.driver_number: interval for interval in live_data.intervals}

        laps: Dict[int, F1Lap] = {}
        for lap in live_data.laps:
            existing = laps.get(lap.driver_number)
            if existing is None or lap.lap_number > existing.lap_number:
                laps[lap.driver_number] = lap

        views = []
        seen = set()
        for driver in live_data.drivers:
            # OpenF1 occasionally repeats a driver row
            if driver.driver_number in seen:
                continue
            seen.add(driver.driver_number)
            views.append(build_driver_view(
                driver,
                positions.get(driver.driver_number),
                intervals.get(driver.driver_number),
                laps.get(driver.driver_number),
                car_data.get(driver.driver_number),
            ))
        return views

    def _apply_position_fallback(self, views: List[DriverView]) -> None:
        """
        Repair a timing table in which no driver has a valid position.

        Uses the last valid positions when available, otherwise ranks drivers
        in arrival order. A table with valid positions becomes the new
        last-known-good set.
        """
        valid_count = sum(1 for view in views if view.pos > 0)
        logger.debug("Position validation: %d of %d drivers have a valid position", valid_count, len(views))

        if valid_count:
            _fill_missing_positions(views)
            self.last_valid_positions = [view.model_copy(deep=True) for view in views]
            return

        if self.last_valid_positions:
            logger.info("Invalid position data detected, using last valid positions")
            last_valid = {view.driver_number: view for view in self.last_valid_positions}
            for view in views:
                previous = last_valid.get(view.driver_number)
                if previous is None:
                    continue
                view.pos = previous.pos
                if view.gap == NO_TIME_PLACEHOLDER and previous.gap != NO_TIME_PLACEHOLDER:
                    view.gap = previous.gap
            _fill_missing_positions(views)
            return

        logger.info("Invalid position data detected and no valid positions cached, assigning sequential positions")
        for index, view in enumerate(views):
            view.pos = index + 1
            view.gap = format_fallback_gap(index)

    async def get_dashboard_stats(self, session_key: Optional[int] = None) -> DashboardStats:
        """Leader, fastest lap and lap progress for the stats grid."""
        try:
            live_data = await self.get_live_data(session_key)
            if not live_data.drivers:
                return mock_data.get_mock_dashboard_stats()

            drivers = self._build_driver_views(live_data)
            leader = drivers[0]

            # Formatted times do not sort lexically ("10:05.000" < "9:59.000")
            timed = [driver for driver in drivers if driver.lap_duration]
            if timed:
                fastest = min(timed, key=lambda driver: driver.lap_duration)
                fastest_lap = FastestLap(time=fastest.last_lap, driver=fastest.driver)
            else:
                fastest_lap = NO_FASTEST_LAP.model_copy()

            return DashboardStats(
                current_leader=CurrentLeader(driver=leader.driver, team=leader.team),
                fastest_lap=fastest_lap,
                lap_progress=self._lap_progress(drivers),
                total_drivers=len(drivers),
            )
        except Exception:
            logger.exception("Error getting dashboard stats for session_key=%s", session_key)
            return mock_data.get_mock_dashboard_stats()

    def _lap_progress(self, drivers: List[DriverView]) -> LapProgress:
        # OpenF1 exposes no total lap count; total is a configured placeholder
        current = max((driver.lap_number for driver in drivers if driver.lap_number), default=1)
        total = max(self.placeholder_total_laps, current)
        return LapProgress(current=current, total=total, percentage=round(current / total * 100))

    async def get_session_info(self, session_key: Optional[int] = None) -> SessionInfo:
        """Session header: event, circuit, weather summary and track status."""
        try:
            live_data = await self.get_live_data(session_key)
            session = live_data.session
            if session is None:
                return mock_data.get_mock_session_info()

            now = self._now()
            weather = live_data.weather
            return SessionInfo(
                event=session.country_name or "Unknown Event",
                session=session.session_name or "Unknown Session",
                weather=format_temperature(weather.air_temperature) if weather else "N/A",
                track_temp=format_temperature(weather.track_temperature) if weather else "N/A",
                track_status=get_track_status(live_data.race_control, session, now),
                circuit=session.circuit_short_name or "Unknown Circuit",
                location=session.location or "Unknown Location",
                session_key=session.session_key,
                is_live=is_session_live(session, live_data.intervals, live_data.car_data, now),
            )
        except Exception:
            logger.exception("Error getting session info for session_key=%s", session_key)
            return mock_data.get_mock_session_info()

    async def get_weather_data(self, session_key: Optional[int] = None) -> Optional[WeatherData]:
        try:
            live_data = await self.get_live_data(session_key)
            weather = live_data.weather
            if weather is None:
                return None

            return WeatherData(
                air_temp=weather.air_temperature,
                track_temp=weather.track_temperature,
                humidity=weather.humidity,
                wind_speed=weather.wind_speed,
                wind_direction=weather.wind_direction,
                pressure=weather.pressure,
                rainfall=bool(weather.rainfall and weather.rainfall > 0),
            )
        except Exception:
            logger.exception("Error getting weather data for session_key=%s", session_key)
            return None

    async def get_race_control_messages(self, session_key: Optional[int] = None) -> List[RaceControlMessage]:
        """Race control feed, newest first, with driver numbers resolved to acronyms."""
        try:
            live_data = await self.get_live_data(session_key)
            if not live_data.race_control:
                return []

            acronyms = {driver.driver_number: driver.name_acronym for driver in live_data.drivers}
            return [
                RaceControlMessage(
                    time=to_utc(event.date).strftime("%H:%M:%S"),
                    category=event.category,
                    message=event.message,
                    flag=event.flag,
                    driver=acronyms.get(event.driver_number) if event.driver_number is not None else None,
                )
                for event in live_data.race_control
            ]
        except Exception:
            logger.exception("Error getting race control messages for session_key=%s", session_key)
            return []


def _fill_missing_positions(views: List[DriverView]) -> None:
    """Rank drivers without a position behind everyone who has one, in arrival order."""
    next_pos = max((view.pos for view in views), default=0) + 1
    for view in views:
        if view.pos <= 0:
            view.pos = next_pos
            next_pos += 1
