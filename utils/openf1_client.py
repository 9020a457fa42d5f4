"""
Async client for the OpenF1 API.
Every fetch is total: HTTP, parse and validation failures are logged and
turned into an empty result so callers decide what missing data means.
"""
import asyncio
import httpx
from typing import Any, List, Optional, Type, TypeVar
from datetime import datetime, timedelta, timezone
from pydantic import BaseModel
from config.dashboard_config import DashboardConfig
from constants.openf1_api_endpoints import (
    CAR_DATA_API_PATH,
    DRIVERS_API_PATH,
    INTERVALS_API_PATH,
    LAPS_API_PATH,
    LATEST_SESSION_KEY,
    POSITION_API_PATH,
    RACE_CONTROL_API_PATH,
    SESSIONS_API_PATH,
    WEATHER_API_PATH,
)
from api_pydantic_models.live_data import LiveDataBundle
from openf1_pydantic_models.f1_car_data import F1CarData
from openf1_pydantic_models.f1_drivers import F1Driver
from openf1_pydantic_models.f1_laps import F1Lap
from openf1_pydantic_models.f1_race_control import F1RaceControlEvent
from openf1_pydantic_models.f1_sessions import F1Session
from openf1_pydantic_models.f1_timing import F1Interval, F1Position
from openf1_pydantic_models.f1_weather import F1Weather
import logging

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class OpenF1Client:
    """Thin async wrapper around the OpenF1 REST resources used by the dashboard."""

    def __init__(
        self,
        base_url: str = DashboardConfig.OPENF1_BASE_URL,
        timeout: float = DashboardConfig.OPENF1_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
        race_control_limit: int = DashboardConfig.RACE_CONTROL_LIMIT,
        car_data_window_seconds: int = DashboardConfig.CAR_DATA_WINDOW_SECONDS,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.race_control_limit = race_control_limit
        self.car_data_window_seconds = car_data_window_seconds
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _fetch(self, path: str, model: Type[ModelT], params: dict) -> List[ModelT]:
        """
        GET one OpenF1 resource and validate every row.

        Args:
            path: Resource path relative to the base URL
            model: Pydantic model for a single row
            params: Query parameters

        Returns:
            List of validated rows, empty on any failure
        """
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()

            json_data: Any = response.json()
            if not isinstance(json_data, list):
                logger.warning("OpenF1 returned a non-list payload for %s params=%s", path, params)
                return []

            return [model(**row) for row in json_data]
        except httpx.HTTPStatusError as e:
            logger.warning("OpenF1 %s returned status %s params=%s", path, e.response.status_code, params)
        except Exception:
            logger.exception("Error fetching %s from OpenF1 API params=%s", path, params)
        return []

    async def get_latest_session(self) -> Optional[F1Session]:
        """Resolve the current session using OpenF1's 'latest' key."""
        sessions = await self._fetch(SESSIONS_API_PATH, F1Session, {"session_key": LATEST_SESSION_KEY})
        return sessions[0] if sessions else None

    async def get_session(self, session_key: int) -> Optional[F1Session]:
        sessions = await self._fetch(SESSIONS_API_PATH, F1Session, {"session_key": session_key})
        return sessions[0] if sessions else None

    async def get_drivers(self, session_key: int) -> List[F1Driver]:
        return await self._fetch(DRIVERS_API_PATH, F1Driver, {"session_key": session_key})

    async def get_positions(self, session_key: int) -> List[F1Position]:
        return await self._fetch(POSITION_API_PATH, F1Position, {"session_key": session_key})

    async def get_intervals(self, session_key: int) -> List[F1Interval]:
        return await self._fetch(INTERVALS_API_PATH, F1Interval, {"session_key": session_key})

    async def get_latest_car_data(self, session_key: int) -> List[F1CarData]:
        """
        Fetch car telemetry for the last few seconds only.
        The full car_data feed is several samples per second per car.
        """
        since = datetime.now(timezone.utc) - timedelta(seconds=self.car_data_window_seconds)
        # OpenF1 filters use the operator inside the query string: date>=<timestamp>
        path = f"{CAR_DATA_API_PATH}?date>={since.strftime('%Y-%m-%dT%H:%M:%S')}"
        return await self._fetch(path, F1CarData, {"session_key": session_key})

    async def get_weather(self, session_key: int) -> Optional[F1Weather]:
        """Return the newest weather sample, or None."""
        samples = await self._fetch(WEATHER_API_PATH, F1Weather, {"session_key": session_key})
        return samples[-1] if samples else None

    async def get_race_control(self, session_key: int, limit: Optional[int] = None) -> List[F1RaceControlEvent]:
        """
        Fetch race control messages, newest first.

        Args:
            session_key: Session identifier
            limit: Number of most recent messages to keep (defaults to the configured limit)
        """
        limit = self.race_control_limit if limit is None else limit
        events = await self._fetch(RACE_CONTROL_API_PATH, F1RaceControlEvent, {"session_key": session_key})
        if limit <= 0:
            return []
        return list(reversed(events[-limit:]))

    async def get_latest_laps(self, session_key: int) -> List[F1Lap]:
        """Fetch laps and keep only the highest lap number per driver."""
        laps = await self._fetch(LAPS_API_PATH, F1Lap, {"session_key": session_key})

        latest_laps: dict[int, F1Lap] = {}
        for lap in laps:
            existing = latest_laps.get(lap.driver_number)
            if existing is None or lap.lap_number > existing.lap_number:
                latest_laps[lap.driver_number] = lap
        return list(latest_laps.values())

    async def get_live_data(self, session_key: Optional[int] = None) -> LiveDataBundle:
        """
        Fetch every resource the dashboard needs for one session.

        Resolves the session first (the given key, or the latest one), then
        fans out all resource fetches concurrently. A session that cannot be
        resolved yields an empty bundle with session_key 0.

        Args:
            session_key: Optional session identifier

        Returns:
            LiveDataBundle with the resolved session key
        """
        if session_key:
            session = await self.get_session(session_key)
        else:
            session = await self.get_latest_session()
            if session is None:
                logger.warning("No latest session available from OpenF1")
                return LiveDataBundle.empty()
            session_key = session.session_key

        drivers, positions, intervals, car_data, weather, race_control, laps = await asyncio.gather(
            self.get_drivers(session_key),
            self.get_positions(session_key),
            self.get_intervals(session_key),
            self.get_latest_car_data(session_key),
            self.get_weather(session_key),
            self.get_race_control(session_key),
            self.get_latest_laps(session_key),
        )

        logger.info(
            "Fetched live data from OpenF1 for session_key=%s: %d drivers, %d positions, %d intervals, "
            "%d car samples, %d race control events, %d laps",
            session_key, len(drivers), len(positions), len(intervals),
            len(car_data), len(race_control), len(laps),
        )

        return LiveDataBundle(
            session=session,
            drivers=drivers,
            positions=positions,
            intervals=intervals,
            car_data=car_data,
            weather=weather,
            race_control=race_control,
            laps=laps,
            session_key=session_key,
        )
