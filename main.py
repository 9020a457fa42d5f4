from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from typing import List, Optional
from api_pydantic_models.live_dashboard import (
    DashboardStats,
    DriverColumnsResponse,
    DriverView,
    RaceControlMessage,
    SessionInfo,
    WeatherData,
)
from config.dashboard_config import DashboardConfig
from utils.live_dashboard import LiveDashboardService, split_drivers_into_columns
from utils.openf1_client import OpenF1Client
from utils.snapshot_cache import SnapshotCache
import logging
import os
import uvicorn

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

app = FastAPI()


@app.on_event("startup")
async def startup_event():
    """Create the OpenF1 client and the dashboard service on startup."""
    client = OpenF1Client(**DashboardConfig.get_client_params())
    cache = SnapshotCache(ttl_seconds=DashboardConfig.CACHE_TTL_SECONDS)
    app.state.dashboard_service = LiveDashboardService(client=client, cache=cache)


@app.on_event("shutdown")
async def shutdown_event():
    """Close the OpenF1 HTTP client on shutdown."""
    service = getattr(app.state, "dashboard_service", None)
    if service is not None:
        await service.client.aclose()


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Change in production!
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_dashboard_service(request: Request) -> LiveDashboardService:
    return request.app.state.dashboard_service


@app.get("/live/api/drivers")
async def get_drivers(
    session_key: Optional[int] = None,
    service: LiveDashboardService = Depends(get_dashboard_service),
) -> List[DriverView]:
    logging.info("Request: driver views for session_key=%s", session_key)
    drivers = await service.get_driver_views(session_key)
    logging.info("Response: returning %d driver views", len(drivers))
    return drivers


@app.get("/live/api/intervals")
async def get_intervals(
    session_key: Optional[int] = None,
    service: LiveDashboardService = Depends(get_dashboard_service),
) -> DriverColumnsResponse:
    """
    Timing table split into two columns for the polling front end.
    """
    drivers = await service.get_driver_views(session_key)
    left, right = split_drivers_into_columns(drivers)
    return DriverColumnsResponse(left=left, right=right)


@app.get("/live/api/stats")
async def get_dashboard_stats(
    session_key: Optional[int] = None,
    service: LiveDashboardService = Depends(get_dashboard_service),
) -> DashboardStats:
    return await service.get_dashboard_stats(session_key)


@app.get("/live/api/session")
async def get_session_info(
    session_key: Optional[int] = None,
    service: LiveDashboardService = Depends(get_dashboard_service),
) -> SessionInfo:
    return await service.get_session_info(session_key)


@app.get("/live/api/weather")
async def get_weather(
    session_key: Optional[int] = None,
    service: LiveDashboardService = Depends(get_dashboard_service),
) -> Optional[WeatherData]:
    return await service.get_weather_data(session_key)


@app.get("/live/api/race-control")
async def get_race_control(
    session_key: Optional[int] = None,
    service: LiveDashboardService = Depends(get_dashboard_service),
) -> List[RaceControlMessage]:
    """
    Latest race control messages, newest first.
    """
    logging.info("Request: race control messages for session_key=%s", session_key)
    messages = await service.get_race_control_messages(session_key)
    logging.info("Response: returning %d race control messages", len(messages))
    return messages


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
