"""
Dashboard configuration for the OpenF1 upstream and the snapshot cache.
Centralized configuration to allow easy changes for Docker/deployment.
"""
import os

from constants.openf1_api_endpoints import OPENF1_BASE_URL


class DashboardConfig:
    """Dashboard configuration class with environment variable support."""

    OPENF1_BASE_URL: str = os.getenv("OPENF1_BASE_URL", OPENF1_BASE_URL)
    OPENF1_TIMEOUT_SECONDS: float = float(os.getenv("OPENF1_TIMEOUT_SECONDS", "10"))

    CACHE_TTL_SECONDS: float = float(os.getenv("CACHE_TTL_SECONDS", "3"))
    RACE_CONTROL_LIMIT: int = int(os.getenv("RACE_CONTROL_LIMIT", "10"))
    CAR_DATA_WINDOW_SECONDS: int = int(os.getenv("CAR_DATA_WINDOW_SECONDS", "30"))

    RECENT_MESSAGE_SECONDS: int = int(os.getenv("RECENT_MESSAGE_SECONDS", "300"))
    LIVE_ACTIVITY_SECONDS: int = int(os.getenv("LIVE_ACTIVITY_SECONDS", "120"))

    # OpenF1 has no reliable total-lap field
    PLACEHOLDER_TOTAL_LAPS: int = int(os.getenv("PLACEHOLDER_TOTAL_LAPS", "50"))

    @classmethod
    def get_client_params(cls) -> dict:
        """
        Get keyword arguments for building the OpenF1 client.
        """
        return {
            "base_url": cls.OPENF1_BASE_URL,
            "timeout": cls.OPENF1_TIMEOUT_SECONDS,
        }
