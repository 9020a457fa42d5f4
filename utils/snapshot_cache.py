"""
Time-to-live cache holding the most recent LiveDataBundle.
"""
import asyncio
import time
from typing import Callable, Optional

from api_pydantic_models.live_data import LiveDataBundle
from config.dashboard_config import DashboardConfig


class SnapshotCache:
    """
    Single-slot cache: one immutable bundle plus the monotonic time it was stored.

    `lock` serializes refreshes so concurrent requests trigger at most one
    upstream fetch. The bundle reference is swapped in a single assignment.
    """

    def __init__(
        self,
        ttl_seconds: float = DashboardConfig.CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: Optional[tuple[LiveDataBundle, float]] = None
        self.lock = asyncio.Lock()

    @property
    def value(self) -> Optional[LiveDataBundle]:
        """The cached bundle regardless of age."""
        return self._entry[0] if self._entry else None

    def get_fresh(self) -> Optional[LiveDataBundle]:
        """Return the cached bundle if it is younger than the TTL."""
        entry = self._entry
        if entry is None:
            return None
        bundle, stored_at = entry
        if self._clock() - stored_at < self.ttl_seconds:
            return bundle
        return None

    def store(self, bundle: LiveDataBundle) -> None:
        self._entry = (bundle, self._clock())
