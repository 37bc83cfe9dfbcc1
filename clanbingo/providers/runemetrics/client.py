"""RuneMetrics profile HTTP client.

Guests are not clan members, so their activity comes straight from the
public RuneMetrics profile endpoint.
"""

import httpx

from clanbingo.config import Config
from clanbingo.providers.http import JsonHttpClient


class RuneMetricsClient(JsonHttpClient):
    """Low-level RuneMetrics API client."""

    def __init__(self, base_url: str | None = None, transport: httpx.BaseTransport | None = None, **kwargs):
        super().__init__(base_url or Config.RUNEMETRICS_BASE_URL, transport=transport, **kwargs)

    def get_profile(self, username: str, activities: int = 20) -> dict | None:
        """Fetch a player profile with recent activities.

        A private or unknown profile still answers 200, with an "error"
        key (e.g. "PROFILE_PRIVATE", "NO_PROFILE") instead of data.

        Args:
            username: Player display name
            activities: Number of activity entries to include

        Returns:
            Raw profile response or None on error
        """
        return self._request("/profile/profile", {"user": username, "activities": activities})
