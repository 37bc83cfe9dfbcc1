"""Clan activity feed HTTP client.

The stats tracker stores every clan member's adventurer's log and serves
the most recent entries at /api/activities/clan.
"""

import httpx

from clanbingo.config import Config
from clanbingo.providers.http import JsonHttpClient


class ClanFeedClient(JsonHttpClient):
    """Low-level clan activity feed client."""

    def __init__(self, base_url: str | None = None, transport: httpx.BaseTransport | None = None, **kwargs):
        super().__init__(base_url or Config.ACTIVITY_API_BASE_URL, transport=transport, **kwargs)

    def get_recent_activities(self, limit: int = 500) -> dict | None:
        """Fetch the most recent clan activities, newest first.

        Args:
            limit: Maximum number of rows

        Returns:
            Raw response ({"success": ..., "activities": [...]}) or None on error
        """
        return self._request("/api/activities/clan", {"limit": limit})
