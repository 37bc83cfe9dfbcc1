"""Clan activity feed provider.

Converts clan feed rows into Activity records. Rows carry the member's
canonical name, their display name and an epoch-millisecond timestamp
(sometimes serialized as a string).
"""

import logging

from clanbingo.core.errors import ActivityFetchError
from clanbingo.core.types import Activity
from clanbingo.providers.clanfeed.client import ClanFeedClient
from clanbingo.utilities.tz import parse_timestamp, to_epoch_ms

logger = logging.getLogger(__name__)

SOURCE_NAME = "clan"


class ClanFeedProvider:
    """Clan-wide activity feed."""

    def __init__(self, client: ClanFeedClient | None = None):
        self._client = client or ClanFeedClient()

    def get_activities(self, limit: int) -> list[Activity]:
        """Fetch recent clan activities.

        Args:
            limit: Maximum number of rows to request

        Returns:
            Activities in feed order (rows without a usable timestamp dropped)

        Raises:
            ActivityFetchError: If the feed could not be read
        """
        data = self._client.get_recent_activities(limit)
        if data is None:
            raise ActivityFetchError(SOURCE_NAME, "clan activity feed unavailable")
        if data.get("success") is False:
            raise ActivityFetchError(SOURCE_NAME, str(data.get("error") or "feed returned an error"))

        activities = []
        for row in data.get("activities") or []:
            activity = self._parse_activity(row)
            if activity is not None:
                activities.append(activity)

        logger.debug("[FETCH] Clan feed returned %d activities", len(activities))
        return activities

    def _parse_activity(self, row) -> Activity | None:
        if not isinstance(row, dict):
            logger.debug("[FETCH] Skipping non-object clan activity row: %r", row)
            return None

        actor = row.get("memberName") or row.get("member_name") or row.get("display_name")
        occurred = parse_timestamp(row.get("date") or row.get("activity_date"))
        if not actor or occurred is None:
            logger.debug("[FETCH] Skipping malformed clan activity: %s", row)
            return None

        return Activity(
            actor_name=str(actor),
            timestamp_ms=to_epoch_ms(occurred),
            text=str(row.get("text") or ""),
            details=row.get("details"),
            activity_id=_parse_id(row.get("id")),
        )


def _parse_id(value) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
