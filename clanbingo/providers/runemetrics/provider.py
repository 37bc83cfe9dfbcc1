"""RuneMetrics guest activity provider.

RuneMetrics reports activity dates as "17-Oct-2025 12:34" in UTC with no
zone marker and no stable id, so guest activities have activity_id None.
"""

import logging
from datetime import UTC, datetime, timedelta

from clanbingo.config import Config
from clanbingo.core.errors import ActivityFetchError
from clanbingo.core.types import Activity
from clanbingo.providers.runemetrics.client import RuneMetricsClient
from clanbingo.utilities.tz import now_utc, parse_timestamp, to_epoch_ms

logger = logging.getLogger(__name__)

RUNEMETRICS_DATE_FORMAT = "%d-%b-%Y %H:%M"


def parse_runemetrics_date(value: str | None) -> datetime | None:
    """Parse a RuneMetrics activity date.

    Args:
        value: Date such as "17-Oct-2025 12:34"

    Returns:
        Aware UTC datetime, or None if unparseable
    """
    if not value:
        return None
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), RUNEMETRICS_DATE_FORMAT).replace(tzinfo=UTC)
        except ValueError:
            pass
    # ISO strings and epoch millis are accepted too
    return parse_timestamp(value)


class RuneMetricsProvider:
    """Per-player activity from RuneMetrics profiles."""

    def __init__(
        self,
        client: RuneMetricsClient | None = None,
        activity_count: int | None = None,
    ):
        self._client = client or RuneMetricsClient()
        self._activity_count = activity_count or Config.GUEST_ACTIVITY_COUNT

    def get_recent_activities(
        self,
        display_name: str,
        hours_back: int,
        now: datetime | None = None,
    ) -> list[Activity]:
        """Fetch a player's activities newer than hours_back.

        Args:
            display_name: Player name as rostered
            hours_back: Drop activities older than this
            now: Reference time (defaults to current UTC time)

        Returns:
            Activities attributed to display_name, flagged as guest activities

        Raises:
            ActivityFetchError: If the profile could not be read or is private
        """
        data = self._client.get_profile(display_name, self._activity_count)
        if data is None:
            raise ActivityFetchError(display_name, "RuneMetrics profile unavailable")
        if data.get("error"):
            raise ActivityFetchError(display_name, str(data["error"]))

        cutoff = (now or now_utc()) - timedelta(hours=hours_back)
        activities = []
        for entry in data.get("activities") or []:
            if not isinstance(entry, dict):
                continue
            occurred = parse_runemetrics_date(entry.get("date"))
            if occurred is None:
                logger.debug("[FETCH] Unparseable RuneMetrics date for %s: %s", display_name, entry)
                continue
            if occurred <= cutoff:
                continue
            activities.append(
                Activity(
                    actor_name=display_name,
                    timestamp_ms=to_epoch_ms(occurred),
                    text=str(entry.get("text") or ""),
                    details=entry.get("details"),
                    is_guest_activity=True,
                )
            )

        logger.debug(
            "[FETCH] %s: %d activities in the last %dh",
            display_name,
            len(activities),
            hours_back,
        )
        return activities
