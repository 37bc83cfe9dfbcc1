"""Provider layer - activity feeds.

HttpActivitySource is the ActivitySource the engine uses in production:
the clan feed for clan members and RuneMetrics profiles for guests.
"""

from clanbingo.core.types import Activity
from clanbingo.providers.clanfeed import ClanFeedClient, ClanFeedProvider
from clanbingo.providers.http import JsonHttpClient
from clanbingo.providers.runemetrics import (
    RuneMetricsClient,
    RuneMetricsProvider,
    parse_runemetrics_date,
)


class HttpActivitySource:
    """ActivitySource backed by the clan feed and RuneMetrics.

    Both fetch methods raise ActivityFetchError when their source fails.
    """

    def __init__(
        self,
        clan_feed: ClanFeedProvider | None = None,
        runemetrics: RuneMetricsProvider | None = None,
    ):
        self._clan_feed = clan_feed or ClanFeedProvider()
        self._runemetrics = runemetrics or RuneMetricsProvider()

    def fetch_clan_activities(self, limit: int) -> list[Activity]:
        return self._clan_feed.get_activities(limit)

    def fetch_guest_activities(self, display_name: str, hours_back: int) -> list[Activity]:
        return self._runemetrics.get_recent_activities(display_name, hours_back)


__all__ = [
    "ClanFeedClient",
    "ClanFeedProvider",
    "HttpActivitySource",
    "JsonHttpClient",
    "RuneMetricsClient",
    "RuneMetricsProvider",
    "parse_runemetrics_date",
]
