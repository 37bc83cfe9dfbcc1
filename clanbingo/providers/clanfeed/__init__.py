"""Clan activity feed provider."""

from clanbingo.providers.clanfeed.client import ClanFeedClient
from clanbingo.providers.clanfeed.provider import ClanFeedProvider

__all__ = ["ClanFeedClient", "ClanFeedProvider"]
