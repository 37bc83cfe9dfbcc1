"""Team and member resolution for the acting player.

Unlike square matching, player names are matched exactly (case-insensitive)
against every name field a roster entry carries. Guests and clan members are
credited differently, so the resolver returns the credit along with the team.
"""

import logging
from collections.abc import Iterable

from clanbingo.consumers.matching.result import TeamMatch
from clanbingo.core.types import RosterEntry, Team

logger = logging.getLogger(__name__)


def _normalize_name(name: str) -> str:
    # RuneMetrics returns non-breaking spaces in some display names
    return name.replace("\u00a0", " ").strip().lower()


def find_roster_entry(actor_name: str | None, members: Iterable[RosterEntry]) -> RosterEntry | None:
    """Find the roster entry for an actor.

    Args:
        actor_name: Display name from the activity feed
        members: Team roster

    Returns:
        Matching RosterEntry, or None
    """
    if not actor_name:
        return None

    wanted = _normalize_name(actor_name)
    for member in members:
        if wanted in (_normalize_name(n) for n in member.names):
            return member
    return None


def resolve_teams(actor_name: str | None, teams: Iterable[Team]) -> list[TeamMatch]:
    """Find every team the actor is rostered on.

    One person is on at most one team per board, so more than one result
    means the actor plays on several boards.

    Args:
        actor_name: Display name from the activity feed
        teams: Teams of the boards the activity is eligible for

    Returns:
        List of TeamMatch (empty if the actor is on no roster)
    """
    if not actor_name:
        return []

    matches = []
    for team in teams:
        entry = find_roster_entry(actor_name, team.members)
        if entry is not None:
            matches.append(TeamMatch(team=team, credit=entry.credit))

    if not matches:
        logger.debug("[RESOLVE] '%s' is not on any eligible team", actor_name)

    return matches
