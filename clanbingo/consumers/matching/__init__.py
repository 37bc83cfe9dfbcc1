"""Activity matching module.

Provides activity-to-square matching with classification, normalization,
exclusion rules and team resolution.

Main entry points:
    from clanbingo.consumers.matching import match_items, resolve_teams

    matches = match_items(activity.text, items)
    teams = resolve_teams(activity.actor_name, teams)
"""

from clanbingo.consumers.matching.classifier import (
    ClassifiedItem,
    ItemKind,
    classify_item,
)
from clanbingo.consumers.matching.exclusions import (
    ExclusionRule,
    find_exclusion,
    is_excluded,
)
from clanbingo.consumers.matching.matcher import match_item, match_items
from clanbingo.consumers.matching.normalizer import hyphen_forms, normalize_text
from clanbingo.consumers.matching.result import ItemMatch, MatchMethod, TeamMatch
from clanbingo.consumers.matching.team_resolver import find_roster_entry, resolve_teams
from clanbingo.consumers.matching.variations import get_item_variations

__all__ = [
    # Main entry points
    "match_items",
    "match_item",
    "resolve_teams",
    "find_roster_entry",
    # Result types
    "ItemMatch",
    "MatchMethod",
    "TeamMatch",
    # Classifier
    "ItemKind",
    "ClassifiedItem",
    "classify_item",
    # Exclusions
    "ExclusionRule",
    "find_exclusion",
    "is_excluded",
    # Normalizer / variations
    "normalize_text",
    "hyphen_forms",
    "get_item_variations",
]
