"""Exclusion filter for category matches.

Some categories share vocabulary with unrelated sources: Kerapac drops a
"Fractured Armadyl Symbol" that has nothing to do with Kree'arra, and a
"Dragon rider lance" is not dragon-tier gear. A category candidate is
checked against these rules after it is found and before it is accepted.

Rules are plain data (utilities/constants.py EXCLUSION_RULES).
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from clanbingo.utilities.constants import EXCLUSION_RULES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExclusionRule:
    """Word-overlap guard between a category and another source."""

    category: str
    shared_words: tuple[str, ...]
    foreign_markers: tuple[str, ...]
    other_source: str = ""

    def applies_to(self, text: str) -> bool:
        """Whether this text denotes the other source rather than the category.

        Args:
            text: Normalized activity text
        """
        if not any(word in text for word in self.shared_words):
            return False
        return any(marker in text for marker in self.foreign_markers)


@lru_cache(maxsize=1)
def get_exclusion_rules() -> tuple[ExclusionRule, ...]:
    """Build rules from the static table."""
    return tuple(
        ExclusionRule(
            category=rule["category"],
            shared_words=tuple(rule["shared"]),
            foreign_markers=tuple(rule["markers"]),
            other_source=rule.get("other", ""),
        )
        for rule in EXCLUSION_RULES
    )


def find_exclusion(
    keywords: tuple[str, ...],
    text: str,
    rules: tuple[ExclusionRule, ...] | None = None,
) -> ExclusionRule | None:
    """Find the first rule that rejects a category match.

    Args:
        keywords: Canonical keywords of the category square
        text: Normalized activity text
        rules: Rules to evaluate (defaults to the static table)

    Returns:
        The rejecting rule, or None if the match stands
    """
    for rule in rules if rules is not None else get_exclusion_rules():
        if rule.category in keywords and rule.applies_to(text):
            logger.debug(
                "[EXCLUDE] '%s' rejected for category '%s' (belongs to %s)",
                text[:80],
                rule.category,
                rule.other_source or "another source",
            )
            return rule
    return None


def is_excluded(keywords: tuple[str, ...], text: str) -> bool:
    """Whether a category match on this text must be rejected."""
    return find_exclusion(keywords, text) is not None
