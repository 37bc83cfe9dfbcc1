"""Activity text matcher.

Decides which bingo squares a single activity line satisfies. Pure function
of (activity text, square names) plus the static tables - no database or
network access.

Matching order per square:
1. LITERAL squares: name substring, then name variations
2. CATEGORY squares: any category search term (hyphen-insensitive),
   subject to the exclusion filter
3. CATEGORY squares with no term hit: reverse mapping from specific drops
   named in the text, subject to the same exclusion filter
"""

import logging
from collections.abc import Iterable

from clanbingo.consumers.matching.classifier import ClassifiedItem, classify_item
from clanbingo.consumers.matching.exclusions import find_exclusion
from clanbingo.consumers.matching.normalizer import (
    contains_term,
    contains_word,
    hyphen_forms,
    normalize_text,
)
from clanbingo.consumers.matching.result import ItemMatch, MatchMethod
from clanbingo.core.types import Item
from clanbingo.utilities.constants import REVERSE_CATEGORY_MAP

logger = logging.getLogger(__name__)


def _match_literal(text: str, classified: ClassifiedItem) -> tuple[MatchMethod, str] | None:
    if classified.name and classified.name in text:
        return MatchMethod.DIRECT, classified.name

    for variation in classified.variations[1:]:
        if contains_word(text, variation):
            return MatchMethod.VARIATION, variation

    return None


def _match_category(
    text: str,
    text_forms: tuple[str, ...],
    classified: ClassifiedItem,
) -> tuple[MatchMethod, str] | None:
    for term in classified.search_terms:
        if contains_term(text_forms, term):
            if find_exclusion(classified.keywords, text):
                # Every term sees the same text, so the rule rejects them all
                return None
            return MatchMethod.CATEGORY, term

    return _match_reverse(text, text_forms, classified)


def _match_reverse(
    text: str,
    text_forms: tuple[str, ...],
    classified: ClassifiedItem,
) -> tuple[MatchMethod, str] | None:
    for specific, categories in REVERSE_CATEGORY_MAP.items():
        if not any(keyword in categories for keyword in classified.keywords):
            continue
        if not contains_term(text_forms, specific):
            continue
        if find_exclusion(classified.keywords, text):
            return None
        return MatchMethod.REVERSE, specific

    return None


def match_item(text: str, item: Item) -> ItemMatch | None:
    """Check whether activity text satisfies one square."""
    matches = match_items(text, [item])
    return matches[0] if matches else None


def match_items(text: str | None, items: Iterable[Item]) -> list[ItemMatch]:
    """Find every square an activity line satisfies.

    Multiple squares may match one line (e.g. "Abyssal Whip" and
    "Any Abyssal Item"); input order is preserved.

    Args:
        text: Raw activity text
        items: Candidate squares (already limited to eligible boards)

    Returns:
        List of ItemMatch
    """
    normalized = normalize_text(text)
    if not normalized:
        return []

    text_forms = hyphen_forms(normalized)
    matches = []

    for item in items:
        classified = classify_item(item.item_name)
        if not classified.name:
            continue

        if classified.is_category:
            found = _match_category(normalized, text_forms, classified)
        else:
            found = _match_literal(normalized, classified)

        if found is not None:
            method, term = found
            matches.append(ItemMatch(item=item, method=method, term=term))
            logger.debug(
                "[MATCH] '%s' -> '%s' via %s ('%s')",
                normalized[:80],
                item.item_name,
                method.value,
                term,
            )

    return matches
