"""Square classification for matching strategy selection.

Classifies bingo squares into kinds that determine how activity text is
matched against them:
- LITERAL: A specific item ("Abyssal Whip") - substring + name variations
- CATEGORY: A wildcard ("Any Nex Item") - expanded into search terms
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from clanbingo.consumers.matching.normalizer import normalize_text
from clanbingo.consumers.matching.variations import get_item_variations
from clanbingo.utilities.constants import (
    CATEGORY_ALIASES,
    CATEGORY_ITEMS,
    GENERIC_CATEGORY_WORDS,
)

logger = logging.getLogger(__name__)

CATEGORY_PREFIX = "any "
_ITEM_SUFFIXES = (" items", " item")


class ItemKind(Enum):
    """Square kind for matching strategy selection."""

    LITERAL = "literal"
    CATEGORY = "category"


@dataclass(frozen=True)
class ClassifiedItem:
    """Result of square classification with precomputed search data."""

    kind: ItemKind
    name: str  # Normalized square name

    # LITERAL: the name and its variations (name first)
    variations: tuple[str, ...] = ()

    # CATEGORY: canonical keywords this square stands for ("nex", "gwd2", ...)
    keywords: tuple[str, ...] = ()

    # CATEGORY: substrings that satisfy the square (keywords first, then drops)
    search_terms: tuple[str, ...] = ()

    @property
    def is_category(self) -> bool:
        return self.kind == ItemKind.CATEGORY


def extract_category_keyword(name: str) -> str | None:
    """Pull the keyword out of an "any <keyword> [item]" square name.

    Args:
        name: Normalized square name

    Returns:
        Keyword ("nex weapon" for "any nex weapon item"), or None if the name
        isn't a category
    """
    if not name.startswith(CATEGORY_PREFIX):
        return None

    keyword = name[len(CATEGORY_PREFIX) :].strip()
    for suffix in _ITEM_SUFFIXES:
        if keyword.endswith(suffix):
            keyword = keyword[: -len(suffix)].strip()
            break

    return keyword or None


def _canonical(keyword: str) -> str:
    """Resolve a keyword through CATEGORY_ALIASES (hyphens read as spaces)."""
    spaced = keyword.replace("-", " ")
    return CATEGORY_ALIASES.get(spaced, CATEGORY_ALIASES.get(keyword, spaced))


def category_keywords(keyword: str) -> tuple[str, ...]:
    """Keywords a category square stands for.

    Multi-word keywords lose their generic words ("nex weapon" -> "nex") but
    the full phrase is kept as a fallback. Each candidate is resolved through
    the alias table.

    Args:
        keyword: Output of extract_category_keyword()

    Returns:
        Ordered, de-duplicated canonical keywords
    """
    candidates = []

    words = keyword.split()
    if len(words) > 1:
        specific = " ".join(w for w in words if w not in GENERIC_CATEGORY_WORDS)
        if specific:
            candidates.append(specific)
    candidates.append(keyword)

    result: list[str] = []
    for candidate in candidates:
        canonical = _canonical(candidate)
        if canonical not in result:
            result.append(canonical)
    return tuple(result)


def category_search_terms(keywords: tuple[str, ...]) -> tuple[str, ...]:
    """Expand category keywords through CATEGORY_ITEMS into search terms."""
    terms: list[str] = []
    for keyword in keywords:
        for term in [keyword, *CATEGORY_ITEMS.get(keyword, [])]:
            if term not in terms:
                terms.append(term)
    return tuple(terms)


@lru_cache(maxsize=4096)
def classify_item(item_name: str) -> ClassifiedItem:
    """Classify a square name and precompute everything needed to match it.

    Results are cached per name; the tables are static so a name always
    classifies the same way.

    Args:
        item_name: Square name as configured on the board

    Returns:
        ClassifiedItem
    """
    name = normalize_text(item_name)

    keyword = extract_category_keyword(name)
    if keyword is None:
        return ClassifiedItem(
            kind=ItemKind.LITERAL,
            name=name,
            variations=get_item_variations(name),
        )

    keywords = category_keywords(keyword)
    terms = category_search_terms(keywords)

    logger.debug(
        "[CLASSIFY] '%s' -> category keywords=%s (%d terms)",
        item_name,
        list(keywords),
        len(terms),
    )

    return ClassifiedItem(
        kind=ItemKind.CATEGORY,
        name=name,
        keywords=keywords,
        search_terms=terms,
    )
