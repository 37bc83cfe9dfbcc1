"""Text normalization for activity matching.

Adventurer's log lines and square names are typed by different people (or
generated by the game) with inconsistent punctuation:
- Accents and curly quotes (Kerapac’s vs Kerapac's)
- Case (Abyssal Whip vs abyssal whip)
- Runs of whitespace and stray newlines
- Hyphens (off-hand vs off hand vs offhand)
"""

import logging
import re
from functools import lru_cache

from unidecode import unidecode

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Normalize text for substring matching.

    Applies: unidecode (curly quotes -> ASCII), lowercase, whitespace collapse.
    Punctuation is kept - apostrophes and hyphens are part of item names.

    Args:
        text: Raw activity text or item name

    Returns:
        Normalized lowercase text ("" for None)
    """
    if not text:
        return ""

    text = unidecode(text).lower()
    return _WHITESPACE.sub(" ", text).strip()


def collapse_spaces(text: str) -> str:
    """Collapse whitespace runs left behind by word substitution."""
    return _WHITESPACE.sub(" ", text).strip()


def hyphen_forms(text: str) -> tuple[str, ...]:
    """Hyphen/space variants of text, for absorbing inconsistent punctuation.

    "off-hand drygore" -> ("off-hand drygore", "off hand drygore", "offhand drygore")

    Applied to both the text and the term, so a hyphen on either side lines
    up with a space or nothing on the other. Order is stable and duplicates
    are removed.
    """
    forms = [
        text,
        text.replace("-", " "),
        text.replace("-", ""),
    ]

    seen: set[str] = set()
    result = []
    for form in forms:
        form = collapse_spaces(form)
        if form and form not in seen:
            seen.add(form)
            result.append(form)
    return tuple(result)


@lru_cache(maxsize=4096)
def _word_pattern(term: str) -> re.Pattern:
    # No letter, digit or apostrophe before; optional plural then no letter or digit after
    return re.compile(r"(?<![a-z0-9'])" + re.escape(term) + r"(?:e?s)?(?![a-z0-9])")


def contains_word(text: str, term: str) -> bool:
    """Check whether term appears in text as whole words.

    "s platebody" is found in "a s platebody" but not in "dharok's platebody";
    "nex" is found in "killed nex" but not in "next" or "annex". A trailing
    "s"/"es" is allowed so "d claw" still finds "d claws".
    """
    if not term:
        return False
    return _word_pattern(term).search(text) is not None


def contains_term(text_forms: tuple[str, ...], term: str) -> bool:
    """Check whether any hyphen form of term appears in any form of the text.

    Terms must sit on word boundaries (see contains_word).

    Args:
        text_forms: hyphen_forms() of the normalized activity text
        term: Normalized search term
    """
    term_forms = hyphen_forms(term)
    return any(contains_word(form, t) for form in text_forms for t in term_forms)
