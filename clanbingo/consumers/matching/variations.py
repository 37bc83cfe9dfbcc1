"""Item name variations for literal matching.

Expands a square name into the spellings players and the game log actually
use: material-tier prefixes (dragon -> d), weapon-type synonyms
(scimitar -> scim / sword, crossbow -> xbow), armour-slot synonyms
(platebody -> body) and established whole-name abbreviations
(abyssal whip -> aby whip).
"""

import re
from functools import lru_cache

from clanbingo.consumers.matching.normalizer import collapse_spaces, normalize_text
from clanbingo.utilities.constants import ITEM_ABBREVIATIONS, ITEM_SYNONYMS


@lru_cache(maxsize=4096)
def get_item_variations(item_name: str) -> tuple[str, ...]:
    """Get all variations of an item name.

    Pure and total: never raises, and a name no synonym rule applies to
    yields only itself. The normalized name is always first.

    Args:
        item_name: Square name (any case)

    Returns:
        Tuple of normalized variations, duplicates removed
    """
    name = normalize_text(item_name)
    if not name:
        return ()

    variations = [name]

    for fragment, alternatives in ITEM_SYNONYMS.items():
        pattern = re.compile(rf"(?<![\w']){re.escape(fragment)}(?![\w'])")
        if not pattern.search(name):
            continue
        for alt in alternatives:
            variations.append(collapse_spaces(pattern.sub(alt, name)))

    variations.extend(ITEM_ABBREVIATIONS.get(name, []))

    seen: set[str] = set()
    result = []
    for variation in variations:
        if variation and variation not in seen:
            seen.add(variation)
            result.append(variation)
    return tuple(result)
