"""Matching constants for activity-to-square matching.

Hand-curated synonym, category and exclusion tables. Adventurer's log lines
carry no item ids, so these tables are what lets "I found a pernix cowl"
complete an "Any Nex Item" square.

All keys and values are lowercase and already normalized (see
consumers/matching/normalizer.py). Extending the game coverage means editing
data here, never adding branches to the matcher.
"""

# =============================================================================
# ITEM SYNONYMS
# Fragment of an item name -> alternatives players and the game log use.
# A variation is the item name with the fragment (whole words only) swapped
# for one alternative.
#
# Format: fragment -> [alternatives]
# =============================================================================

ITEM_SYNONYMS: dict[str, list[str]] = {
    # Material tiers
    "dragon": ["d", "drag"],
    "abyssal": ["aby", "abby"],
    "rune": ["r"],
    "adamant": ["addy", "adam"],
    "mithril": ["mith"],
    "steel": ["s"],
    "iron": ["i"],
    "bronze": ["b"],
    # Weapon types
    "scimitar": ["scim", "sword"],
    "longsword": ["long sword"],
    "dagger": ["dag"],
    "battleaxe": ["baxe", "battle axe"],
    "warhammer": ["war hammer", "hammer"],
    "crossbow": ["xbow", "c bow"],
    "xbow": ["crossbow"],
    "2h sword": ["two-handed sword"],
    "two-handed sword": ["2h sword", "2h"],
    "shortbow": ["short bow"],
    "longbow": ["long bow"],
    "off-hand": ["offhand", "off hand"],
    # Armour slots
    "platebody": ["plate body", "body"],
    "platelegs": ["plate legs", "legs"],
    "plateskirt": ["plate skirt", "skirt"],
    "chainbody": ["chain body", "chain"],
    "full helm": ["helm", "full helmet"],
    "med helm": ["helm"],
    "square shield": ["sq shield"],
    "kiteshield": ["kite shield", "kite"],
    "chestplate": ["chest"],
    # Jewellery
    "amulet": ["ammy"],
    "necklace": ["neck", "necky"],
    "bracelet": ["brace"],
    # Boss-item short forms
    "tentacle": ["tent"],
    "visage": ["vis"],
}

# Whole item names with an established community abbreviation.
# Format: item name -> [full alternative names]
ITEM_ABBREVIATIONS: dict[str, list[str]] = {
    "abyssal whip": ["aby whip", "abby whip"],
    "dragon claws": ["d claws", "d claw"],
    "bandos chestplate": ["bcp"],
    "zaryte bow": ["zbow"],
    "noxious scythe": ["nox scythe"],
    "noxious staff": ["nox staff"],
    "noxious longbow": ["nox bow"],
    "seismic wand": ["seis wand"],
    "seismic singularity": ["seis singularity"],
    "dragon rider lance": ["dr lance"],
    "eldritch crossbow": ["eldritch xbow"],
    "staff of light": ["sol staff"],
}


# =============================================================================
# CATEGORY ("Any X") MATCHING
# =============================================================================

# Words too vague to search for on their own ("Any Nex Armour" -> "nex").
GENERIC_CATEGORY_WORDS: frozenset[str] = frozenset(
    {
        "weapon",
        "weapons",
        "armor",
        "armour",
        "gear",
        "set",
        "piece",
        "pieces",
        "drop",
        "drops",
        "unique",
        "uniques",
        "item",
        "items",
        "loot",
        "boss",
    }
)

# Alternate boss/category names -> canonical category keyword.
# Keys use spaces, not hyphens (keywords are hyphen-normalized before lookup).
CATEGORY_ALIASES: dict[str, str] = {
    # God Wars Dungeon 1
    "kree'arra": "armadyl",
    "kreearra": "armadyl",
    "kree arra": "armadyl",
    "general graardor": "bandos",
    "graardor": "bandos",
    "commander zilyana": "saradomin",
    "zilyana": "saradomin",
    "k'ril tsutsaroth": "k'ril",
    "kril tsutsaroth": "k'ril",
    "kril": "k'ril",
    "god wars": "gwd1",
    "god wars dungeon": "gwd1",
    "gwd": "gwd1",
    # God Wars Dungeon 2
    "gwd 2": "gwd2",
    "god wars 2": "gwd2",
    "god wars dungeon 2": "gwd2",
    "heart of gielinor": "gwd2",
    "twin fury": "twin furies",
    "vindicta and gorvek": "vindicta",
    # Bosses
    "qbd": "queen black dragon",
    "kq": "kalphite queen",
    "kk": "kalphite king",
    "rots": "rise of the six",
    "rax": "araxxor",
    "araxxi": "araxxor",
    "arch glacor": "arch glacor",
    "archglacor": "arch glacor",
    "zamorak lord of chaos": "zamorak",
    "rasial the first necromancer": "rasial",
    # Elite dungeons
    "ed": "elite dungeon",
    "elite dungeons": "elite dungeon",
    "ed1": "temple of aminishi",
    "ed2": "dragonkin laboratory",
    "ed3": "shadow reef",
    "the ambassador": "ambassador",
}

# Boss/category keyword -> unique drops that satisfy it.
# The keyword itself is always a search term too ("I killed Nex" style lines).
CATEGORY_ITEMS: dict[str, list[str]] = {
    "nex": [
        "torva full helm",
        "torva platebody",
        "torva platelegs",
        "torva gloves",
        "torva boots",
        "pernix cowl",
        "pernix body",
        "pernix chaps",
        "pernix gloves",
        "pernix boots",
        "virtus mask",
        "virtus robe top",
        "virtus robe legs",
        "virtus gloves",
        "virtus boots",
        "virtus wand",
        "virtus book",
        "zaryte bow",
    ],
    "armadyl": [
        "armadyl helmet",
        "armadyl chestplate",
        "armadyl chainskirt",
        "armadyl gloves",
        "armadyl boots",
        "armadyl buckler",
        "armadyl crossbow",
        "armadyl hilt",
    ],
    "bandos": [
        "bandos helmet",
        "bandos chestplate",
        "bandos tassets",
        "bandos gloves",
        "bandos boots",
        "bandos warshield",
        "bandos hilt",
    ],
    "saradomin": [
        "saradomin sword",
        "saradomin's hiss",
        "saradomin's murmur",
        "saradomin's whisper",
        "saradomin hilt",
    ],
    "k'ril": [
        "zamorakian spear",
        "zamorak hilt",
        "steam battlestaff",
        "hood of subjugation",
        "garb of subjugation",
        "gown of subjugation",
        "gloves of subjugation",
        "boots of subjugation",
        "ward of subjugation",
    ],
    "zamorak": [
        "zamorakian spear",
        "zamorak hilt",
        "hood of subjugation",
        "garb of subjugation",
        "gown of subjugation",
        "hood of havoc",
        "robe top of havoc",
        "robe bottom of havoc",
        "gloves of havoc",
        "boots of havoc",
    ],
    "kerapac": [
        "fractured",
        "kerapac's wrist wraps",
        "kerapac's mask piece",
        "fractured armadyl symbol",
        "fractured stabilisation gem",
        "staff of armadyl's fractured shaft",
        "greater concentrated blast ability codex",
    ],
    "vorago": [
        "seismic wand",
        "seismic singularity",
        "tectonic energy",
        "tectonic mask",
        "tectonic robe top",
        "tectonic robe bottom",
    ],
    "araxxor": [
        "araxxi's fang",
        "araxxi's web",
        "araxxi's eye",
        "spider leg top",
        "spider leg middle",
        "spider leg bottom",
        "noxious scythe",
        "noxious staff",
        "noxious longbow",
    ],
    "telos": [
        "dormant anima core helm",
        "dormant anima core body",
        "dormant anima core legs",
        "dormant seren godbow",
        "dormant staff of sliske",
        "dormant zaros godsword",
    ],
    "solak": [
        "blightbound crossbow",
        "erethdor's grimoire",
    ],
    "raksha": [
        "shadow spike",
        "greater ricochet ability codex",
        "greater chain ability codex",
        "laceration boots",
        "blast diffusion boots",
        "fleeting boots",
    ],
    "kalphite king": [
        "drygore mace",
        "drygore longsword",
        "drygore rapier",
        "off-hand drygore mace",
        "off-hand drygore longsword",
        "off-hand drygore rapier",
    ],
    "kalphite queen": [
        "dragon chainbody",
        "kq head",
    ],
    "queen black dragon": [
        "royal crossbow",
        "royal sight",
        "royal frame",
        "royal torsion spring",
        "royal stabiliser",
        "dragonbone upgrade kit",
    ],
    "barrows": [
        "ahrim's",
        "akrisae's",
        "dharok's",
        "guthan's",
        "karil's",
        "linza's",
        "torag's",
        "verac's",
    ],
    "rise of the six": [
        "malevolent energy",
    ],
    "vindicta": [
        "dragon rider lance",
        "anima core of zamorak",
        "crest of zamorak",
    ],
    "gregorovic": [
        "shadow glaive",
        "anima core of sliske",
        "crest of sliske",
    ],
    "helwyr": [
        "wand of the cywir elders",
        "orb of the cywir elders",
        "anima core of seren",
        "crest of seren",
    ],
    "twin furies": [
        "blade of nymora",
        "blade of avaryss",
        "anima core of zaros",
        "crest of zaros",
    ],
    "arch glacor": [
        "scripture of wen",
        "leng artefact",
        "manuscript of wen",
        "frozen core of leng",
        "dark nilas",
    ],
    "croesus": [
        "cryptbloom helm",
        "cryptbloom top",
        "cryptbloom bottoms",
        "cryptbloom gloves",
        "cryptbloom boots",
    ],
    "rasial": [
        "omni guard",
        "soulbound lantern",
        "first necromancer's hood",
        "first necromancer's robe top",
        "first necromancer's robe bottom",
        "first necromancer's gloves",
        "first necromancer's boots",
    ],
    "ambassador": [
        "eldritch crossbow limb",
        "eldritch crossbow stock",
        "eldritch crossbow mechanism",
    ],
}

# Specific item names -> every category keyword they legitimately belong to.
# Covers umbrella categories (gwd2, elite dungeon, ...) that have no forward
# entry of their own, and cross-listed items (zaryte bow counts for "zaros").
REVERSE_CATEGORY_MAP: dict[str, list[str]] = {
    # God Wars Dungeon 1
    "armadyl hilt": ["armadyl", "gwd1", "godsword"],
    "bandos hilt": ["bandos", "gwd1", "godsword"],
    "saradomin hilt": ["saradomin", "gwd1", "godsword"],
    "zamorak hilt": ["k'ril", "zamorak", "gwd1", "godsword"],
    "armadyl crossbow": ["armadyl", "gwd1"],
    "zamorakian spear": ["k'ril", "zamorak", "gwd1"],
    "bandos tassets": ["bandos", "gwd1"],
    "bandos chestplate": ["bandos", "gwd1"],
    "saradomin sword": ["saradomin", "gwd1"],
    "subjugation": ["k'ril", "zamorak", "gwd1"],
    # Nex (Zarosian, part of the original God Wars Dungeon)
    "torva": ["nex", "zaros", "gwd1"],
    "pernix": ["nex", "zaros", "gwd1"],
    "virtus": ["nex", "zaros", "gwd1"],
    "zaryte bow": ["nex", "zaros", "gwd1"],
    # God Wars Dungeon 2
    "dragon rider lance": ["vindicta", "gwd2"],
    "shadow glaive": ["gregorovic", "gwd2"],
    "cywir elders": ["helwyr", "gwd2"],
    "blade of nymora": ["twin furies", "gwd2"],
    "blade of avaryss": ["twin furies", "gwd2"],
    "crest of zamorak": ["vindicta", "gwd2"],
    "crest of sliske": ["gregorovic", "gwd2", "sliske"],
    "crest of seren": ["helwyr", "gwd2", "seren"],
    "crest of zaros": ["twin furies", "gwd2", "zaros"],
    "anima core of zamorak": ["vindicta", "gwd2"],
    "anima core of sliske": ["gregorovic", "gwd2", "sliske"],
    "anima core of seren": ["helwyr", "gwd2", "seren"],
    "anima core of zaros": ["twin furies", "gwd2", "zaros"],
    # Telos (dormant god weapons)
    "seren godbow": ["telos", "seren"],
    "staff of sliske": ["telos", "sliske"],
    "zaros godsword": ["telos", "zaros"],
    # Kerapac
    "kerapac's wrist wraps": ["kerapac"],
    "fractured armadyl symbol": ["kerapac"],
    "fractured stabilisation gem": ["kerapac"],
    "staff of armadyl's fractured shaft": ["kerapac"],
    # Elite dungeons
    "seasinger": ["temple of aminishi", "elite dungeon"],
    "tetsu": ["dragonkin laboratory", "elite dungeon"],
    "death lotus": ["dragonkin laboratory", "elite dungeon"],
    "eldritch crossbow": ["shadow reef", "ambassador", "elite dungeon"],
    # Other bosses
    "drygore": ["kalphite king"],
    "noxious": ["araxxor"],
    "araxxi's": ["araxxor"],
    "seismic": ["vorago"],
    "tectonic": ["vorago"],
    "royal crossbow": ["queen black dragon"],
    "malevolent": ["rise of the six"],
    "cryptbloom": ["croesus"],
    "first necromancer's": ["rasial"],
}


# =============================================================================
# EXCLUSION RULES
# Guards for categories that share vocabulary with an unrelated source.
# A category candidate is rejected when the activity text contains one of the
# rule's shared words AND one of its foreign markers. Rules come in pairs, one
# per side, so both sources are protected from each other.
#
# Format: {"category", "shared", "markers", "other"}
#   category: category keyword the rule guards
#   shared:   words both sources use
#   markers:  words that identify the other source
#   other:    the other source (for logs only)
# =============================================================================

_GOD_TRAIL_MARKERS: tuple[str, ...] = (
    "page",
    "stole",
    "mitre",
    "crozier",
    "cloak",
    "vestment",
    "d'hide",
    "dragonhide",
    "coif",
    "bracers",
    "blessed",
)

EXCLUSION_RULES: list[dict] = [
    # Kerapac's "Fractured Armadyl Symbol" / "Staff of Armadyl's fractured shaft"
    {
        "category": "armadyl",
        "shared": ("armadyl", "staff", "symbol"),
        "markers": ("fractured",),
        "other": "kerapac",
    },
    {
        "category": "gwd1",
        "shared": ("armadyl",),
        "markers": ("fractured",),
        "other": "kerapac",
    },
    {
        "category": "kerapac",
        "shared": ("armadyl",),
        "markers": (
            "armadyl helmet",
            "armadyl chestplate",
            "armadyl chainskirt",
            "armadyl gloves",
            "armadyl boots",
            "armadyl buckler",
            "armadyl crossbow",
            "armadyl hilt",
            "kree'arra",
        ),
        "other": "kree'arra",
    },
    # Dragon-tier metal gear vs everything else named after dragons
    {
        "category": "dragon",
        "shared": ("dragon",),
        "markers": (
            "dragon rider",
            "dragonkin",
            "dragonstone",
            "dragon bones",
            "dragonbone",
            "black dragon",
            "dragonfire",
            "dragonhide",
            "dragon hide",
            "dragon scale",
            "dragon impling",
        ),
        "other": "non-metal dragon items",
    },
    {
        "category": "queen black dragon",
        "shared": ("dragon",),
        "markers": ("dragon claw", "dragon hatchet", "dragon pickaxe", "dragon platelegs"),
        "other": "dragon metal tier",
    },
    # Zamorak (K'ril, Lord of Chaos) vs Vindicta's Zamorakian GWD2 drops
    {
        "category": "zamorak",
        "shared": ("zamorak",),
        "markers": ("crest of zamorak", "anima core of zamorak"),
        "other": "vindicta",
    },
    {
        "category": "vindicta",
        "shared": ("zamorak",),
        "markers": ("zamorakian", "subjugation", "zamorak hilt"),
        "other": "k'ril tsutsaroth",
    },
    # Seren items vs serenic essence / serenity posts
    {
        "category": "seren",
        "shared": ("seren",),
        "markers": ("serenic", "serenity", "serene"),
        "other": "serenic items",
    },
    # Barrows brothers vs Rise of the Six
    {
        "category": "barrows",
        "shared": ("ahrim", "dharok", "guthan", "karil", "torag", "verac"),
        "markers": ("malevolent", "rise of the six"),
        "other": "rise of the six",
    },
    {
        "category": "rise of the six",
        "shared": ("ahrim", "dharok", "guthan", "karil", "torag", "verac"),
        "markers": ("barrows",),
        "other": "barrows",
    },
    # God Wars bosses vs Treasure Trail god gear
    {"category": "armadyl", "shared": ("armadyl",), "markers": _GOD_TRAIL_MARKERS, "other": "treasure trails"},
    {"category": "bandos", "shared": ("bandos",), "markers": _GOD_TRAIL_MARKERS, "other": "treasure trails"},
    {"category": "saradomin", "shared": ("saradomin",), "markers": _GOD_TRAIL_MARKERS + ("brew",), "other": "treasure trails"},
    {"category": "zamorak", "shared": ("zamorak",), "markers": _GOD_TRAIL_MARKERS, "other": "treasure trails"},
]
