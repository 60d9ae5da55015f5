"""
Matching Vocabulary — fixed keyword tables shared by the matching modules.

Each table maps an enumerated category to the lowercase substrings that
signal it in profile text. Iteration order of every table is significant:
ties in confidence keep this order, and the taste keyword lists are
truncated in this order.
"""

from enum import Enum


# ======================================================================
# Profile text analyzer categories
# ======================================================================

class PersonalityTrait(str, Enum):
    ADVENTUROUS = "adventurous"
    CREATIVE = "creative"
    INTELLECTUAL = "intellectual"
    SOCIAL = "social"
    HOMEBODY = "homebody"
    FITNESS = "fitness"
    FOODIE = "foodie"
    SPIRITUAL = "spiritual"


class ValueTheme(str, Enum):
    COMMUNICATION = "communication"
    AUTHENTICITY = "authenticity"
    GROWTH = "growth"
    FREEDOM = "freedom"
    CONNECTION = "connection"
    FUN = "fun"
    STABILITY = "stability"
    PASSION = "passion"


class EnmApproach(str, Enum):
    KITCHEN_TABLE = "kitchen_table"
    PARALLEL = "parallel"
    HIERARCHICAL = "hierarchical"
    NON_HIERARCHICAL = "non_hierarchical"
    SOLO_POLY = "solo_poly"


PERSONALITY_TRAIT_KEYWORDS: dict[PersonalityTrait, list[str]] = {
    PersonalityTrait.ADVENTUROUS: [
        "adventure", "travel", "explore", "spontaneous", "thrill",
        "hiking", "camping", "road trip",
    ],
    PersonalityTrait.CREATIVE: [
        "art", "music", "write", "create", "design", "photography", "paint", "craft",
    ],
    PersonalityTrait.INTELLECTUAL: [
        "read", "learn", "philosophy", "science", "discuss", "debate",
        "curious", "knowledge",
    ],
    PersonalityTrait.SOCIAL: [
        "party", "friends", "meetup", "community", "social", "gathering",
        "event", "network",
    ],
    PersonalityTrait.HOMEBODY: [
        "cozy", "home", "netflix", "quiet", "relax", "cook", "garden", "peaceful",
    ],
    PersonalityTrait.FITNESS: [
        "gym", "workout", "run", "yoga", "health", "fitness", "active", "sports",
    ],
    PersonalityTrait.FOODIE: [
        "food", "restaurant", "cook", "cuisine", "taste", "wine", "coffee", "brunch",
    ],
    PersonalityTrait.SPIRITUAL: [
        "meditation", "mindful", "spiritual", "growth", "healing", "energy",
        "soul", "universe",
    ],
}

VALUE_THEME_KEYWORDS: dict[ValueTheme, list[str]] = {
    ValueTheme.COMMUNICATION: [
        "honest", "open", "communication", "transparent", "talk", "express", "listen",
    ],
    ValueTheme.AUTHENTICITY: [
        "authentic", "genuine", "real", "true", "myself", "honest", "sincere",
    ],
    ValueTheme.GROWTH: [
        "grow", "learn", "evolve", "improve", "better", "develop", "progress",
    ],
    ValueTheme.FREEDOM: [
        "freedom", "independent", "autonomy", "space", "individual", "respect",
    ],
    ValueTheme.CONNECTION: [
        "deep", "meaningful", "connect", "intimate", "bond", "relationship", "partner",
    ],
    ValueTheme.FUN: [
        "fun", "laugh", "joy", "play", "enjoy", "adventure", "spontaneous",
    ],
    ValueTheme.STABILITY: [
        "stable", "secure", "reliable", "consistent", "trust", "safe", "committed",
    ],
    ValueTheme.PASSION: [
        "passion", "intense", "fire", "chemistry", "spark", "desire", "attraction",
    ],
}

ENM_APPROACH_KEYWORDS: dict[EnmApproach, list[str]] = {
    EnmApproach.KITCHEN_TABLE: [
        "kitchen table", "metamour", "family", "community", "all together", "group",
    ],
    EnmApproach.PARALLEL: [
        "parallel", "separate", "privacy", "boundaries", "independent relationships",
    ],
    EnmApproach.HIERARCHICAL: [
        "primary", "secondary", "anchor", "nesting partner", "hierarchy",
    ],
    EnmApproach.NON_HIERARCHICAL: [
        "non-hierarchical", "equal", "relationship anarchy", "no hierarchy",
    ],
    EnmApproach.SOLO_POLY: [
        "solo poly", "autonomous", "independent", "own space", "self-partnered",
    ],
}

INTEREST_WORDS: list[str] = [
    "hiking", "travel", "music", "art", "cooking", "reading",
    "gaming", "yoga", "dancing", "photography", "movies", "concerts", "beach",
    "mountains", "coffee", "wine", "dogs", "cats", "fitness", "meditation",
]


# ======================================================================
# Compatibility engine: core values (Values Alignment dimension)
# ======================================================================

class CoreValue(str, Enum):
    COMMUNICATION = "communication"
    ADVENTURE = "adventure"
    STABILITY = "stability"
    GROWTH = "growth"
    INTIMACY = "intimacy"
    INDEPENDENCE = "independence"
    COMMUNITY = "community"
    CREATIVITY = "creativity"


CORE_VALUE_KEYWORDS: dict[CoreValue, list[str]] = {
    CoreValue.COMMUNICATION: [
        "communication", "honest", "open", "transparent", "talk", "discuss", "share",
    ],
    CoreValue.ADVENTURE: [
        "adventure", "travel", "explore", "spontaneous", "new experiences", "try new",
    ],
    CoreValue.STABILITY: [
        "stable", "secure", "consistent", "reliable", "committed", "long-term",
    ],
    CoreValue.GROWTH: [
        "growth", "learn", "evolve", "develop", "improve", "better",
    ],
    CoreValue.INTIMACY: [
        "intimate", "connection", "deep", "meaningful", "emotional", "close",
    ],
    CoreValue.INDEPENDENCE: [
        "independent", "autonomy", "space", "freedom", "self",
    ],
    CoreValue.COMMUNITY: [
        "community", "friends", "social", "group", "together", "collective",
    ],
    CoreValue.CREATIVITY: [
        "creative", "art", "music", "write", "create", "express",
    ],
}


# ======================================================================
# Taste profile: keywords looked for in liked bios
# ======================================================================

TASTE_VALUE_KEYWORDS: list[str] = [
    "honest", "communication", "trust", "respect", "growth", "adventure",
    "stability", "freedom", "connection", "intimacy", "family", "career",
    "health", "spiritual", "creative",
]

TASTE_ACTIVITY_KEYWORDS: list[str] = [
    "hiking", "travel", "cooking", "music", "reading", "movies", "games",
    "sports", "yoga", "meditation", "art", "dancing", "outdoors", "beach",
    "mountains",
]

TASTE_COMMUNICATION_KEYWORDS: list[str] = [
    "talk", "listen", "share", "discuss", "express", "understand",
    "support", "boundaries", "needs", "feelings",
]


# ======================================================================
# Intent and relationship structure compatibility tables
# ======================================================================

# intent -> intents it pairs well with (looked up from the user's side)
INTENT_COMPATIBILITY: dict[str, list[str]] = {
    "couples-dating": ["couples-dating", "third-for-us", "join-couple", "polyamory", "open"],
    "third-for-us": ["join-couple", "polyamory", "open", "swinging"],
    "join-couple": ["third-for-us", "couples-dating", "polyamory"],
    "polyamory": ["polyamory", "couples-dating", "third-for-us", "join-couple", "open"],
    "open": ["open", "polyamory", "couples-dating", "swinging", "friends-first"],
    "swinging": ["swinging", "third-for-us", "open", "kink"],
    "friends-first": ["friends-first", "open", "polyamory"],
    "kink": ["kink", "swinging", "open"],
}

# Asymmetric: keyed by the user's structure
STRUCTURE_COMPATIBILITY: dict[str, list[str]] = {
    "hierarchical": ["hierarchical", "mono_poly", "vee"],
    "non_hierarchical": ["non_hierarchical", "relationship_anarchy", "kitchen_table"],
    "solo_poly": ["solo_poly", "non_hierarchical", "relationship_anarchy", "parallel"],
    "relationship_anarchy": ["relationship_anarchy", "non_hierarchical", "solo_poly"],
    "kitchen_table": ["kitchen_table", "non_hierarchical", "garden_party"],
    "parallel": ["parallel", "solo_poly", "hierarchical"],
    "garden_party": ["garden_party", "kitchen_table", "parallel"],
    "mono_poly": ["mono_poly", "hierarchical", "vee"],
    "triad": ["triad", "kitchen_table", "non_hierarchical"],
    "quad": ["quad", "kitchen_table", "triad"],
    "vee": ["vee", "hierarchical", "mono_poly", "parallel"],
    "swinger": ["swinger", "open_relationship"],
    "open_relationship": ["open_relationship", "swinger", "parallel"],
}


# ======================================================================
# Conversation starters used to pad short starter lists
# ======================================================================

GENERIC_CONVERSATION_STARTERS: list[str] = [
    "Ask about their ideal first date scenario",
    "Share what brought you to ENM",
    "Ask what a perfect weekend looks like for them",
]

MIN_CONVERSATION_STARTERS = 3
MAX_CONVERSATION_STARTERS = 4


def pad_conversation_starters(starters: list[str]) -> list[str]:
    """
    Pad a starter list with generic starters and cap its length.

    Generic starters are appended (skipping any already present) until at
    least MIN_CONVERSATION_STARTERS remain; the result holds at most
    MAX_CONVERSATION_STARTERS entries.
    """
    padded = list(starters)
    for generic in GENERIC_CONVERSATION_STARTERS:
        if len(padded) >= MIN_CONVERSATION_STARTERS:
            break
        if generic not in padded:
            padded.append(generic)
    return padded[:MAX_CONVERSATION_STARTERS]
