"""
Profile Text Analyzer — keyword heuristics over a profile's free text.

1. Reads the bio and every prompt response as one lowercased text
2. Scores personality traits, values and ENM approaches by keyword hits
3. Picks up interests from a fixed activity vocabulary
4. Classifies communication style and bio tone by ordered phrase checks
5. Collects independent green/red flags

analyze_profile_compatibility() compares two analyses and produces
shared values/interests, complementary traits, challenges and
conversation starters. All outputs are total: sparse or empty profiles
yield empty lists and default classifications, never errors.
"""

import logging
from enum import Enum
from typing import Iterable

from blend_matching.matching.vocabulary import (
    ENM_APPROACH_KEYWORDS,
    INTEREST_WORDS,
    PERSONALITY_TRAIT_KEYWORDS,
    VALUE_THEME_KEYWORDS,
    PersonalityTrait,
    pad_conversation_starters,
)
from blend_matching.models.compatibility import (
    MatchAnalysis,
    ProfileAnalysis,
    TraitSignal,
)
from blend_matching.models.profile import Profile

logger = logging.getLogger(__name__)

MAX_TRAITS = 5
MAX_VALUES = 5
MAX_ENM_STYLES = 3

BASE_PERSONALITY_MATCH = 50
SHARED_TRAIT_BONUS = 10
SHARED_VALUE_BONUS = 8

# Ordered phrase checks. The first group with any hit wins.
_COMMUNICATION_STYLE_RULES: list[tuple[str, list[str]]] = [
    ("playful", ["lol", "haha", "😂", "joke"]),
    ("direct", ["honest", "direct", "straightforward"]),
    ("warm", ["caring", "love", "heart"]),
]
_DEFAULT_COMMUNICATION_STYLE = "thoughtful"

_DEFAULT_BIO_TONE = "casual"

_GREEN_FLAG_RULES: list[tuple[str, list[str]]] = [
    ("Values communication", ["communication"]),
    ("Emphasizes consent", ["consent"]),
    ("Respects boundaries", ["boundaries"]),
    ("Growth-oriented", ["growth"]),
    ("Does personal work", ["therapy", "self-work"]),
]

# (user trait, candidate trait, description)
_COMPLEMENTARY_TRAITS: list[tuple[PersonalityTrait, PersonalityTrait, str]] = [
    (PersonalityTrait.ADVENTUROUS, PersonalityTrait.HOMEBODY, "Balance of adventure and stability"),
    (PersonalityTrait.SOCIAL, PersonalityTrait.INTELLECTUAL, "Social energy meets depth"),
]


# ======================================================================
# Text helpers
# ======================================================================

def get_profile_text(profile: Profile) -> str:
    """Join the bio and all prompt responses into one lowercased string."""
    texts: list[str] = []
    if profile.bio:
        texts.append(profile.bio)
    for response in profile.prompt_responses:
        texts.append(response.response_text)
    return " ".join(texts).lower()


def _count_keyword_matches(text: str, keywords: Iterable[str]) -> int:
    """Count how many distinct keywords occur in the text."""
    return sum(1 for keyword in keywords if keyword.lower() in text)


def _score_categories(
    text: str,
    table: dict[Enum, list[str]],
    limit: int,
) -> list[TraitSignal]:
    """
    Score every category of a keyword table against the text.

    confidence = min(matches / len(keywords) * 2, 1). Categories without
    any hit are dropped. The rest are sorted by confidence (descending,
    ties keep table order) and truncated to ``limit``.
    """
    signals: list[TraitSignal] = []
    for category, keywords in table.items():
        matches = _count_keyword_matches(text, keywords)
        if matches > 0:
            confidence = min(matches / max(len(keywords), 1) * 2, 1.0)
            signals.append(TraitSignal(name=category.value, confidence=confidence))

    signals.sort(key=lambda s: -s.confidence)
    return signals[:limit]


def _contains_any(text: str, phrases: list[str]) -> bool:
    return any(phrase in text for phrase in phrases)


def _classify_communication_style(text: str) -> str:
    for style, phrases in _COMMUNICATION_STYLE_RULES:
        if _contains_any(text, phrases):
            return style
    return _DEFAULT_COMMUNICATION_STYLE


def _classify_bio_tone(text: str) -> str:
    if "looking for" in text and "serious" in text:
        return "serious"
    if _contains_any(text, ["love", "romance", "heart"]):
        return "romantic"
    if _contains_any(text, ["professional", "career", "work"]):
        return "professional"
    return _DEFAULT_BIO_TONE


def _green_flags(text: str) -> list[str]:
    return [flag for flag, phrases in _GREEN_FLAG_RULES if _contains_any(text, phrases)]


def _red_flags(text: str) -> list[str]:
    flags: list[str] = []
    if "drama" in text:
        flags.append("Mentions drama")
    if "no [" in text:
        flags.append("Has many restrictions")
    if "unicorn hunter" in text or ("couple" in text and "single woman" in text):
        flags.append("Possible unicorn hunting")
    return flags


# ======================================================================
# Single-profile analysis
# ======================================================================

def analyze_profile(profile: Profile) -> ProfileAnalysis:
    """
    Analyze one profile's free text.

    Args:
        profile: The profile to read (bio + prompt responses).

    Returns:
        A ProfileAnalysis with up to 5 traits, 5 values and 3 ENM styles,
        matched interests, a single communication style and bio tone,
        and any green/red flags.
    """
    text = get_profile_text(profile)

    return ProfileAnalysis(
        personality_traits=_score_categories(text, PERSONALITY_TRAIT_KEYWORDS, MAX_TRAITS),
        values=_score_categories(text, VALUE_THEME_KEYWORDS, MAX_VALUES),
        enm_style=_score_categories(text, ENM_APPROACH_KEYWORDS, MAX_ENM_STYLES),
        interests=[word for word in INTEREST_WORDS if word in text],
        communication_style=_classify_communication_style(text),
        bio_tone=_classify_bio_tone(text),
        green_flags=_green_flags(text),
        red_flags=_red_flags(text),
    )


# ======================================================================
# Cross-profile analysis
# ======================================================================

def _names(signals: list[TraitSignal]) -> list[str]:
    return [s.name for s in signals]


def analyze_profile_compatibility(
    user: Profile,
    candidate: Profile,
) -> MatchAnalysis:
    """
    Compare the text analyses of two profiles.

    Personality match starts at 50, adds 10 per shared trait and 8 per
    shared value, capped at 100. Conversation starters follow a fixed
    order (shared interest, shared value, candidate's top green flag,
    candidate's first prompt) and are padded to 3-4 entries.

    Args:
        user: The viewing user's profile.
        candidate: The profile being evaluated.

    Returns:
        A MatchAnalysis.
    """
    user_analysis = analyze_profile(user)
    candidate_analysis = analyze_profile(candidate)

    candidate_traits = set(_names(candidate_analysis.personality_traits))
    candidate_values = set(_names(candidate_analysis.values))
    user_traits = set(_names(user_analysis.personality_traits))

    shared_traits = [t for t in _names(user_analysis.personality_traits) if t in candidate_traits]
    shared_values = [v for v in _names(user_analysis.values) if v in candidate_values]

    personality_match = BASE_PERSONALITY_MATCH
    personality_match += len(shared_traits) * SHARED_TRAIT_BONUS
    personality_match += len(shared_values) * SHARED_VALUE_BONUS
    personality_match = min(personality_match, 100)

    shared_interests = [i for i in user_analysis.interests if i in candidate_analysis.interests]

    complementary_traits = [
        description
        for user_trait, candidate_trait, description in _COMPLEMENTARY_TRAITS
        if user_trait.value in user_traits and candidate_trait.value in candidate_traits
    ]

    potential_challenges: list[str] = []
    if user_analysis.communication_style != candidate_analysis.communication_style:
        potential_challenges.append("Different communication styles")
    if (
        user_analysis.enm_style
        and candidate_analysis.enm_style
        and user_analysis.enm_style[0].name != candidate_analysis.enm_style[0].name
    ):
        potential_challenges.append("Different polyamory styles")

    starters: list[str] = []
    if shared_interests:
        starters.append(f"Ask about their favorite {shared_interests[0]} experience")
    if shared_values:
        starters.append(f"Discuss what {shared_values[0]} means to them in relationships")
    if candidate_analysis.green_flags:
        starters.append(
            f"They value {candidate_analysis.green_flags[0].lower()} - explore this"
        )
    if candidate.prompt_responses:
        starters.append(
            f'Ask about their answer to "{candidate.prompt_responses[0].prompt_text}"'
        )

    explanation_parts: list[str] = []
    if shared_values:
        explanation_parts.append(f"You both value {' and '.join(shared_values)}")
    if shared_interests:
        explanation_parts.append(f"Shared interests in {', '.join(shared_interests[:3])}")
    if complementary_traits:
        explanation_parts.append(complementary_traits[0])

    match_explanation = (
        ". ".join(explanation_parts) + "."
        if explanation_parts
        else "Potential for an interesting connection based on your profiles."
    )

    logger.debug(
        "Text compatibility %s -> %s: personality=%d, shared_traits=%s, "
        "shared_values=%s, shared_interests=%s",
        user.id, candidate.id, personality_match,
        shared_traits, shared_values, shared_interests,
    )

    return MatchAnalysis(
        personality_match=personality_match,
        values_alignment=shared_values,
        shared_interests=shared_interests,
        complementary_traits=complementary_traits,
        potential_challenges=potential_challenges,
        conversation_starters=pad_conversation_starters(starters),
        match_explanation=match_explanation,
    )
