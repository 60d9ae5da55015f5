"""
Compatibility Scoring Engine — weighted six-dimension compatibility between
a user and a candidate profile.

Dimensions and fixed weights:
1. Intent Compatibility (0.25)
2. Quiz Compatibility (0.20)
3. Relationship Structure Fit (0.15)
4. Communication Style Match (0.15)
5. Values Alignment (0.15)
6. Behavioral Compatibility (0.10)

overall_score = round(Σ dimension.score × dimension.weight)

quick_compatibility_score() is a separate, much cheaper heuristic for
bulk ranking. It is not derived from the weighted score and the two can
disagree for the same pair.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from blend_matching.core.rounding import round_half_up
from blend_matching.matching.vocabulary import (
    CORE_VALUE_KEYWORDS,
    INTENT_COMPATIBILITY,
    STRUCTURE_COMPATIBILITY,
    pad_conversation_starters,
)
from blend_matching.matching.text_analyzer import get_profile_text
from blend_matching.models.compatibility import (
    CompatibilityDimension,
    CompatibilityDimensions,
    CompatibilityScore,
)
from blend_matching.models.profile import Profile, QuizResult
from blend_matching.models.taste import UserTasteProfile

logger = logging.getLogger(__name__)


# ======================================================================
# Weights
# ======================================================================

INTENT_WEIGHT = 0.25
QUIZ_WEIGHT = 0.20
STRUCTURE_WEIGHT = 0.15
COMMUNICATION_WEIGHT = 0.15
VALUES_WEIGHT = 0.15
BEHAVIORAL_WEIGHT = 0.10

DIMENSION_WEIGHTS: dict[str, float] = {
    "intent_compatibility": INTENT_WEIGHT,
    "quiz_compatibility": QUIZ_WEIGHT,
    "relationship_structure_fit": STRUCTURE_WEIGHT,
    "communication_style_match": COMMUNICATION_WEIGHT,
    "values_alignment": VALUES_WEIGHT,
    "behavioral_compatibility": BEHAVIORAL_WEIGHT,
}

# (quiz sub-dimension, weight). Weights sum to 1.0
QUIZ_SUBDIMENSION_WEIGHTS: list[tuple[str, float]] = [
    ("communication_style", 0.20),
    ("jealousy_management", 0.20),
    ("time_management", 0.15),
    ("hierarchy_preference", 0.15),
    ("disclosure_level", 0.15),
    ("boundary_firmness", 0.15),
]

NEUTRAL_SCORE = 50
HIGH_SCORE_THRESHOLD = 70
CHALLENGE_THRESHOLD = 50

# Quick score constants
QUICK_DEALBREAKER_SCORE = 20
QUICK_BASE_SCORE = 40


# ======================================================================
# Shared helpers
# ======================================================================

def _has_complementary_intent(source: list[str], target: list[str]) -> bool:
    """True if any intent in ``source`` lists any intent of ``target`` as compatible."""
    return any(
        candidate_intent in INTENT_COMPATIBILITY.get(intent, [])
        for intent in source
        for candidate_intent in target
    )


def _is_listed_compatible_structure(user_structure: str, candidate_structure: str) -> bool:
    return candidate_structure in STRUCTURE_COMPATIBILITY.get(user_structure, [])


def format_structure(structure: str) -> str:
    """Render a structure key in Title Case (e.g. 'solo_poly' -> 'Solo Poly')."""
    return " ".join(word.capitalize() for word in structure.replace("_", " ").split())


def extract_core_values(text: str) -> list[str]:
    """Return the core value categories whose keywords appear in the text."""
    return [
        value.value
        for value, keywords in CORE_VALUE_KEYWORDS.items()
        if any(keyword in text for keyword in keywords)
    ]


def _plural(count: int) -> str:
    return "s" if count > 1 else ""


# ======================================================================
# Dimension calculators
# ======================================================================

def _intent_compatibility(user: Profile, candidate: Profile) -> CompatibilityDimension:
    """
    Direct shared intents score min(n×8, 16); complementary intents from the
    user's lookup table score min(n×3, 9). The sum (max 25) is scaled ×4.
    """
    user_intents = user.intent_ids
    candidate_intents = candidate.intent_ids

    direct_matches = [i for i in user_intents if i in candidate_intents]

    complementary_matches = 0
    for intent in user_intents:
        compatible = INTENT_COMPATIBILITY.get(intent, [])
        complementary_matches += sum(1 for ci in candidate_intents if ci in compatible)

    direct_score = min(len(direct_matches) * 8, 16)
    complementary_score = min(complementary_matches * 3, 9)
    score = min(direct_score + complementary_score, 25) * 4

    factors: list[str] = []
    if direct_matches:
        factors.append(f"{len(direct_matches)} shared intent{_plural(len(direct_matches))}")
    if complementary_matches > len(direct_matches):
        factors.append("Complementary relationship goals")

    explanation = (
        f"You share {len(direct_matches)} relationship intent{_plural(len(direct_matches))}"
        if direct_matches
        else "Your relationship goals may complement each other"
    )

    return CompatibilityDimension(
        name="Intent Compatibility",
        score=round_half_up(score),
        weight=INTENT_WEIGHT,
        explanation=explanation,
        factors=factors,
    )


def _quiz_compatibility(
    user_quiz: Optional[QuizResult],
    candidate_quiz: Optional[QuizResult],
) -> CompatibilityDimension:
    """
    Per sub-dimension similarity = 1 - |diff| / 4 on the 1-5 scale, weighted
    and scaled to 0-100. Missing quiz data on either side scores a neutral 50.
    """
    if user_quiz is None or candidate_quiz is None:
        return CompatibilityDimension(
            name="Quiz Compatibility",
            score=NEUTRAL_SCORE,
            weight=QUIZ_WEIGHT,
            explanation="Complete the compatibility quiz for better matching",
            factors=["Quiz not completed"],
        )

    total_similarity = 0.0
    factors: list[str] = []

    for key, weight in QUIZ_SUBDIMENSION_WEIGHTS:
        diff = abs(getattr(user_quiz.scores, key) - getattr(candidate_quiz.scores, key))
        similarity = 1 - diff / 4
        total_similarity += similarity * weight
        if similarity > 0.8:
            factors.append(f"Similar {key.replace('_', ' ')}")

    score = total_similarity * 100

    if score > 70:
        explanation = "Your ENM styles are well-aligned"
    elif score > 50:
        explanation = "Some areas of alignment in your ENM approaches"
    else:
        explanation = "Different ENM styles - could be complementary or challenging"

    return CompatibilityDimension(
        name="Quiz Compatibility",
        score=round_half_up(score),
        weight=QUIZ_WEIGHT,
        explanation=explanation,
        factors=factors[:3],
    )


def _structure_fit(user: Profile, candidate: Profile) -> CompatibilityDimension:
    """Exact match 100, listed-compatible (user's table) 75, otherwise 30."""
    user_structure = user.relationship_structure
    candidate_structure = candidate.relationship_structure

    if not user_structure or not candidate_structure:
        return CompatibilityDimension(
            name="Relationship Structure",
            score=NEUTRAL_SCORE,
            weight=STRUCTURE_WEIGHT,
            explanation="Relationship structure not specified",
            factors=["Structure not defined"],
        )

    if user_structure == candidate_structure:
        score = 100
        explanation = f"Both practice {format_structure(user_structure)}"
        factors = ["Exact structure match"]
    elif _is_listed_compatible_structure(user_structure, candidate_structure):
        score = 75
        explanation = (
            f"Compatible structures: {format_structure(user_structure)} "
            f"and {format_structure(candidate_structure)}"
        )
        factors = ["Compatible poly styles"]
    else:
        score = 30
        explanation = (
            f"Different relationship structures ({format_structure(user_structure)} "
            f"and {format_structure(candidate_structure)}) - discuss expectations early"
        )
        factors = ["Structure mismatch - requires conversation"]

    return CompatibilityDimension(
        name="Relationship Structure",
        score=score,
        weight=STRUCTURE_WEIGHT,
        explanation=explanation,
        factors=factors,
    )


def _communication_match(user: Profile, candidate: Profile) -> CompatibilityDimension:
    """Base 50; +25 same pace (else +10 if either is medium); +25 same response style (else +5)."""
    score = NEUTRAL_SCORE
    factors: list[str] = []

    if user.pace_preference == candidate.pace_preference:
        score += 25
        factors.append(f"Both prefer {user.pace_preference} pace")
    elif user.pace_preference == "medium" or candidate.pace_preference == "medium":
        score += 10
        factors.append("Pace preferences are compatible")

    if user.response_style == candidate.response_style:
        score += 25
        factors.append(f"Both have {user.response_style} response style")
    else:
        score += 5

    score = min(score, 100)

    if score > 80:
        explanation = "Your communication styles are well-matched"
    elif score > 60:
        explanation = "Compatible communication approaches"
    else:
        explanation = "Different communication styles - be patient with each other"

    return CompatibilityDimension(
        name="Communication Style",
        score=score,
        weight=COMMUNICATION_WEIGHT,
        explanation=explanation,
        factors=factors,
    )


def _values_alignment(user: Profile, candidate: Profile) -> CompatibilityDimension:
    """score = min(shared / max(|user|, |candidate|, 1) × 150, 100)."""
    user_values = extract_core_values(get_profile_text(user))
    candidate_values = extract_core_values(get_profile_text(candidate))

    shared_values = [v for v in user_values if v in candidate_values]
    overlap_ratio = len(shared_values) / max(len(user_values), len(candidate_values), 1)
    score = min(overlap_ratio * 150, 100)

    if len(shared_values) > 2:
        explanation = f"You both value {' and '.join(shared_values[:2])}"
    elif shared_values:
        explanation = f"Shared interest in {shared_values[0]}"
    else:
        explanation = "Explore each other's values through conversation"

    return CompatibilityDimension(
        name="Values Alignment",
        score=round_half_up(score),
        weight=VALUES_WEIGHT,
        explanation=explanation,
        factors=[f"Shared value: {v}" for v in shared_values][:3],
    )


def _behavioral_compatibility(
    user: Profile,
    candidate: Profile,
    taste_profile: Optional[UserTasteProfile],
) -> CompatibilityDimension:
    """
    With a taste profile: +15 age in learned range, +15 learned pace,
    +10 any learned intent. Without one: +15 same virtual_only,
    +15 same open_to_meet. The two branches never mix.
    """
    score = NEUTRAL_SCORE
    factors: list[str] = []

    if taste_profile is not None and taste_profile.attraction_patterns is not None:
        patterns = taste_profile.attraction_patterns
        low, high = patterns.preferred_age_range

        if low <= candidate.age <= high:
            score += 15
            factors.append("Matches your typical age preference")

        if patterns.preferred_pace == candidate.pace_preference:
            score += 15
            factors.append("Matches your preferred dating pace")

        if any(i in patterns.preferred_intents for i in candidate.intent_ids):
            score += 10
            factors.append("Has intents you typically like")
    else:
        if user.virtual_only == candidate.virtual_only:
            score += 15
            factors.append("Both open to virtual" if user.virtual_only else "Both open to meeting")

        if user.open_to_meet == candidate.open_to_meet:
            score += 15
            factors.append("Same openness to meeting")

    score = min(score, 100)

    return CompatibilityDimension(
        name="Behavioral Match",
        score=score,
        weight=BEHAVIORAL_WEIGHT,
        explanation=(
            "Based on your patterns, this could be a great match"
            if score > 70
            else "Get more matches to improve behavioral predictions"
        ),
        factors=factors,
    )


# ======================================================================
# Narrative helpers
# ======================================================================

def _match_explanation(top_dimensions: list[CompatibilityDimension]) -> str:
    high_scores = [d for d in top_dimensions if d.score >= HIGH_SCORE_THRESHOLD]

    if len(high_scores) >= 2:
        return (
            f"Strong compatibility in {high_scores[0].name.lower()} and "
            f"{high_scores[1].name.lower()}. {high_scores[0].explanation}"
        )
    if len(high_scores) == 1:
        return f"Good match for {high_scores[0].name.lower()}. {high_scores[0].explanation}"
    return "Potential connection worth exploring. Different perspectives can lead to growth."


def _conversation_starters(
    dimensions: CompatibilityDimensions,
    candidate: Profile,
) -> list[str]:
    starters: list[str] = []

    values = dimensions.values_alignment
    if values.score > 60 and values.factors:
        shared_value = values.factors[0].replace("Shared value: ", "")
        starters.append(f"Ask about their thoughts on {shared_value} in relationships")

    if dimensions.quiz_compatibility.score > 70:
        starters.append("Compare your ENM journeys and what you've learned")

    if dimensions.relationship_structure_fit.score > 70:
        starters.append("Discuss how your relationship structures have evolved")

    if candidate.prompt_responses:
        prompt = candidate.prompt_responses[0]
        starters.append(f'Ask about their response to "{prompt.prompt_text}"')

    return pad_conversation_starters(starters)


def _potential_challenges(dimensions: CompatibilityDimensions) -> list[str]:
    challenges: list[str] = []

    if dimensions.communication_style_match.score < CHALLENGE_THRESHOLD:
        challenges.append("Different communication paces - discuss expectations early")
    if dimensions.relationship_structure_fit.score < CHALLENGE_THRESHOLD:
        challenges.append("Different relationship structures - clarify boundaries")
    if dimensions.quiz_compatibility.score < CHALLENGE_THRESHOLD:
        challenges.append("Different ENM approaches - be open about your needs")

    return challenges


# ======================================================================
# Public API
# ======================================================================

def calculate_compatibility(
    user: Profile,
    candidate: Profile,
    taste_profile: Optional[UserTasteProfile] = None,
) -> CompatibilityScore:
    """
    Calculate the full weighted compatibility between two profiles.

    Args:
        user: The viewing user's profile.
        candidate: The profile being scored.
        taste_profile: The user's learned taste profile, if any. Switches the
                       behavioral dimension from flag matching to learned
                       preferences.

    Returns:
        A freshly built CompatibilityScore.
    """
    dimensions = CompatibilityDimensions(
        intent_compatibility=_intent_compatibility(user, candidate),
        quiz_compatibility=_quiz_compatibility(user.quiz_result, candidate.quiz_result),
        relationship_structure_fit=_structure_fit(user, candidate),
        communication_style_match=_communication_match(user, candidate),
        values_alignment=_values_alignment(user, candidate),
        behavioral_compatibility=_behavioral_compatibility(user, candidate, taste_profile),
    )

    dimension_list = dimensions.as_list()
    overall = sum(d.score * d.weight for d in dimension_list)
    overall_score = max(0, min(round_half_up(overall), 100))

    # Stable sort keeps canonical order among equal scores
    top_dimensions = sorted(dimension_list, key=lambda d: -d.score)[:3]

    logger.debug(
        "Compatibility %s -> %s: overall=%d (%s)",
        user.id, candidate.id, overall_score,
        ", ".join(f"{d.name}={d.score}" for d in dimension_list),
    )

    return CompatibilityScore(
        overall_score=overall_score,
        dimensions=dimensions,
        match_explanation=_match_explanation(top_dimensions),
        conversation_starters=_conversation_starters(dimensions, candidate),
        potential_challenges=_potential_challenges(dimensions),
        calculated_at=datetime.now(timezone.utc),
    )


def quick_compatibility_score(user: Profile, candidate: Profile) -> int:
    """
    Cheap 0-100 compatibility estimate for sorting large candidate pools.

    Returns 20 straight away when the pair shares no intent and neither side
    lists any of the other's intents as complementary. Otherwise: base 40,
    +min(shared×10, 20), +10 same pace, +10 same response style, and +15 for
    the same structure or +8 for a structure listed as compatible from the
    user's side.
    """
    shared_intents = [i for i in user.intent_ids if i in candidate.intent_ids]
    if not shared_intents:
        if not (
            _has_complementary_intent(user.intent_ids, candidate.intent_ids)
            or _has_complementary_intent(candidate.intent_ids, user.intent_ids)
        ):
            return QUICK_DEALBREAKER_SCORE

    score = QUICK_BASE_SCORE
    score += min(len(shared_intents) * 10, 20)

    if user.pace_preference == candidate.pace_preference:
        score += 10
    if user.response_style == candidate.response_style:
        score += 10

    user_structure = user.relationship_structure
    candidate_structure = candidate.relationship_structure
    if user_structure and candidate_structure:
        if user_structure == candidate_structure:
            score += 15
        elif _is_listed_compatible_structure(user_structure, candidate_structure):
            score += 8

    return min(score, 100)
