"""
Match Insights — presentation-ready summaries of a CompatibilityScore.

Dimension scores are on a 0-100 scale; highlight and reason thresholds
below are expressed on that scale.
"""

import logging

from blend_matching.matching.text_analyzer import analyze_profile_compatibility
from blend_matching.models.compatibility import CompatibilityScore, MatchInsights
from blend_matching.models.profile import Profile

logger = logging.getLogger(__name__)

# (minimum overall score, headline), checked in order
_HEADLINES: list[tuple[int, str]] = [
    (85, "Exceptional match potential"),
    (70, "Strong compatibility signals"),
    (55, "Good foundation for connection"),
]
_DEFAULT_HEADLINE = "Worth exploring"

HIGHLIGHT_THRESHOLD = 80
REASON_THRESHOLD = 60
MAX_HIGHLIGHTS = 4
MAX_TIPS = 3


def generate_match_insights(
    score: CompatibilityScore,
    user: Profile,
    candidate: Profile,
) -> MatchInsights:
    """
    Build a headline, highlights and tips for a scored pair.

    Highlights come from strong dimensions and shared interests; tips come
    from the text analysis of both profiles.
    """
    analysis = analyze_profile_compatibility(user, candidate)

    headline = next(
        (text for minimum, text in _HEADLINES if score.overall_score >= minimum),
        _DEFAULT_HEADLINE,
    )

    dimensions = score.dimensions
    highlights: list[str] = []
    if dimensions.intent_compatibility.score >= HIGHLIGHT_THRESHOLD:
        highlights.append("Aligned relationship goals")
    if dimensions.communication_style_match.score >= HIGHLIGHT_THRESHOLD:
        highlights.append("Compatible communication styles")
    if dimensions.values_alignment.score >= HIGHLIGHT_THRESHOLD:
        highlights.append("Shared core values")
    if len(analysis.shared_interests) >= 2:
        highlights.append(f"Common interests: {', '.join(analysis.shared_interests[:2])}")

    tips: list[str] = []
    if analysis.conversation_starters:
        tips.append(analysis.conversation_starters[0])
    if analysis.potential_challenges:
        tips.append(f"Be aware: {analysis.potential_challenges[0]}")
    if analysis.complementary_traits:
        tips.append(f"Strength: {analysis.complementary_traits[0]}")

    return MatchInsights(
        headline=headline,
        highlights=highlights[:MAX_HIGHLIGHTS],
        tips=tips[:MAX_TIPS],
    )


def get_match_reason(score: CompatibilityScore) -> str:
    """Short human-readable reason naming up to two strong dimensions."""
    dims = score.dimensions
    entries = [
        ("shared intentions", dims.intent_compatibility.score),
        ("personality compatibility", dims.quiz_compatibility.score),
        ("relationship style", dims.relationship_structure_fit.score),
        ("communication fit", dims.communication_style_match.score),
        ("value alignment", dims.values_alignment.score),
        ("lifestyle compatibility", dims.behavioral_compatibility.score),
    ]
    entries.sort(key=lambda entry: -entry[1])

    reasons = [name for name, value in entries[:2] if value >= REASON_THRESHOLD]

    if not reasons:
        return "Potential for connection"
    if len(reasons) == 1:
        return f"Strong {reasons[0]}"
    return f"{reasons[0]} & {reasons[1]}"
