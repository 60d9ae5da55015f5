"""
Compatibility Models — Pydantic schemas for scoring and analysis results.

Every result is built fresh per call. Caching results (for example keyed
by profile pair) is up to the caller.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from blend_matching.models.profile import Profile


# ======================================================================
# Full compatibility score
# ======================================================================

class CompatibilityDimension(BaseModel):
    """One weighted sub-score of the compatibility breakdown."""

    name: str
    score: int = Field(..., ge=0, le=100)
    weight: float
    explanation: str
    factors: list[str] = Field(default_factory=list)


class CompatibilityDimensions(BaseModel):
    """The six dimensions, in their canonical order."""

    intent_compatibility: CompatibilityDimension
    quiz_compatibility: CompatibilityDimension
    relationship_structure_fit: CompatibilityDimension
    communication_style_match: CompatibilityDimension
    values_alignment: CompatibilityDimension
    behavioral_compatibility: CompatibilityDimension

    def as_list(self) -> list[CompatibilityDimension]:
        """Return the dimensions in canonical order."""
        return [
            self.intent_compatibility,
            self.quiz_compatibility,
            self.relationship_structure_fit,
            self.communication_style_match,
            self.values_alignment,
            self.behavioral_compatibility,
        ]


class CompatibilityScore(BaseModel):
    """Full weighted compatibility between a user and a candidate."""

    overall_score: int = Field(..., ge=0, le=100)
    dimensions: CompatibilityDimensions
    match_explanation: str
    conversation_starters: list[str] = Field(default_factory=list)
    potential_challenges: list[str] = Field(default_factory=list)
    calculated_at: datetime


class MatchInsights(BaseModel):
    """Presentation-ready summary of a compatibility score."""

    headline: str
    highlights: list[str] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)


class RankedProfile(BaseModel):
    """A candidate paired with its ranking score."""

    profile: Profile
    score: int


# ======================================================================
# Profile text analysis
# ======================================================================

class TraitSignal(BaseModel):
    """A keyword-derived category with its confidence (0-1)."""

    name: str
    confidence: float = Field(..., ge=0.0, le=1.0)


class ProfileAnalysis(BaseModel):
    """Heuristic reading of a single profile's free text."""

    personality_traits: list[TraitSignal] = Field(default_factory=list)
    values: list[TraitSignal] = Field(default_factory=list)
    enm_style: list[TraitSignal] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    communication_style: Literal["direct", "thoughtful", "playful", "warm"] = "thoughtful"
    bio_tone: Literal["casual", "serious", "witty", "romantic", "professional"] = "casual"
    red_flags: list[str] = Field(default_factory=list)
    green_flags: list[str] = Field(default_factory=list)


class MatchAnalysis(BaseModel):
    """Cross-profile comparison of two text analyses."""

    personality_match: int = Field(..., ge=0, le=100)
    values_alignment: list[str] = Field(default_factory=list)
    shared_interests: list[str] = Field(default_factory=list)
    complementary_traits: list[str] = Field(default_factory=list)
    potential_challenges: list[str] = Field(default_factory=list)
    conversation_starters: list[str] = Field(default_factory=list)
    match_explanation: str
