"""
Taste Profile Models — Pydantic schemas for learned user preferences.

A taste profile is never updated incrementally: each refresh rebuilds it
from the full view and conversation history supplied by the caller.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from blend_matching.models.profile import (
    PacePreference,
    RelationshipStructure,
    ResponseStyle,
)


class AttractionPatterns(BaseModel):
    """What the user tends to like, learned from like/super_like actions."""

    preferred_age_range: tuple[int, int] = (21, 55)
    avg_liked_age: int = 0

    bio_length_preference: Literal["short", "medium", "long"] = "medium"
    preferred_photo_count: int = 3
    prefers_voice_intros: bool = False

    preferred_relationship_structures: list[RelationshipStructure] = Field(default_factory=list)
    preferred_intents: list[str] = Field(default_factory=list)

    # Keywords found in liked bios
    values_keywords: list[str] = Field(default_factory=list)
    activity_keywords: list[str] = Field(default_factory=list)
    communication_keywords: list[str] = Field(default_factory=list)

    preferred_pace: PacePreference = "medium"
    preferred_response_style: ResponseStyle = "relaxed"


class BehavioralPatterns(BaseModel):
    """
    How the user browses and messages.

    typical_active_hours lists up to four hours that actually have views,
    most frequent first (ties toward the earlier hour). Hours without any
    views are never used as filler, so the list can be shorter than four.
    """

    avg_daily_sessions: float = 0.0
    avg_session_duration_mins: int = 0
    typical_active_hours: list[int] = Field(default_factory=list)
    most_active_day: int = 0  # 0 = Sunday ... 6 = Saturday
    avg_profiles_viewed_per_session: int = 0
    like_rate: float = 0.0

    message_initiation_rate: float = 0.0
    message_style: Literal["concise", "balanced", "verbose"] = "balanced"
    avg_message_length: int = 0
    response_speed: Literal["fast", "moderate", "slow"] = "moderate"
    avg_response_time_mins: int = 0


class UserTasteProfile(BaseModel):
    """Per-user summary of implicit preferences."""

    user_id: str
    attraction_patterns: AttractionPatterns = Field(default_factory=AttractionPatterns)
    behavioral_patterns: BehavioralPatterns = Field(default_factory=BehavioralPatterns)

    total_profiles_viewed: int = 0
    total_likes: int = 0
    total_passes: int = 0
    total_matches: int = 0
    total_conversations: int = 0
    successful_connections: int = 0

    confidence_score: float = Field(default=0.0, ge=0.0, le=1.0)
    created_at: datetime
    updated_at: datetime


class TasteMatch(BaseModel):
    """Result of checking a profile against a taste profile."""

    matches: bool
    score: int
    reasons: list[str] = Field(default_factory=list)
