"""
Profile Models — Pydantic schemas for the records the matching core consumes.

These are owned by other subsystems (profile editing, the compatibility quiz,
interaction tracking and messaging). The matching core treats every instance
as an immutable snapshot for the duration of a call.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


RelationshipStructure = Literal[
    "hierarchical",          # primary + secondaries
    "non_hierarchical",      # all relationships equal
    "solo_poly",             # independent polyamory
    "relationship_anarchy",  # no labels/hierarchy
    "kitchen_table",         # everyone knows each other
    "parallel",              # minimal metamour interaction
    "garden_party",          # comfortable when needed
    "mono_poly",             # one mono, one poly partner
    "triad",
    "quad",
    "vee",                   # one person with two partners
    "swinger",
    "open_relationship",
]

PacePreference = Literal["slow", "medium", "fast"]
ResponseStyle = Literal["quick", "relaxed"]
ProfileAction = Literal["view", "like", "super_like", "pass", "message"]
ConnectionQuality = Literal["cold", "warm", "hot", "connected"]


# ======================================================================
# Profile and quiz
# ======================================================================

class PromptResponse(BaseModel):
    """An answer to one of the profile prompts."""

    id: str = ""
    profile_id: str = ""
    prompt_id: str = ""
    prompt_text: str
    response_text: str


class QuizScores(BaseModel):
    """Likert scores (1-5) for each compatibility quiz sub-dimension."""

    communication_style: int = Field(..., ge=1, le=5)
    jealousy_management: int = Field(..., ge=1, le=5)
    time_management: int = Field(..., ge=1, le=5)
    hierarchy_preference: int = Field(..., ge=1, le=5)
    disclosure_level: int = Field(..., ge=1, le=5)
    boundary_firmness: int = Field(..., ge=1, le=5)


class QuizResult(BaseModel):
    """A completed compatibility quiz."""

    id: str = ""
    user_id: str = ""
    scores: QuizScores
    compatibility_profile: str = ""
    completed_at: Optional[datetime] = None


class Profile(BaseModel):
    """
    A dating profile as supplied by the profile subsystem.

    Includes the extended relationship fields (structure and quiz result)
    used by the compatibility engine.
    """

    id: str
    user_id: str = ""
    display_name: str = ""
    age: int
    city: str = ""
    bio: str = ""
    photos: list[str] = Field(default_factory=list)
    pace_preference: PacePreference = "medium"
    response_style: ResponseStyle = "relaxed"
    open_to_meet: bool = True
    virtual_only: bool = False
    voice_intro_url: Optional[str] = None
    intent_ids: list[str] = Field(default_factory=list)
    prompt_responses: list[PromptResponse] = Field(default_factory=list)

    relationship_structure: Optional[RelationshipStructure] = None
    quiz_result: Optional[QuizResult] = None


# ======================================================================
# Behavior tracking
# ======================================================================

class ProfileSnapshot(BaseModel):
    """
    Denormalized copy of a viewed profile, taken when the view is recorded.

    Later behavioral analysis reads these fields instead of dereferencing
    a profile that may since have changed or been deleted.
    """

    model_config = ConfigDict(frozen=True)

    age: int
    relationship_structure: Optional[RelationshipStructure] = None
    intent_ids: tuple[str, ...] = ()
    bio_length: int = 0
    photo_count: int = 0
    has_voice_intro: bool = False
    pace_preference: PacePreference = "medium"
    response_style: ResponseStyle = "relaxed"


def _assume_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so histories always sort."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ProfileView(BaseModel):
    """A single timestamped interaction with another profile."""

    id: str
    viewer_id: str
    viewed_profile_id: str
    action: ProfileAction
    dwell_time_ms: int = 0
    created_at: datetime
    profile_snapshot: Optional[ProfileSnapshot] = None

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        return _assume_utc(v)


class Message(BaseModel):
    """A chat message, as needed for conversation metrics."""

    id: str = ""
    thread_id: str
    sender_id: str
    content: Optional[str] = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        return _assume_utc(v)


class ConversationMetrics(BaseModel):
    """Per-thread messaging aggregate maintained by the messaging subsystem."""

    thread_id: str
    user_id: str
    other_user_id: str
    messages_sent: int = 0
    messages_received: int = 0
    avg_response_time_ms: float = 0.0
    avg_message_length: float = 0.0
    longest_streak_days: int = 0
    last_active_at: Optional[datetime] = None
    met_in_person: bool = False
    connection_quality: ConnectionQuality = "cold"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
