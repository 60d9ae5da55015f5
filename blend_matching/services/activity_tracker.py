"""
Activity Tracker — builds the behavior records the taste profile learns from.

Callers own storage. These helpers only create new values:
- build_profile_snapshot / record_profile_view produce view events with an
  immutable copy of the viewed profile and keep a capped rolling window
- compute_conversation_metrics summarizes one chat thread
- upsert_conversation_metrics replaces or appends a thread's metrics
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from blend_matching.core import config
from blend_matching.models.profile import (
    ConversationMetrics,
    Message,
    Profile,
    ProfileAction,
    ProfileSnapshot,
    ProfileView,
)

logger = logging.getLogger(__name__)

# (minimum messages on each side, quality), checked in order
_CONNECTION_QUALITY_TIERS: list[tuple[int, str]] = [
    (20, "connected"),
    (10, "hot"),
    (3, "warm"),
]


# ======================================================================
# Profile views
# ======================================================================

def build_profile_snapshot(profile: Profile) -> ProfileSnapshot:
    """Copy the fields behavioral analysis needs out of a live profile."""
    return ProfileSnapshot(
        age=profile.age,
        relationship_structure=profile.relationship_structure,
        intent_ids=tuple(profile.intent_ids),
        bio_length=len(profile.bio or ""),
        photo_count=len(profile.photos),
        has_voice_intro=bool(profile.voice_intro_url),
        pace_preference=profile.pace_preference,
        response_style=profile.response_style,
    )


def record_profile_view(
    history: list[ProfileView],
    viewer_id: str,
    profile: Profile,
    action: ProfileAction,
    dwell_time_ms: int = 0,
    *,
    now: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> list[ProfileView]:
    """
    Append a view event to a history and trim it to the newest ``limit``.

    Args:
        history: The existing view history (not modified).
        viewer_id: The user doing the viewing.
        profile: The viewed profile; snapshotted into the event.
        action: What the viewer did.
        dwell_time_ms: Time spent on the profile.
        now: Event timestamp (defaults to the current UTC time).
        limit: Window size (defaults to PROFILE_VIEW_HISTORY_LIMIT). Must be
               at least 1.

    Returns:
        A new list ending with the new view.

    Raises:
        ValueError: If ``limit`` is below 1.
    """
    if limit is None:
        limit = config.PROFILE_VIEW_HISTORY_LIMIT
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    view = ProfileView(
        id=f"view-{uuid.uuid4()}",
        viewer_id=viewer_id,
        viewed_profile_id=profile.id,
        action=action,
        dwell_time_ms=dwell_time_ms,
        created_at=now or datetime.now(timezone.utc),
        profile_snapshot=build_profile_snapshot(profile),
    )

    updated = [*history, view][-limit:]

    dropped = len(history) + 1 - len(updated)
    if dropped:
        logger.debug(
            "View history for %s trimmed by %d (limit=%d)", viewer_id[:8], dropped, limit,
        )

    return updated


# ======================================================================
# Conversation metrics
# ======================================================================

def _connection_quality(sent: int, received: int) -> str:
    for minimum, quality in _CONNECTION_QUALITY_TIERS:
        if sent > minimum and received > minimum:
            return quality
    return "cold"


def compute_conversation_metrics(
    user_id: str,
    thread_id: str,
    other_user_id: str,
    messages: list[Message],
    existing: Optional[ConversationMetrics] = None,
    *,
    now: Optional[datetime] = None,
) -> ConversationMetrics:
    """
    Summarize one chat thread from the user's point of view.

    Response time averages the gaps where the user replied to the other
    person's message. Streak, met-in-person and created_at are carried
    over from ``existing``.
    """
    now = now or datetime.now(timezone.utc)

    thread = sorted(
        (m for m in messages if m.thread_id == thread_id),
        key=lambda m: m.created_at,
    )
    mine = [m for m in thread if m.sender_id == user_id]
    theirs = [m for m in thread if m.sender_id == other_user_id]

    response_gaps = [
        (current.created_at - previous.created_at).total_seconds() * 1000
        for previous, current in zip(thread, thread[1:])
        if previous.sender_id != current.sender_id and current.sender_id == user_id
    ]
    avg_response_time_ms = sum(response_gaps) / len(response_gaps) if response_gaps else 0.0

    avg_message_length = (
        sum(len(m.content or "") for m in mine) / len(mine) if mine else 0.0
    )

    return ConversationMetrics(
        thread_id=thread_id,
        user_id=user_id,
        other_user_id=other_user_id,
        messages_sent=len(mine),
        messages_received=len(theirs),
        avg_response_time_ms=avg_response_time_ms,
        avg_message_length=avg_message_length,
        longest_streak_days=existing.longest_streak_days if existing else 0,
        last_active_at=thread[-1].created_at if thread else now,
        met_in_person=existing.met_in_person if existing else False,
        connection_quality=_connection_quality(len(mine), len(theirs)),
        created_at=existing.created_at if existing and existing.created_at else now,
        updated_at=now,
    )


def upsert_conversation_metrics(
    metrics: list[ConversationMetrics],
    updated: ConversationMetrics,
) -> list[ConversationMetrics]:
    """Return a new list with ``updated`` replacing its thread's entry, or appended."""
    if any(m.thread_id == updated.thread_id for m in metrics):
        return [updated if m.thread_id == updated.thread_id else m for m in metrics]
    return [*metrics, updated]
