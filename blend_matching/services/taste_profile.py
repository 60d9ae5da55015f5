"""
Taste Profile Service — learns a user's implicit preferences from behavior.

The builder:
1. Reads the user's liked profiles (like / super_like) to learn attraction
   patterns: age range, bio length, photos, structures, intents, keywords,
   pace and response style
2. Splits the view history into sessions (gap > 30 minutes starts a new one)
   to learn browsing rhythm and like rate
3. Summarizes conversation metrics into messaging style
4. Derives a confidence score from data volume (a conversation counts as
   5 views)

Thresholds are hard gates: fewer than 5 likes returns the default
attraction patterns, fewer than 10 views returns the default behavioral
patterns. Profiles are always rebuilt from the full history; there is no
incremental update.
"""

import logging
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel

from blend_matching.core.rounding import round_half_up, round_to_hundredths
from blend_matching.matching.vocabulary import (
    TASTE_ACTIVITY_KEYWORDS,
    TASTE_COMMUNICATION_KEYWORDS,
    TASTE_VALUE_KEYWORDS,
)
from blend_matching.models.profile import (
    ConversationMetrics,
    Profile,
    ProfileView,
)
from blend_matching.models.taste import (
    AttractionPatterns,
    BehavioralPatterns,
    TasteMatch,
    UserTasteProfile,
)

logger = logging.getLogger(__name__)

# --- Thresholds ---
MIN_LIKES_FOR_ATTRACTION = 5
MIN_VIEWS_FOR_BEHAVIOR = 10
MIN_TASTE_CONFIDENCE = 0.3
CONVERSATION_SIGNAL_WEIGHT = 5   # one conversation counts as 5 views
FULL_CONFIDENCE_DATA_POINTS = 100
SESSION_GAP = timedelta(minutes=30)

LIKE_ACTIONS = ("like", "super_like")

# Expected bio length per bucket for taste matching
_BIO_LENGTH_TARGETS: dict[str, int] = {"short": 100, "medium": 200, "long": 400}

DEFAULT_TASTE_PROFILE = UserTasteProfile(
    user_id="",
    attraction_patterns=AttractionPatterns(),
    behavioral_patterns=BehavioralPatterns(),
    created_at=datetime.now(timezone.utc),
    updated_at=datetime.now(timezone.utc),
)


# ======================================================================
# Liked profile signals
# ======================================================================

class _LikedSignal(BaseModel):
    """Profile fields read from a liked profile, or from the view's snapshot."""

    age: int
    bio: str = ""
    bio_length: int = 0
    photo_count: int = 0
    has_voice_intro: bool = False
    intent_ids: list[str] = []
    pace_preference: str = "medium"
    response_style: str = "relaxed"


def _liked_signal(view: ProfileView, profiles_by_id: dict[str, Profile]) -> Optional[_LikedSignal]:
    profile = profiles_by_id.get(view.viewed_profile_id)
    if profile is not None:
        return _LikedSignal(
            age=profile.age,
            bio=profile.bio or "",
            bio_length=len(profile.bio or ""),
            photo_count=len(profile.photos),
            has_voice_intro=bool(profile.voice_intro_url),
            intent_ids=list(profile.intent_ids),
            pace_preference=profile.pace_preference,
            response_style=profile.response_style,
        )

    snapshot = view.profile_snapshot
    if snapshot is not None:
        return _LikedSignal(
            age=snapshot.age,
            bio_length=snapshot.bio_length,
            photo_count=snapshot.photo_count,
            has_voice_intro=snapshot.has_voice_intro,
            intent_ids=list(snapshot.intent_ids),
            pace_preference=snapshot.pace_preference,
            response_style=snapshot.response_style,
        )

    return None


def _mean(values: list[float]) -> float:
    return sum(values) / max(len(values), 1)


def _majority(values: list[str], options: tuple[str, ...], default: str) -> str:
    """Most common option, or ``default`` on a tie at the top or with no data."""
    counts = Counter(v for v in values if v in options)
    ranked = counts.most_common(2)
    if not ranked:
        return default
    if len(ranked) > 1 and ranked[0][1] == ranked[1][1]:
        return default
    return ranked[0][0]


def _top_by_frequency(items: list[str], limit: int) -> list[str]:
    """Most frequent items; ties keep first-seen order."""
    return [item for item, _ in Counter(items).most_common(limit)]


def _extract_top_keywords(text: str, keywords: list[str], limit: int = 5) -> list[str]:
    return [kw for kw in keywords if kw in text][:limit]


# ======================================================================
# Attraction patterns
# ======================================================================

def analyze_attraction_patterns(
    views: list[ProfileView],
    profiles_by_id: dict[str, Profile],
) -> AttractionPatterns:
    """
    Learn what the user is attracted to from their like/super_like history.

    Args:
        views: The user's profile view history.
        profiles_by_id: Live profiles keyed by id. Views whose profile is
                        missing fall back to their snapshot.

    Returns:
        AttractionPatterns. Fewer than 5 likes returns a copy of
        DEFAULT_TASTE_PROFILE.attraction_patterns.
    """
    default = DEFAULT_TASTE_PROFILE.attraction_patterns.model_copy(deep=True)

    liked_views = [v for v in views if v.action in LIKE_ACTIONS]
    if len(liked_views) < MIN_LIKES_FOR_ATTRACTION:
        return default

    liked: list[_LikedSignal] = []
    for view in liked_views:
        signal = _liked_signal(view, profiles_by_id)
        if signal is not None:
            liked.append(signal)

    if not liked:
        logger.warning(
            "None of %d liked profiles could be resolved, using default attraction patterns",
            len(liked_views),
        )
        return default

    # --- Age ---
    ages = [s.age for s in liked if s.age > 0]
    avg_age = _mean(ages) if ages else 30
    min_age = min(ages) if ages else 21
    max_age = max(ages) if ages else 55

    # --- Bio length ---
    avg_bio_length = _mean([s.bio_length for s in liked])
    if avg_bio_length < 100:
        bio_preference = "short"
    elif avg_bio_length < 300:
        bio_preference = "medium"
    else:
        bio_preference = "long"

    # --- Photos and voice ---
    avg_photo_count = _mean([s.photo_count for s in liked])
    with_voice = sum(1 for s in liked if s.has_voice_intro)
    prefers_voice = with_voice / len(liked) > 0.5

    # --- Relationship structures (snapshot first, live profile as fallback) ---
    structures: list[str] = []
    for view in liked_views:
        structure = None
        if view.profile_snapshot is not None:
            structure = view.profile_snapshot.relationship_structure
        if structure is None and view.viewed_profile_id in profiles_by_id:
            structure = profiles_by_id[view.viewed_profile_id].relationship_structure
        if structure:
            structures.append(structure)

    # --- Intents ---
    intents = [intent for s in liked for intent in s.intent_ids]

    # --- Keywords from liked bios ---
    all_bio_text = " ".join(s.bio.lower() for s in liked)

    patterns = AttractionPatterns(
        preferred_age_range=(max(18, min_age - 2), max_age + 2),
        avg_liked_age=round_half_up(avg_age),
        bio_length_preference=bio_preference,
        preferred_photo_count=round_half_up(avg_photo_count),
        prefers_voice_intros=prefers_voice,
        preferred_relationship_structures=_top_by_frequency(structures, 3),
        preferred_intents=_top_by_frequency(intents, 4),
        values_keywords=_extract_top_keywords(all_bio_text, TASTE_VALUE_KEYWORDS),
        activity_keywords=_extract_top_keywords(all_bio_text, TASTE_ACTIVITY_KEYWORDS),
        communication_keywords=_extract_top_keywords(all_bio_text, TASTE_COMMUNICATION_KEYWORDS),
        preferred_pace=_majority(
            [s.pace_preference for s in liked], ("slow", "medium", "fast"), "medium",
        ),
        preferred_response_style=_majority(
            [s.response_style for s in liked], ("quick", "relaxed"), "relaxed",
        ),
    )

    logger.debug(
        "Attraction patterns from %d likes (%d resolved): ages=%s, intents=%s, pace=%s",
        len(liked_views), len(liked), patterns.preferred_age_range,
        patterns.preferred_intents, patterns.preferred_pace,
    )

    return patterns


# ======================================================================
# Behavioral patterns
# ======================================================================

def group_into_sessions(
    views: list[ProfileView],
    max_gap: timedelta = SESSION_GAP,
) -> list[list[ProfileView]]:
    """
    Split views into sessions ordered by time.

    A session is a maximal run of views whose consecutive gaps are all
    <= ``max_gap``.
    """
    if not views:
        return []

    ordered = sorted(views, key=lambda v: v.created_at)
    sessions: list[list[ProfileView]] = [[ordered[0]]]

    for previous, current in zip(ordered, ordered[1:]):
        if current.created_at - previous.created_at > max_gap:
            sessions.append([current])
        else:
            sessions[-1].append(current)

    return sessions


def _day_index(moment: datetime) -> int:
    """Weekday with Sunday as 0."""
    return moment.isoweekday() % 7


def analyze_behavioral_patterns(
    views: list[ProfileView],
    conversations: list[ConversationMetrics],
) -> BehavioralPatterns:
    """
    Learn browsing and messaging habits.

    Args:
        views: The user's profile view history.
        conversations: Per-thread conversation metrics.

    Returns:
        BehavioralPatterns. Fewer than 10 views returns a copy of
        DEFAULT_TASTE_PROFILE.behavioral_patterns.
    """
    if len(views) < MIN_VIEWS_FOR_BEHAVIOR:
        return DEFAULT_TASTE_PROFILE.behavioral_patterns.model_copy(deep=True)

    sessions = group_into_sessions(views)

    # --- Activity rhythm ---
    durations = [
        (session[-1].created_at - session[0].created_at).total_seconds() / 60
        for session in sessions
    ]
    avg_session_duration = _mean(durations)

    hour_counts = Counter(v.created_at.hour for v in views)
    typical_hours = [
        hour for hour, _ in sorted(hour_counts.items(), key=lambda item: (-item[1], item[0]))
    ][:4]

    day_counts = Counter(_day_index(v.created_at) for v in views)
    most_active_day = min(day_counts, key=lambda day: (-day_counts[day], day))

    unique_days = len({v.created_at.date() for v in views})

    likes = sum(1 for v in views if v.action in LIKE_ACTIONS)
    like_rate = likes / max(len(views), 1)

    patterns = BehavioralPatterns(
        avg_daily_sessions=round_to_hundredths(len(sessions) / max(unique_days, 1)),
        avg_session_duration_mins=round_half_up(avg_session_duration),
        typical_active_hours=typical_hours,
        most_active_day=most_active_day,
        avg_profiles_viewed_per_session=round_half_up(len(views) / max(len(sessions), 1)),
        like_rate=round_to_hundredths(like_rate),
    )

    # --- Messaging style ---
    if conversations:
        initiation_rates = []
        for conversation in conversations:
            total = conversation.messages_sent + conversation.messages_received
            initiation_rates.append(conversation.messages_sent / total if total > 0 else 0.5)

        avg_message_length = _mean([c.avg_message_length for c in conversations])
        if avg_message_length < 50:
            message_style = "concise"
        elif avg_message_length > 150:
            message_style = "verbose"
        else:
            message_style = "balanced"

        avg_response_time = _mean([c.avg_response_time_ms for c in conversations]) / 60000
        if avg_response_time < 30:
            response_speed = "fast"
        elif avg_response_time > 120:
            response_speed = "slow"
        else:
            response_speed = "moderate"

        patterns = patterns.model_copy(update={
            "message_initiation_rate": round_to_hundredths(_mean(initiation_rates)),
            "message_style": message_style,
            "avg_message_length": round_half_up(avg_message_length),
            "response_speed": response_speed,
            "avg_response_time_mins": round_half_up(avg_response_time),
        })

    return patterns


# ======================================================================
# Builder
# ======================================================================

def compute_confidence(view_count: int, conversation_count: int) -> float:
    """min((views + conversations × 5) / 100, 1), rounded to 2 decimals."""
    data_points = view_count + conversation_count * CONVERSATION_SIGNAL_WEIGHT
    return round_to_hundredths(min(data_points / FULL_CONFIDENCE_DATA_POINTS, 1.0))


def build_taste_profile(
    user_id: str,
    views: list[ProfileView],
    profiles_by_id: dict[str, Profile],
    conversations: list[ConversationMetrics],
    existing: Optional[UserTasteProfile] = None,
    *,
    now: Optional[datetime] = None,
) -> UserTasteProfile:
    """
    Rebuild a user's taste profile from their full history.

    Args:
        user_id: The user the profile belongs to.
        views: Every profile view the caller retains for the user.
        profiles_by_id: Live profiles keyed by id.
        conversations: The user's conversation metrics.
        existing: The previous taste profile, if any. Only its created_at
                  is carried over.
        now: Timestamp for updated_at (defaults to the current UTC time).

    Returns:
        A freshly computed UserTasteProfile.
    """
    now = now or datetime.now(timezone.utc)

    likes = [v for v in views if v.action in LIKE_ACTIONS]
    passes = [v for v in views if v.action == "pass"]
    matches = [v for v in views if v.action == "message"]

    taste = UserTasteProfile(
        user_id=user_id,
        attraction_patterns=analyze_attraction_patterns(views, profiles_by_id),
        behavioral_patterns=analyze_behavioral_patterns(views, conversations),
        total_profiles_viewed=len(views),
        total_likes=len(likes),
        total_passes=len(passes),
        total_matches=len(matches),
        total_conversations=len(conversations),
        successful_connections=sum(1 for c in conversations if c.met_in_person),
        confidence_score=compute_confidence(len(views), len(conversations)),
        created_at=existing.created_at if existing is not None else now,
        updated_at=now,
    )

    logger.info(
        "Built taste profile for user %s: views=%d, likes=%d, conversations=%d, confidence=%.2f",
        user_id[:8], len(views), len(likes), len(conversations), taste.confidence_score,
    )

    return taste


# ======================================================================
# Matching against a taste profile
# ======================================================================

def matches_taste_profile(profile: Profile, taste: UserTasteProfile) -> TasteMatch:
    """
    Check how well a profile fits the user's learned taste.

    Below MIN_TASTE_CONFIDENCE every profile matches with a neutral 50, so
    sparse data never blocks a candidate. Otherwise the score starts at 50:
    +10 age in range, +8 per preferred intent, +10 pace, +10 response style,
    +5 bio length within 100 characters of the preferred bucket. A score of
    60 or more is a match.
    """
    if taste.confidence_score < MIN_TASTE_CONFIDENCE:
        return TasteMatch(matches=True, score=50, reasons=["Not enough data for taste matching"])

    score = 50
    reasons: list[str] = []
    patterns = taste.attraction_patterns

    low, high = patterns.preferred_age_range
    if low <= profile.age <= high:
        score += 10
        reasons.append("Age is in your preferred range")

    matched_intents = [i for i in profile.intent_ids if i in patterns.preferred_intents]
    if matched_intents:
        score += len(matched_intents) * 8
        reasons.append(f"Shares {len(matched_intents)} intent(s) you typically like")

    if profile.pace_preference == patterns.preferred_pace:
        score += 10
        reasons.append("Matches your preferred dating pace")

    if profile.response_style == patterns.preferred_response_style:
        score += 10
        reasons.append("Has your preferred communication style")

    expected_length = _BIO_LENGTH_TARGETS.get(patterns.bio_length_preference, 200)
    if abs(len(profile.bio or "") - expected_length) < 100:
        score += 5

    return TasteMatch(matches=score >= 60, score=min(score, 100), reasons=reasons)
