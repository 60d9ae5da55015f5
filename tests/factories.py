"""
Shared test data factories for the matching core tests.

Each factory returns a complete model with sensible defaults; override any
field via kwargs.
"""

import uuid
from datetime import datetime, timedelta, timezone

from blend_matching.models.profile import (
    ConversationMetrics,
    Profile,
    ProfileSnapshot,
    ProfileView,
    PromptResponse,
    QuizResult,
    QuizScores,
)
from blend_matching.models.taste import AttractionPatterns, UserTasteProfile

# Sunday, 10 March 2024, 09:00 UTC
BASE_TIME = datetime(2024, 3, 10, 9, 0, tzinfo=timezone.utc)


def make_profile(**overrides) -> Profile:
    data = {
        "id": f"profile-{uuid.uuid4().hex[:8]}",
        "user_id": "user-test",
        "display_name": "Sam",
        "age": 30,
        "city": "Portland",
        "bio": "",
        "photos": [],
        "intent_ids": [],
        "prompt_responses": [],
    }
    data.update(overrides)
    return Profile(**data)


def make_prompt(prompt_text: str = "My ideal Sunday", response_text: str = "Slow coffee") -> PromptResponse:
    return PromptResponse(prompt_text=prompt_text, response_text=response_text)


def make_quiz(**scores) -> QuizResult:
    values = {
        "communication_style": 3,
        "jealousy_management": 3,
        "time_management": 3,
        "hierarchy_preference": 3,
        "disclosure_level": 3,
        "boundary_firmness": 3,
    }
    values.update(scores)
    return QuizResult(scores=QuizScores(**values))


def make_view(
    action: str = "view",
    minutes: float = 0,
    profile_id: str = "profile-x",
    snapshot: ProfileSnapshot | None = None,
    **overrides,
) -> ProfileView:
    data = {
        "id": f"view-{uuid.uuid4().hex[:8]}",
        "viewer_id": "user-test",
        "viewed_profile_id": profile_id,
        "action": action,
        "dwell_time_ms": 4000,
        "created_at": BASE_TIME + timedelta(minutes=minutes),
        "profile_snapshot": snapshot,
    }
    data.update(overrides)
    return ProfileView(**data)


def make_conversation(**overrides) -> ConversationMetrics:
    data = {
        "thread_id": f"thread-{uuid.uuid4().hex[:8]}",
        "user_id": "user-test",
        "other_user_id": "user-other",
        "messages_sent": 5,
        "messages_received": 5,
        "avg_response_time_ms": 60 * 60000,
        "avg_message_length": 100,
    }
    data.update(overrides)
    return ConversationMetrics(**data)


def make_taste_profile(confidence: float = 0.5, **pattern_overrides) -> UserTasteProfile:
    return UserTasteProfile(
        user_id="user-test",
        attraction_patterns=AttractionPatterns(**pattern_overrides),
        confidence_score=confidence,
        created_at=BASE_TIME,
        updated_at=BASE_TIME,
    )
