"""
Match Ranker — orders a candidate pool for one user.

Uses the quick compatibility score so that large pools never pay for the
full six-dimension breakdown. The ranking score is always the quick score.
"""

import logging
from typing import Optional

from blend_matching.matching.compatibility import quick_compatibility_score
from blend_matching.models.compatibility import RankedProfile
from blend_matching.models.profile import Profile
from blend_matching.models.taste import UserTasteProfile

logger = logging.getLogger(__name__)


def rank_profiles_by_compatibility(
    user: Profile,
    candidates: list[Profile],
    taste_profile: Optional[UserTasteProfile] = None,
) -> list[RankedProfile]:
    """
    Score and sort candidates, best first.

    Sorting is stable: candidates with equal scores keep their input order.

    Args:
        user: The viewing user's profile.
        candidates: The pool to rank.
        taste_profile: Accepted for call-site compatibility. It does not
                       affect the order or the scores; taste is applied
                       through calculate_compatibility's behavioral
                       dimension instead.

    Returns:
        A list of RankedProfile with non-increasing quick scores.
    """
    ranked = [
        RankedProfile(profile=candidate, score=quick_compatibility_score(user, candidate))
        for candidate in candidates
    ]
    ranked.sort(key=lambda r: -r.score)

    logger.info(
        "Ranked %d candidates for %s. Top: %s (%s)",
        len(ranked), user.id,
        ranked[0].profile.id if ranked else "N/A",
        ranked[0].score if ranked else "N/A",
    )

    return ranked
