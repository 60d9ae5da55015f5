"""
Matching Configuration

Loads environment variables and provides typed settings
for the matching core. Uses python-dotenv to load from .env file.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from the project root
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)

# --- App Settings ---
PROJECT_NAME = "Blend Matching"

# --- Behavior tracking ---
# Rolling window of profile views kept by record_profile_view (newest N)
PROFILE_VIEW_HISTORY_LIMIT_RAW: str = os.getenv("PROFILE_VIEW_HISTORY_LIMIT", "500")


def _parse_history_limit(raw: str) -> int | None:
    """Parse the history limit, returning None when it is not a positive integer."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


PROFILE_VIEW_HISTORY_LIMIT: int = _parse_history_limit(PROFILE_VIEW_HISTORY_LIMIT_RAW) or 500


def validate_matching_config() -> bool:
    """Check that the matching settings in the environment are usable."""
    if _parse_history_limit(PROFILE_VIEW_HISTORY_LIMIT_RAW) is None:
        raise EnvironmentError(
            "PROFILE_VIEW_HISTORY_LIMIT must be a positive integer, "
            f"got {PROFILE_VIEW_HISTORY_LIMIT_RAW!r}. "
            f"Please fix your .env file at: {_env_path}"
        )
    return True
