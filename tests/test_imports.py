"""
Import Test Script

Tests that the matching core and its dependencies are installed and importable.
Run with: pytest tests/test_imports.py -v
"""


def test_pydantic():
    """Pydantic — Data validation."""
    from pydantic import BaseModel
    assert BaseModel is not None
    import pydantic
    print(f"  pydantic {pydantic.__version__}")


def test_python_dotenv():
    """python-dotenv — Environment variable management."""
    from dotenv import load_dotenv
    assert load_dotenv is not None


def test_matching_modules():
    """Every public entry point resolves."""
    from blend_matching.matching.compatibility import (
        calculate_compatibility,
        quick_compatibility_score,
    )
    from blend_matching.matching.insights import generate_match_insights, get_match_reason
    from blend_matching.matching.ranking import rank_profiles_by_compatibility
    from blend_matching.matching.text_analyzer import (
        analyze_profile,
        analyze_profile_compatibility,
    )
    from blend_matching.services.activity_tracker import (
        compute_conversation_metrics,
        record_profile_view,
    )
    from blend_matching.services.taste_profile import (
        build_taste_profile,
        matches_taste_profile,
    )

    for fn in (
        calculate_compatibility, quick_compatibility_score,
        generate_match_insights, get_match_reason,
        rank_profiles_by_compatibility,
        analyze_profile, analyze_profile_compatibility,
        compute_conversation_metrics, record_profile_view,
        build_taste_profile, matches_taste_profile,
    ):
        assert callable(fn)


def test_config():
    """Config module loads with defaults."""
    from blend_matching.core import config
    assert config.PROJECT_NAME == "Blend Matching"
    assert config.PROFILE_VIEW_HISTORY_LIMIT > 0
