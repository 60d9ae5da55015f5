"""
Matching Configuration Tests

Tests that:
1. PROFILE_VIEW_HISTORY_LIMIT defaults to 500 and reads the environment
2. validate_matching_config() rejects a non-positive or non-numeric limit

Run with: pytest tests/test_config.py -v
"""

import importlib

import pytest

from blend_matching.core import config

_ENV_VARS = ("PROFILE_VIEW_HISTORY_LIMIT",)


@pytest.fixture
def reload_config(monkeypatch):
    """Reload the config module under a patched environment, then restore it."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    def _reload(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    importlib.reload(config)


# ======================================================================
# 1. History limit
# ======================================================================

class TestHistoryLimit:
    """Verify PROFILE_VIEW_HISTORY_LIMIT parsing."""

    def test_default(self, reload_config):
        settings = reload_config()
        assert settings.PROFILE_VIEW_HISTORY_LIMIT == 500
        assert settings.validate_matching_config() is True

    def test_from_environment(self, reload_config):
        settings = reload_config(PROFILE_VIEW_HISTORY_LIMIT="25")
        assert settings.PROFILE_VIEW_HISTORY_LIMIT == 25
        assert settings.validate_matching_config() is True

    @pytest.mark.parametrize("raw", ["abc", "0", "-5", "1.5"])
    def test_invalid_value_falls_back_and_fails_validation(self, reload_config, raw):
        settings = reload_config(PROFILE_VIEW_HISTORY_LIMIT=raw)
        assert settings.PROFILE_VIEW_HISTORY_LIMIT == 500
        with pytest.raises(EnvironmentError, match="PROFILE_VIEW_HISTORY_LIMIT"):
            settings.validate_matching_config()
