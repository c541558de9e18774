"""
Tests for environment-driven settings.
"""

from scriptreel.config import (
    DEFAULT_AVATAR_ID,
    HEYGEN_API_BASE,
    PollSettings,
    get_default_avatar_id,
    get_heygen_api_base,
    get_heygen_api_key,
    get_videos_page_size,
)


class TestPollSettings:
    def test_defaults(self, monkeypatch):
        for name in ("VIDEO_POLL_INITIAL_DELAY_SECONDS", "VIDEO_POLL_INTERVAL_SECONDS", "VIDEO_POLL_MAX_ATTEMPTS"):
            monkeypatch.delenv(name, raising=False)
        settings = PollSettings.from_env()
        assert settings.initial_delay == 3.0
        assert settings.interval == 5.0
        assert settings.max_attempts == 60

    def test_overrides_and_bounds(self, monkeypatch):
        monkeypatch.setenv("VIDEO_POLL_INTERVAL_SECONDS", "2.5")
        monkeypatch.setenv("VIDEO_POLL_MAX_ATTEMPTS", "0")
        monkeypatch.setenv("VIDEO_POLL_INITIAL_DELAY_SECONDS", "soon")
        settings = PollSettings.from_env()
        assert settings.interval == 2.5
        assert settings.max_attempts == 1
        assert settings.initial_delay == 3.0


class TestProviderSettings:
    def test_blank_key_is_missing(self, monkeypatch):
        monkeypatch.setenv("HEYGEN_API_KEY", "   ")
        assert get_heygen_api_key() is None

    def test_base_url_default_and_trailing_slash(self, monkeypatch):
        assert get_heygen_api_base() == HEYGEN_API_BASE
        monkeypatch.setenv("HEYGEN_API_BASE", "https://proxy.test/v2/")
        assert get_heygen_api_base() == "https://proxy.test/v2"

    def test_default_avatar(self):
        assert get_default_avatar_id() == DEFAULT_AVATAR_ID

    def test_page_size(self, monkeypatch):
        monkeypatch.delenv("VIDEOS_PAGE_SIZE", raising=False)
        assert get_videos_page_size() == 12
