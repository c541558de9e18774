import pytest

from scriptreel.services.infrastructure.storage import reset_document_store
from scriptreel.services.llm import clear_provider_cache
from scriptreel.services.video_lifecycle import reset_lifecycle_controller


@pytest.fixture(autouse=True)
def app_env(monkeypatch, tmp_path):
    """Isolate every test: own store directory, known credentials, fresh singletons."""
    monkeypatch.setenv("HEYGEN_API_KEY", "test-heygen-key")
    monkeypatch.setenv("AUTH_SECRET", "test-secret")
    monkeypatch.setenv("AUTH_ENABLED", "true")
    monkeypatch.setenv("STORE_DATA_DIR", str(tmp_path / "store"))
    monkeypatch.delenv("HEYGEN_API_BASE", raising=False)
    monkeypatch.delenv("HEYGEN_DEFAULT_AVATAR_ID", raising=False)
    monkeypatch.delenv("HEYGEN_DEFAULT_VOICE_ID", raising=False)
    reset_document_store()
    reset_lifecycle_controller()
    clear_provider_cache()
    yield
    reset_document_store()
    reset_lifecycle_controller()
    clear_provider_cache()


class FakeClock:
    """Clock that never sleeps; records every requested delay."""

    def __init__(self):
        self.sleeps = []
        self.on_sleep = None

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(len(self.sleeps))


class FakeHeyGenClient:
    """In-memory stand-in for HeyGenClient.

    ``statuses`` is consumed one entry per status check; the last entry repeats
    once the list is exhausted. Entries that are exceptions are raised.
    """

    def __init__(self):
        self.configured = True
        self.video_id = "vid_123"
        self.create_error = None
        self.created = []
        self.statuses = []
        self.status_calls = []
        self.on_status = None

    def ensure_configured(self):
        from scriptreel.core import ConfigurationError

        if not self.configured:
            raise ConfigurationError("HeyGen API key not configured (set HEYGEN_API_KEY)")
        return "fake-key"

    async def create_video(self, payload):
        self.ensure_configured()
        self.created.append(payload)
        if self.create_error is not None:
            raise self.create_error
        return self.video_id

    async def get_status(self, video_id):
        self.status_calls.append(video_id)
        if self.on_status is not None:
            self.on_status(len(self.status_calls))
        item = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        if isinstance(item, Exception):
            raise item
        return item


def make_status(status, video_url=None, thumbnail_url=None, error=None, video_id="vid_123"):
    from scriptreel.models.status import ProviderStatus
    from scriptreel.services.infrastructure.heygen import VideoStatus

    return VideoStatus(
        video_id=video_id,
        status=ProviderStatus.parse(status),
        raw_status=status,
        video_url=video_url,
        thumbnail_url=thumbnail_url,
        error=error,
    )


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_heygen():
    return FakeHeyGenClient()


@pytest.fixture
def provider_status():
    """Factory for provider status check results."""
    return make_status
