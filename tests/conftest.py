"""
Configuration for pytest tests.
"""

import os
import pytest

# Set before the application config is imported; tests never hit the real API.
os.environ["API_KEY"] = "test_api_key"
os.environ["ENVIRONMENT"] = "development"

from video_analyzer.config import config  # noqa: E402
from video_analyzer.models.schemas import ChatMessage, Role  # noqa: E402


class FakeRemote:
    """Remote chat client double recording every call."""

    model = "fake-model"

    def __init__(self, summary="**Main Topic:** Testing", replies=None, start_error=None, chat_error=None):
        self.summary = summary
        self.replies = list(replies or ["This is a test reply."])
        self.start_error = start_error
        self.chat_error = chat_error
        self.started = []
        self.sent = []

    async def start_conversation(self, video_url):
        self.started.append(video_url)
        if self.start_error:
            raise self.start_error
        return self.summary, f"handle-{len(self.started)}"

    async def continue_conversation(self, handle, message):
        self.sent.append((handle, message))
        if self.chat_error:
            raise self.chat_error
        return self.replies.pop(0)


@pytest.fixture(autouse=True)
def _set_dummy_api_key(monkeypatch):
    """Ensure every test sees a configured key unless it removes it."""
    monkeypatch.setattr(config, "API_KEY", "test_api_key")


@pytest.fixture
def fake_remote():
    """Return a remote chat client that always succeeds."""
    return FakeRemote()


@pytest.fixture
def test_video_url():
    """Return a test YouTube video URL."""
    return "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


@pytest.fixture
def sample_transcript():
    """Return a two-message chat transcript."""
    return (
        ChatMessage(role=Role.USER, text="What is the song about?"),
        ChatMessage(role=Role.MODEL, text="Never giving you up."),
    )


@pytest.fixture
def remote_factory():
    """Return the FakeRemote class for tests that need failing remotes."""
    return FakeRemote
