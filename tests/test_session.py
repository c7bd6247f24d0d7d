"""
Tests for the session controller.
"""

import asyncio

import pytest

from video_analyzer.core.errors import ERROR_MESSAGES, ErrorCategory, RemoteCallError
from video_analyzer.core.session import SessionController
from video_analyzer.models.schemas import ChatMessage, Role, SessionState


@pytest.mark.asyncio
async def test_submit_valid_url(fake_remote, test_video_url):
    """Test a successful summary request."""
    controller = SessionController(fake_remote)
    state = await controller.submit_url(test_video_url)

    assert fake_remote.started == [test_video_url]
    assert state.video_url == test_video_url
    assert state.video_id == "dQw4w9WgXcQ"
    assert state.summary == "**Main Topic:** Testing"
    assert state.is_summarizing is False
    assert state.error is None
    assert controller.has_conversation


@pytest.mark.asyncio
async def test_submit_invalid_url_makes_no_call(fake_remote):
    """Test an invalid URL sets the error without any network call."""
    controller = SessionController(fake_remote)
    state = await controller.submit_url("not a url")

    assert fake_remote.started == []
    assert state.error == ERROR_MESSAGES[ErrorCategory.INVALID_URL]
    assert state.error.startswith("Invalid YouTube URL")
    assert state.video_id is None
    assert state.summary is None
    assert not controller.has_conversation


@pytest.mark.asyncio
async def test_summary_failure(remote_factory, test_video_url):
    """Test a failed summary request keeps the summary empty and sets an error."""
    remote = remote_factory(start_error=Exception("API key not valid. Please pass a valid API key."))
    controller = SessionController(remote)
    state = await controller.submit_url(test_video_url)

    assert state.summary is None
    assert state.is_summarizing is False
    assert state.error.startswith("Authentication Error: ")
    assert not controller.has_conversation


@pytest.mark.asyncio
async def test_loading_flag_set_while_summarizing(test_video_url):
    """Test the summarizing flag is visible while the request is in flight."""
    release = asyncio.Event()
    seen = []

    class SlowRemote:
        async def start_conversation(self, video_url):
            seen.append(controller.state.is_summarizing)
            await release.wait()
            return "summary", "handle"

    controller = SessionController(SlowRemote())
    task = asyncio.create_task(controller.submit_url(test_video_url))
    await asyncio.sleep(0)
    release.set()
    state = await task

    assert seen == [True]
    assert state.is_summarizing is False


@pytest.mark.asyncio
async def test_new_submission_clears_previous_session(fake_remote, test_video_url):
    """Test submitting a URL resets the summary, transcript and error."""
    controller = SessionController(fake_remote)
    await controller.submit_url(test_video_url)
    await controller.send_message("Who sings this?")
    assert len(controller.state.transcript) == 2

    state = await controller.submit_url("https://youtu.be/a-b_c-d_e-f")

    assert state.transcript == ()
    assert state.video_id == "a-b_c-d_e-f"
    assert state.error is None


@pytest.mark.asyncio
async def test_invalid_url_discards_conversation(fake_remote, test_video_url):
    """Test an invalid URL after a valid one leaves no conversation to chat on."""
    controller = SessionController(fake_remote)
    await controller.submit_url(test_video_url)
    await controller.submit_url("not a url")

    state = await controller.send_message("Still there?")

    assert fake_remote.sent == []
    assert state.transcript == ()


@pytest.mark.asyncio
async def test_chat_without_conversation_is_noop(fake_remote):
    """Test chatting before a summary exists changes nothing."""
    controller = SessionController(fake_remote)
    before = controller.state
    state = await controller.send_message("Hello?")

    assert state == before
    assert state.transcript == ()
    assert fake_remote.sent == []


@pytest.mark.asyncio
async def test_blank_message_is_noop(fake_remote, test_video_url):
    """Test whitespace-only messages are ignored."""
    controller = SessionController(fake_remote)
    await controller.submit_url(test_video_url)
    state = await controller.send_message("   ")

    assert state.transcript == ()
    assert fake_remote.sent == []


@pytest.mark.asyncio
async def test_chat_success_appends_turn(remote_factory, test_video_url):
    """Test a successful chat turn appends the user message and the reply."""
    remote = remote_factory(replies=["It is about commitment."])
    controller = SessionController(remote)
    await controller.submit_url(test_video_url)
    state = await controller.send_message("What is it about?")

    assert remote.sent == [("handle-1", "What is it about?")]
    assert state.transcript == (
        ChatMessage(role=Role.USER, text="What is it about?"),
        ChatMessage(role=Role.MODEL, text="It is about commitment."),
    )
    assert state.is_chatting is False
    assert state.error is None


@pytest.mark.asyncio
async def test_chat_failure_rolls_back(remote_factory, test_video_url):
    """Test a failed chat turn removes the optimistic user message."""
    remote = remote_factory(replies=["First answer."])
    controller = SessionController(remote)
    await controller.submit_url(test_video_url)
    await controller.send_message("First question")
    length_before = len(controller.state.transcript)

    remote.chat_error = Exception("429 RESOURCE_EXHAUSTED: You exceeded your current quota")
    state = await controller.send_message("Second question")

    assert len(state.transcript) == length_before
    assert state.transcript[-1] == ChatMessage(role=Role.MODEL, text="First answer.")
    assert state.is_chatting is False
    assert state.error == ERROR_MESSAGES[ErrorCategory.QUOTA_EXCEEDED]


@pytest.mark.asyncio
async def test_user_message_visible_while_chatting(test_video_url):
    """Test the user message is appended before the reply arrives."""
    release = asyncio.Event()
    seen = []

    class SlowRemote:
        async def start_conversation(self, video_url):
            return "summary", "handle"

        async def continue_conversation(self, handle, message):
            seen.append((controller.state.is_chatting, controller.state.transcript))
            await release.wait()
            return "reply"

    controller = SessionController(SlowRemote())
    await controller.submit_url(test_video_url)
    task = asyncio.create_task(controller.send_message("question"))
    await asyncio.sleep(0)
    release.set()
    await task

    assert seen == [(True, (ChatMessage(role=Role.USER, text="question"),))]


@pytest.mark.asyncio
async def test_successful_chat_clears_previous_error(remote_factory, test_video_url):
    """Test the banner is cleared by the next chat attempt."""
    remote = remote_factory(replies=["ok"], chat_error=Exception("The request timed out"))
    controller = SessionController(remote)
    await controller.submit_url(test_video_url)
    failed = await controller.send_message("one")
    assert failed.error.startswith("Request Timeout")

    remote.chat_error = None
    state = await controller.send_message("two")

    assert state.error is None
    assert len(state.transcript) == 2


@pytest.mark.asyncio
async def test_stale_summary_is_discarded():
    """Test a summary resolving after a newer submission does not overwrite it."""
    first_release = asyncio.Event()

    class Remote:
        async def start_conversation(self, video_url):
            if "dQw4w9WgXcQ" in video_url:
                await first_release.wait()
                return "old summary", "old-handle"
            return "new summary", "new-handle"

        async def continue_conversation(self, handle, message):
            return f"reply on {handle}"

    controller = SessionController(Remote())
    first = asyncio.create_task(controller.submit_url("https://youtu.be/dQw4w9WgXcQ"))
    await asyncio.sleep(0)
    await controller.submit_url("https://youtu.be/a-b_c-d_e-f")
    first_release.set()
    await first

    assert controller.state.summary == "new summary"
    assert controller.state.video_id == "a-b_c-d_e-f"
    state = await controller.send_message("hi")
    assert state.transcript[-1].text == "reply on new-handle"


@pytest.mark.asyncio
async def test_stale_summary_failure_is_discarded():
    """Test a summary failing after a newer submission leaves the newer state alone."""
    first_release = asyncio.Event()

    class Remote:
        async def start_conversation(self, video_url):
            if "dQw4w9WgXcQ" in video_url:
                await first_release.wait()
                raise Exception("API key not valid. Please pass a valid API key.")
            return "new summary", "new-handle"

    controller = SessionController(Remote())
    first = asyncio.create_task(controller.submit_url("https://youtu.be/dQw4w9WgXcQ"))
    await asyncio.sleep(0)
    newer = await controller.submit_url("https://youtu.be/a-b_c-d_e-f")
    first_release.set()
    await first

    assert controller.state == newer
    assert controller.state.summary == "new summary"
    assert controller.state.error is None
    assert controller.has_conversation


@pytest.mark.asyncio
async def test_stale_chat_reply_is_discarded(test_video_url):
    """Test a reply arriving after a newer submission is not appended to its transcript."""
    reply_release = asyncio.Event()

    class Remote:
        async def start_conversation(self, video_url):
            return f"summary of {video_url}", video_url

        async def continue_conversation(self, handle, message):
            await reply_release.wait()
            return "late reply"

    controller = SessionController(Remote())
    await controller.submit_url(test_video_url)
    chat = asyncio.create_task(controller.send_message("question"))
    await asyncio.sleep(0)
    newer = await controller.submit_url("https://youtu.be/a-b_c-d_e-f")
    reply_release.set()
    await chat

    assert controller.state == newer
    assert controller.state.transcript == ()
    assert controller.state.is_chatting is False
    assert controller.state.summary == "summary of https://youtu.be/a-b_c-d_e-f"


@pytest.mark.asyncio
async def test_stale_chat_failure_is_discarded(test_video_url):
    """Test a chat failure arriving after a newer submission sets no banner on it."""
    reply_release = asyncio.Event()

    class Remote:
        async def start_conversation(self, video_url):
            return f"summary of {video_url}", video_url

        async def continue_conversation(self, handle, message):
            await reply_release.wait()
            raise Exception("429 RESOURCE_EXHAUSTED: You exceeded your current quota")

    controller = SessionController(Remote())
    await controller.submit_url(test_video_url)
    chat = asyncio.create_task(controller.send_message("question"))
    await asyncio.sleep(0)
    newer = await controller.submit_url("https://youtu.be/a-b_c-d_e-f")
    reply_release.set()
    await chat

    assert controller.state == newer
    assert controller.state.error is None
    assert controller.state.transcript == ()
    assert controller.has_conversation


@pytest.mark.asyncio
async def test_expired_conversation_is_dropped(remote_factory, test_video_url):
    """Test a conversation the backend no longer knows asks the user to resubmit."""
    remote = remote_factory(replies=["First answer."])
    controller = SessionController(remote)
    await controller.submit_url(test_video_url)
    await controller.send_message("First question")

    remote.chat_error = RemoteCallError(
        "Conversation handle-1 not found or expired", status_code=404, category="CONVERSATION_EXPIRED"
    )
    state = await controller.send_message("Second question")

    assert state.error == ERROR_MESSAGES[ErrorCategory.CONVERSATION_EXPIRED]
    assert state.error.startswith("Conversation Expired: ")
    assert state.transcript[-1] == ChatMessage(role=Role.MODEL, text="First answer.")
    assert state.summary == "**Main Topic:** Testing"
    assert not controller.has_conversation

    after = await controller.send_message("Third question")
    assert after == state
    assert len(remote.sent) == 2


@pytest.mark.asyncio
async def test_resubmit_after_expiry_restores_chat(remote_factory, test_video_url):
    """Test submitting the URL again opens a fresh conversation after expiry."""
    remote = remote_factory(replies=["Fresh answer."])
    remote.chat_error = RemoteCallError("Conversation not found or expired", status_code=404)
    controller = SessionController(remote)
    await controller.submit_url(test_video_url)
    await controller.send_message("Anyone there?")
    assert not controller.has_conversation

    remote.chat_error = None
    await controller.submit_url(test_video_url)
    state = await controller.send_message("Anyone there?")

    assert remote.sent[-1] == ("handle-2", "Anyone there?")
    assert state.transcript[-1].text == "Fresh answer."
    assert state.error is None


def test_state_is_immutable():
    """Test session snapshots cannot be modified in place."""
    state = SessionState()
    with pytest.raises(Exception):
        state.summary = "changed"
