"""
Session controller driving one user's summary and chat requests.
"""

from typing import Any, Optional, Protocol, Tuple

from video_analyzer.core.errors import ERROR_MESSAGES, ErrorCategory, categorize_error
from video_analyzer.core.url_parser import extract_video_id
from video_analyzer.models.schemas import PendingTurn, SessionState
from video_analyzer.utils.logger import logging


class RemoteChatClient(Protocol):
    """Anything that can hold a conversation with the model about a video."""

    async def start_conversation(self, video_url: str) -> Tuple[str, Any]:
        ...

    async def continue_conversation(self, handle: Any, message: str) -> str:
        ...


class SessionController:
    """
    Owns the session state and sequences calls to the remote chat client.

    Every transition replaces ``state`` with a new immutable snapshot. The
    caller keeps one request of each kind in flight by disabling input while
    ``is_summarizing`` or ``is_chatting`` is set.
    """

    def __init__(self, remote: RemoteChatClient):
        self.remote = remote
        self.state = SessionState()
        self._conversation: Optional[Any] = None
        # Bumped on every URL submission; results of older submissions are dropped.
        self._generation = 0

    @property
    def has_conversation(self) -> bool:
        return self._conversation is not None

    def _update(self, **changes) -> SessionState:
        self.state = self.state.model_copy(update=changes)
        return self.state

    async def submit_url(self, url: str) -> SessionState:
        """
        Start a new analysis for a video URL.

        Args:
            url: User-supplied YouTube URL

        Returns:
            The session state after the summary request settled
        """
        self._generation += 1
        generation = self._generation
        self._conversation = None

        video_id = extract_video_id(url)
        if not video_id:
            logging.info(f"Rejected invalid YouTube URL: {url!r}")
            self.state = SessionState(video_url=url, error=ERROR_MESSAGES[ErrorCategory.INVALID_URL])
            return self.state

        self.state = SessionState(video_url=url, video_id=video_id, is_summarizing=True)
        try:
            summary, conversation = await self.remote.start_conversation(url)
        except Exception as e:
            if generation != self._generation:
                return self.state
            category, message = categorize_error(e)
            logging.error(f"Summary request failed for video {video_id} ({category.value}): {str(e)}")
            return self._update(is_summarizing=False, error=message)

        if generation != self._generation:
            logging.info(f"Discarding stale summary for video {video_id}")
            return self.state

        self._conversation = conversation
        logging.info(f"Summary ready for video {video_id}")
        return self._update(summary=summary, is_summarizing=False)

    async def send_message(self, text: str) -> SessionState:
        """
        Send a chat message about the current video.

        A no-op when no conversation exists yet or the message is blank.

        Args:
            text: User message

        Returns:
            The session state after the chat turn settled
        """
        if self._conversation is None or not text.strip():
            return self.state

        generation = self._generation
        conversation = self._conversation
        turn = PendingTurn.begin(self.state.transcript, text)
        self._update(transcript=turn.tentative, is_chatting=True, error=None)

        try:
            reply = await self.remote.continue_conversation(conversation, text)
        except Exception as e:
            if generation != self._generation:
                return self.state
            category, message = categorize_error(e)
            logging.error(f"Chat turn failed ({category.value}): {str(e)}")
            if category == ErrorCategory.CONVERSATION_EXPIRED:
                self._conversation = None
            return self._update(transcript=turn.revert(), is_chatting=False, error=message)

        if generation != self._generation:
            return self.state
        return self._update(transcript=turn.confirm(reply), is_chatting=False)
