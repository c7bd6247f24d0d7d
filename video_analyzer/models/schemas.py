"""
Data models for the YouTube video analyzer application.
"""
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel


class Role(str, Enum):
    """Authors of chat messages."""
    USER = "user"
    MODEL = "model"


class ChatMessage(BaseModel):
    """One message of the chat transcript."""
    role: Role
    text: str

    model_config = {"frozen": True}


class SessionState(BaseModel):
    """Snapshot of one user's analysis session, replaced on every change."""
    video_url: str = ""
    video_id: Optional[str] = None
    summary: Optional[str] = None
    transcript: Tuple[ChatMessage, ...] = ()
    is_summarizing: bool = False
    is_chatting: bool = False
    error: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def has_summary(self) -> bool:
        return self.summary is not None


class PendingTurn(BaseModel):
    """
    A chat turn applied optimistically to the transcript.

    The user message is shown before the model answers; the turn is then
    either confirmed with the reply or reverted to the prior transcript.
    """
    previous: Tuple[ChatMessage, ...]
    user_message: ChatMessage

    model_config = {"frozen": True}

    @classmethod
    def begin(cls, transcript: Tuple[ChatMessage, ...], text: str) -> "PendingTurn":
        return cls(previous=transcript, user_message=ChatMessage(role=Role.USER, text=text))

    @property
    def tentative(self) -> Tuple[ChatMessage, ...]:
        """Transcript with the user message appended."""
        return self.previous + (self.user_message,)

    def confirm(self, reply: str) -> Tuple[ChatMessage, ...]:
        """Transcript with both the user message and the model reply."""
        return self.tentative + (ChatMessage(role=Role.MODEL, text=reply),)

    def revert(self) -> Tuple[ChatMessage, ...]:
        """Transcript as it was before the turn began."""
        return self.previous
