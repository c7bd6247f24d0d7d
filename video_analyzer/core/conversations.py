"""
In-memory registry of live Gemini conversations held by the backend.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from video_analyzer.config import config
from video_analyzer.utils.logger import logging


@dataclass
class Conversation:
    """A Gemini conversation about a single video."""
    conversation_id: str
    video_url: str
    video_id: str
    summary: str
    chat: Any
    created_at: datetime = field(default_factory=datetime.now)
    last_active: datetime = field(default_factory=datetime.now)
    turn_count: int = 0


class ConversationStore:
    """Process-wide conversation registry with TTL and capacity eviction."""

    def __init__(self, max_conversations: Optional[int] = None, timeout_hours: Optional[int] = None):
        self.max_conversations = max_conversations or config.MAX_CONVERSATIONS
        self.timeout = timedelta(hours=timeout_hours or config.CONVERSATION_TIMEOUT_HOURS)
        self._conversations: Dict[str, Conversation] = {}

    def create(self, video_url: str, video_id: str, summary: str, chat: Any) -> Conversation:
        """Register a new conversation, evicting expired and overflow ones first."""
        self._evict_expired()
        if len(self._conversations) >= self.max_conversations:
            oldest_id = min(self._conversations, key=lambda k: self._conversations[k].last_active)
            del self._conversations[oldest_id]
            logging.info(f"Evicted least recently active conversation {oldest_id}")

        conversation = Conversation(
            conversation_id=uuid.uuid4().hex[:12],
            video_url=video_url,
            video_id=video_id,
            summary=summary,
            chat=chat,
        )
        self._conversations[conversation.conversation_id] = conversation
        logging.info(f"Created conversation {conversation.conversation_id} for video {video_id}")
        return conversation

    def get(self, conversation_id: str) -> Optional[Conversation]:
        """Look up a live conversation by ID."""
        self._evict_expired()
        return self._conversations.get(conversation_id)

    def record_turn(self, conversation_id: str) -> int:
        """Mark one completed chat turn. Returns the new turn count."""
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            raise KeyError(f"Conversation {conversation_id} not found")
        conversation.turn_count += 1
        conversation.last_active = datetime.now()
        return conversation.turn_count

    def discard(self, conversation_id: str) -> bool:
        """Drop a conversation. Returns False if it did not exist."""
        return self._conversations.pop(conversation_id, None) is not None

    def clear(self) -> int:
        """Drop every conversation. Returns the count dropped."""
        count = len(self._conversations)
        self._conversations.clear()
        return count

    def _evict_expired(self) -> int:
        now = datetime.now()
        expired = [cid for cid, c in self._conversations.items() if now - c.last_active > self.timeout]
        for cid in expired:
            del self._conversations[cid]
        if expired:
            logging.info(f"Evicted {len(expired)} expired conversation(s)")
        return len(expired)

    @property
    def count(self) -> int:
        """Number of live conversations."""
        return len(self._conversations)
