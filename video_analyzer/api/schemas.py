from pydantic import BaseModel, Field


class ConversationRequest(BaseModel):
    """Model for starting a conversation about a video."""
    url: str


class ConversationResponse(BaseModel):
    """Model for a newly started conversation."""
    conversation_id: str
    video_id: str
    video_url: str
    embed_url: str
    summary: str


class MessageRequest(BaseModel):
    """Model for chat messages."""
    message: str = Field(min_length=1)


class MessageResponse(BaseModel):
    """Model for chat replies."""
    conversation_id: str
    reply: str
    turn_count: int
