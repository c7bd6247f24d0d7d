"""
API routes for the YouTube Video Analyzer application.
"""

import traceback
from fastapi import APIRouter, HTTPException, Depends, Request, Path

from video_analyzer.api.schemas import (
    ConversationRequest,
    ConversationResponse,
    MessageRequest,
    MessageResponse,
)
from video_analyzer.core.conversations import ConversationStore
from video_analyzer.core.errors import classify_error, conversation_expired_error, invalid_url_error
from video_analyzer.core.gemini_client import GeminiChatClient
from video_analyzer.core.url_parser import build_embed_url, extract_video_id
from video_analyzer.utils.logger import logging

router = APIRouter(prefix="/api/v1", tags=["conversations"])


def get_chat_client(request: Request) -> GeminiChatClient:
    """Get the chat client created at startup."""
    return request.app.state.chat_client


def get_store(request: Request) -> ConversationStore:
    """Get the conversation store created at startup."""
    return request.app.state.store


def upstream_failure(error: Exception) -> HTTPException:
    """Log a failed model call and wrap it as a 502 with the classified error."""
    classified = classify_error(error)
    logging.error(f"Model call failed ({classified.category.value}): {str(error)}")
    logging.debug(traceback.format_exc())
    return HTTPException(status_code=502, detail=classified.model_dump(mode="json"))


@router.post("/conversations", response_model=ConversationResponse, status_code=201)
async def start_conversation(
    request: ConversationRequest,
    chat_client: GeminiChatClient = Depends(get_chat_client),
    store: ConversationStore = Depends(get_store),
):
    """
    Start a conversation about a YouTube video.

    - Rejects URLs without a recognizable video ID
    - The first model turn is the video summary
    """
    video_id = extract_video_id(request.url)
    if not video_id:
        raise HTTPException(status_code=400, detail=invalid_url_error(request.url).model_dump(mode="json"))

    try:
        summary, chat = await chat_client.start_conversation(request.url)
    except Exception as e:
        raise upstream_failure(e)

    conversation = store.create(video_url=request.url, video_id=video_id, summary=summary, chat=chat)

    return ConversationResponse(
        conversation_id=conversation.conversation_id,
        video_id=video_id,
        video_url=request.url,
        embed_url=build_embed_url(video_id),
        summary=summary,
    )


@router.post("/conversations/{conversation_id}/messages", response_model=MessageResponse)
async def send_message(
    message_request: MessageRequest,
    conversation_id: str = Path(..., description="Conversation ID"),
    chat_client: GeminiChatClient = Depends(get_chat_client),
    store: ConversationStore = Depends(get_store),
):
    """Send a chat message on an existing conversation."""
    conversation = store.get(conversation_id)
    if conversation is None:
        logging.info(f"Chat requested on unknown conversation {conversation_id}")
        raise HTTPException(status_code=404, detail=conversation_expired_error(conversation_id).model_dump(mode="json"))

    try:
        reply = await chat_client.continue_conversation(conversation.chat, message_request.message)
    except Exception as e:
        raise upstream_failure(e)

    turn_count = store.record_turn(conversation_id)

    return MessageResponse(conversation_id=conversation_id, reply=reply, turn_count=turn_count)
