"""
Module for holding video conversations with Gemini.
"""

from typing import Optional, Tuple

from google import genai
from google.genai import types
from google.genai.chats import AsyncChat

from video_analyzer.config import config
from video_analyzer.core.errors import MissingCredentialError, ResponseBlockedError
from video_analyzer.core.prompts import build_summary_prompt
from video_analyzer.utils.logger import logging


class GeminiChatClient:
    """Class to open and continue Gemini conversations about a video."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """
        Initialize the client with API key.

        Args:
            api_key: Gemini API key (if None, will use the configured key)
            model: Gemini model name (if None, will use the configured model)
        """
        self.api_key = api_key or config.API_KEY
        if not self.api_key:
            raise MissingCredentialError("Gemini API key is required. Set API_KEY in .env file or pass directly.")

        self.model = model or config.MODEL_NAME
        self.client = genai.Client(api_key=self.api_key)
        logging.info(f"Created Gemini client for model {self.model} (key ...{self.api_key[-4:]})")

    def build_chat_config(self) -> types.GenerateContentConfig:
        """Build the fixed sampling and safety configuration for a conversation."""
        safety_settings = [
            types.SafetySetting(
                category=types.HarmCategory(category),
                threshold=types.HarmBlockThreshold(config.HARM_BLOCK_THRESHOLD),
            )
            for category in config.HARM_CATEGORIES
        ]
        return types.GenerateContentConfig(
            **config.generation_settings(),
            safety_settings=safety_settings,
        )

    async def start_conversation(self, video_url: str) -> Tuple[str, AsyncChat]:
        """
        Open a conversation whose first turn asks for the video summary.

        Args:
            video_url: The YouTube URL the user submitted

        Returns:
            Tuple of the summary text and the conversation handle
        """
        chat = self.client.aio.chats.create(model=self.model, config=self.build_chat_config())
        response = await chat.send_message(build_summary_prompt(video_url))
        summary = _response_text(response)
        logging.info(f"Received summary of {len(summary)} characters for {video_url}")
        return summary, chat

    async def continue_conversation(self, chat: AsyncChat, message: str) -> str:
        """
        Send one more user turn on an existing conversation.

        Args:
            chat: Handle returned by start_conversation
            message: User message

        Returns:
            The model's reply text
        """
        response = await chat.send_message(message)
        return _response_text(response)


def _response_text(response: types.GenerateContentResponse) -> str:
    """Get the text of a response, raising when the model returned none."""
    text = response.text
    if text:
        return text

    feedback = response.prompt_feedback
    if feedback is not None and feedback.block_reason:
        raise ResponseBlockedError(f"Response was blocked by safety settings ({feedback.block_reason})")

    candidates = response.candidates or []
    finish_reason = candidates[0].finish_reason if candidates else None
    if finish_reason == types.FinishReason.SAFETY:
        raise ResponseBlockedError("Response was blocked by safety settings (SAFETY)")

    raise ResponseBlockedError(f"Model returned an empty response (finish reason: {finish_reason})")
