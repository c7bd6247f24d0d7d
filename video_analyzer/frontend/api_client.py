"""
API client for communicating with the YouTube Video Analyzer backend.
"""

import asyncio
import requests
from typing import Dict, Any, Optional, Tuple
from urllib.parse import urljoin
from video_analyzer.config import config
from video_analyzer.core.errors import RemoteCallError


class ApiClient:
    """
    Client for interacting with the YouTube Video Analyzer API.

    Serves as the page's remote chat client: the conversation handle is the
    conversation ID issued by the backend.
    """

    def __init__(self, base_url: str = config.API_URL, timeout: Optional[int] = None):
        """
        Initialize the API client.

        Args:
            base_url: Base URL of the API
            timeout: Seconds to wait for each request
        """
        self.base_url = base_url
        self.api_base = urljoin(base_url, "/api/v1/")
        self.timeout = timeout or config.REQUEST_TIMEOUT

    def _url(self, endpoint: str) -> str:
        """Get the full URL for an endpoint."""
        return urljoin(self.api_base, endpoint)

    def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON payload and return the JSON response.

        Raises:
            RemoteCallError: With the backend's upstream error message when the
                request fails, times out, or the backend cannot be reached
        """
        try:
            response = requests.post(self._url(endpoint), json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            raise RemoteCallError(f"Request timed out after {self.timeout}s") from e
        except requests.ConnectionError as e:
            raise RemoteCallError(f"Could not reach the API server at {self.base_url}") from e

        if not response.ok:
            message, category = _error_detail(response)
            raise RemoteCallError(message, status_code=response.status_code, category=category)
        return response.json()

    async def start_conversation(self, video_url: str) -> Tuple[str, str]:
        """
        Ask the backend to summarize a video and open a conversation about it.

        Args:
            video_url: YouTube video URL

        Returns:
            Tuple of the summary text and the conversation ID
        """
        data = await asyncio.to_thread(self._post, "conversations", {"url": video_url})
        return data["summary"], data["conversation_id"]

    async def continue_conversation(self, conversation_id: str, message: str) -> str:
        """
        Send a chat message on a conversation.

        Args:
            conversation_id: ID returned by start_conversation
            message: User message

        Returns:
            The model's reply
        """
        data = await asyncio.to_thread(
            self._post, f"conversations/{conversation_id}/messages", {"message": message}
        )
        return data["reply"]


def _error_detail(response: requests.Response) -> Tuple[str, Optional[str]]:
    """
    Get the upstream error message from an error response.

    Returns:
        Tuple of the message and the category the backend assigned, if any
    """
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}", None

    detail = body.get("detail") if isinstance(body, dict) else body

    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
        return message, detail.get("category")
    if detail:
        return str(detail), None
    return f"HTTP {response.status_code}", None
