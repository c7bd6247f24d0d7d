"""
Error types and the user-facing classification of remote failures.

Classification matches free-text error messages, so it is approximate: it
follows the wording the Gemini API uses today and falls back to structured
signals (SDK error types, backend status codes) when no phrase matches.
"""

from enum import Enum
from typing import Optional, Tuple

from google.genai import errors as genai_errors
from pydantic import BaseModel


class VideoAnalyzerError(Exception):
    """Base class for application errors."""


class MissingCredentialError(VideoAnalyzerError):
    """Raised at startup when no Gemini API key is configured."""


class ResponseBlockedError(VideoAnalyzerError):
    """Raised when the model returns no usable text."""


class RemoteCallError(VideoAnalyzerError):
    """A failed call to the analyzer backend, carrying its upstream message."""

    def __init__(self, message: str, status_code: Optional[int] = None, category: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.category = category


class ErrorCategory(str, Enum):
    """Categories of failures shown to the user."""
    INVALID_URL = "INVALID_URL"
    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    AUTHENTICATION = "AUTHENTICATION"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    SAFETY_BLOCKED = "SAFETY_BLOCKED"
    TIMEOUT = "TIMEOUT"
    RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"
    CONVERSATION_EXPIRED = "CONVERSATION_EXPIRED"
    API_ERROR = "API_ERROR"
    UNEXPECTED = "UNEXPECTED"
    UNKNOWN = "UNKNOWN"


ERROR_MESSAGES = {
    ErrorCategory.INVALID_URL: "Invalid YouTube URL. Please enter a valid URL.",
    ErrorCategory.MISSING_CREDENTIAL: "Configuration Error: API_KEY environment variable not set.",
    ErrorCategory.AUTHENTICATION: (
        "Authentication Error: The provided API key is not valid. "
        "Please ensure it is configured correctly."
    ),
    ErrorCategory.QUOTA_EXCEEDED: (
        "Quota Exceeded: You have exceeded your API usage limit. "
        "Please check your plan and billing details."
    ),
    ErrorCategory.SAFETY_BLOCKED: (
        "Content Blocked: The model's response was blocked due to safety settings. "
        "This may be due to the video content or your prompt."
    ),
    ErrorCategory.TIMEOUT: "Request Timeout: The request took too long to process. Please try again.",
    ErrorCategory.RESOURCE_EXHAUSTED: (
        "Resource Exhausted: You have exceeded your API quota. Please check your account limits."
    ),
    ErrorCategory.CONVERSATION_EXPIRED: (
        "Conversation Expired: This chat session is no longer available. "
        "Please submit the video URL again to start a new one."
    ),
    ErrorCategory.API_ERROR: (
        "API Error: An issue occurred while communicating with the AI service. "
        "Please try again later."
    ),
    ErrorCategory.UNEXPECTED: "An unexpected error occurred. Please check the logs for more details.",
    ErrorCategory.UNKNOWN: "An unknown error occurred.",
}

# Ordered, first match wins. Each rule is a list of alternatives; an
# alternative matches when all of its phrases occur in the lowercased message.
MESSAGE_RULES = [
    (ErrorCategory.AUTHENTICATION, [("api key not valid",)]),
    (ErrorCategory.QUOTA_EXCEEDED, [("quota",)]),
    (ErrorCategory.SAFETY_BLOCKED, [("blocked", "safety")]),
    (ErrorCategory.TIMEOUT, [("timed out",), ("deadline_exceeded",)]),
    (ErrorCategory.RESOURCE_EXHAUSTED, [("resource has been exhausted",), ("resource_exhausted",)]),
    (ErrorCategory.API_ERROR, [("google.api",)]),
]


class ClassifiedError(BaseModel):
    """A failure reduced to what the UI and API report."""
    error: str
    category: ErrorCategory
    message: str


def _match_message(text: str) -> Optional[ErrorCategory]:
    lowered = text.lower()
    for category, alternatives in MESSAGE_RULES:
        for phrases in alternatives:
            if all(phrase in lowered for phrase in phrases):
                return category
    return None


def _backend_category(error: BaseException) -> Optional[ErrorCategory]:
    """The category the backend already assigned, if it sent a known one."""
    if not isinstance(error, RemoteCallError) or not error.category:
        return None
    try:
        return ErrorCategory(error.category)
    except ValueError:
        return None


def categorize_error(error: BaseException) -> Tuple[ErrorCategory, str]:
    """
    Map an exception to an ErrorCategory and its banner text.

    Args:
        error: The exception raised by a remote call

    Returns:
        Tuple of the category and the user-facing message
    """
    backend_category = _backend_category(error)
    if backend_category is not None:
        return backend_category, ERROR_MESSAGES[backend_category]

    text = str(error)
    category = _match_message(text)

    if category is None:
        if isinstance(error, RemoteCallError) and error.status_code == 404:
            category = ErrorCategory.CONVERSATION_EXPIRED
        elif isinstance(error, MissingCredentialError):
            category = ErrorCategory.MISSING_CREDENTIAL
        elif isinstance(error, TimeoutError):
            category = ErrorCategory.TIMEOUT
        elif isinstance(error, genai_errors.APIError):
            category = ErrorCategory.API_ERROR
        elif isinstance(error, RemoteCallError) and (error.status_code or 0) >= 500:
            category = ErrorCategory.API_ERROR
        elif text.strip():
            category = ErrorCategory.UNEXPECTED
        else:
            category = ErrorCategory.UNKNOWN

    return category, ERROR_MESSAGES[category]


def classify_error(error: BaseException) -> ClassifiedError:
    """Create a ClassifiedError from an exception."""
    category, message = categorize_error(error)
    return ClassifiedError(error=str(error), category=category, message=message)


def invalid_url_error(url: str) -> ClassifiedError:
    """Create the ClassifiedError reported for an unparseable video URL."""
    return ClassifiedError(
        error=f"Could not extract a video ID from {url!r}",
        category=ErrorCategory.INVALID_URL,
        message=ERROR_MESSAGES[ErrorCategory.INVALID_URL],
    )


def conversation_expired_error(conversation_id: str) -> ClassifiedError:
    """Create the ClassifiedError reported for an unknown or evicted conversation."""
    return ClassifiedError(
        error=f"Conversation {conversation_id} not found or expired",
        category=ErrorCategory.CONVERSATION_EXPIRED,
        message=ERROR_MESSAGES[ErrorCategory.CONVERSATION_EXPIRED],
    )
