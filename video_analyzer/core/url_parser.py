"""
Extraction of YouTube video IDs from the URL shapes users paste.
"""

import re
from typing import Optional

# watch?v=, embed/, e/, v/, youtu.be/ and youtube.com/<a>/<b>/ shapes, with or
# without protocol and www. The ID is exactly 11 URL-safe characters; a
# longer run of ID characters is rejected.
VIDEO_ID_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?"
    r"(?:youtube\.com/(?:[^/\n\s]+/\S+/|(?:v|e(?:mbed)?)/|\S*?[?&]v=)|youtu\.be/)"
    r"([a-zA-Z0-9_-]{11})(?![a-zA-Z0-9_-])"
)

EMBED_URL_TEMPLATE = "https://www.youtube.com/embed/{video_id}"


def extract_video_id(url: str) -> Optional[str]:
    """
    Extract the video ID from a YouTube URL.

    Args:
        url: Any user-supplied string

    Returns:
        The 11-character video ID, or None if the string is not a recognized
        YouTube URL
    """
    if not url:
        return None
    match = VIDEO_ID_PATTERN.search(url)
    return match.group(1) if match else None


def build_embed_url(video_id: str) -> str:
    """Get the embeddable player URL for a video ID."""
    return EMBED_URL_TEMPLATE.format(video_id=video_id)
