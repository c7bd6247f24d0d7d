"""
Reusable UI components for the Streamlit app.
"""

import streamlit as st
from typing import Optional, Sequence

from video_analyzer.core.url_parser import build_embed_url
from video_analyzer.models.schemas import ChatMessage, Role


def header():
    """Display the application header."""
    st.set_page_config(
        page_title="YouTube Video Analyzer",
        page_icon="🎬",
        layout="wide",
    )

    st.title("🎬 YouTube Video Analyzer")
    st.markdown("""
    Get summaries and chat with any YouTube video.
    """)
    st.divider()


def youtube_input(is_loading: bool) -> Optional[str]:
    """
    Display a YouTube URL input form.

    Args:
        is_loading: Whether a summary request is in flight

    Returns:
        The entered YouTube URL or None
    """
    with st.form(key="youtube_form"):
        url = st.text_input(
            "Enter YouTube Video URL",
            placeholder="https://www.youtube.com/watch?v=VIDEO_ID",
            disabled=is_loading,
        )
        submit = st.form_submit_button(
            "Analyzing..." if is_loading else "Analyze Video",
            disabled=is_loading,
        )

    if submit and url.strip():
        return url.strip()

    return None


def display_error(message: str):
    """
    Display an error message.

    Args:
        message: Error message to display
    """
    st.error(message, icon="⚠️")


def youtube_embed(video_id: str):
    """
    Embed a YouTube video.

    Args:
        video_id: YouTube video ID
    """
    st.markdown(f"""
    <iframe width="560" height="315" src="{build_embed_url(video_id)}"
    frameborder="0" allow="accelerometer; autoplay; clipboard-write; encrypted-media;
    gyroscope; picture-in-picture" allowfullscreen></iframe>
    """, unsafe_allow_html=True)


def display_summary(summary: Optional[str], is_loading: bool):
    """
    Display the video analysis.

    Args:
        summary: Markdown summary, if one is available
        is_loading: Whether the summary is still being generated
    """
    if is_loading:
        st.info("Analyzing video content... This may take a moment.")
        return

    if not summary:
        return

    st.markdown("## Video Analysis")
    st.markdown(summary)


def chat_interface(history: Sequence[ChatMessage], is_sending: bool) -> Optional[str]:
    """
    Display the chat window for the current video.

    Args:
        history: Chat transcript in display order
        is_sending: Whether a chat request is in flight

    Returns:
        The message the user just sent, or None
    """
    st.markdown("## Chat with Video AI")

    for message in history:
        with st.chat_message("user" if message.role == Role.USER else "assistant"):
            st.markdown(message.text)

    if is_sending:
        with st.chat_message("assistant"):
            st.markdown("Thinking...")

    user_input = st.chat_input("Ask a question about the video...", disabled=is_sending)
    if user_input and user_input.strip():
        return user_input

    return None
