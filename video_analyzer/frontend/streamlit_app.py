"""
Main Streamlit application for YouTube Video Analyzer.
"""

import asyncio

import streamlit as st

from video_analyzer.config import config
from video_analyzer.core.session import SessionController
from video_analyzer.frontend.api_client import ApiClient
from video_analyzer.frontend.components import (
    header, youtube_input, display_error, youtube_embed,
    display_summary, chat_interface
)


def init_session_state():
    """Initialize session state variables."""
    if "controller" not in st.session_state:
        st.session_state.controller = SessionController(ApiClient(config.API_URL))


def handle_url(controller: SessionController, url: str):
    """Request a summary for a newly submitted URL."""
    with st.spinner("Analyzing video content..."):
        asyncio.run(controller.submit_url(url))
    st.rerun()


def handle_chat(controller: SessionController, message: str):
    """Send a chat message and wait for the reply."""
    with st.chat_message("user"):
        st.markdown(message)
    with st.chat_message("assistant"):
        with st.spinner("Thinking..."):
            asyncio.run(controller.send_message(message))
    st.rerun()


def main():
    """Main application entry point."""
    header()
    init_session_state()

    controller = st.session_state.controller
    state = controller.state

    url = youtube_input(state.is_summarizing)
    if url:
        handle_url(controller, url)

    if state.error:
        display_error(state.error)

    col1, col2 = st.columns(2)

    with col1:
        if state.video_id:
            youtube_embed(state.video_id)
        display_summary(state.summary, state.is_summarizing)

    with col2:
        if state.has_summary and not state.is_summarizing:
            message = chat_interface(state.transcript, state.is_chatting)
            if message:
                handle_chat(controller, message)


if __name__ == "__main__":
    main()
