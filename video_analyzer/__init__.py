"""
YouTube Video Analyzer Application.

This application takes a YouTube video URL, asks Gemini for a structured
summary of the video, and lets users keep chatting about it in the same
model conversation.
"""

from video_analyzer.config import config

__version__ = config.APP_VERSION
