"""
Core functionality for the YouTube video analyzer application.

This package contains modules for parsing YouTube URLs, talking to Gemini,
classifying failures, and driving a single user's analysis session.
"""
