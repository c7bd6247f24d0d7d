"""
Configuration settings for the YouTube video analyzer application.
"""

import os
from typing import Dict, Any, List
from pathlib import Path
from dotenv import load_dotenv

from video_analyzer.core.errors import MissingCredentialError


# Ensure environment variables are loaded
load_dotenv()


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "YouTube Video Analyzer"
    APP_VERSION = "0.1.0"

    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()
    LOGS_DIR = BASE_DIR / "logs"

    # API keys
    API_KEY = os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY")

    # Model and generation settings
    MODEL_NAME = os.getenv("GEMINI_MODEL", "gemini-2.5-pro")
    TEMPERATURE = 0.7
    TOP_P = 0.95
    TOP_K = 64
    HARM_CATEGORIES: List[str] = [
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    ]
    HARM_BLOCK_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"

    # Backend conversations
    MAX_CONVERSATIONS = int(os.getenv("MAX_CONVERSATIONS", "50"))
    CONVERSATION_TIMEOUT_HOURS = int(os.getenv("CONVERSATION_TIMEOUT_HOURS", "2"))

    # Frontend -> backend
    API_URL = os.getenv("API_URL", "http://localhost:8000")
    REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "120"))

    @classmethod
    def validate(cls):
        """
        Check the settings the backend cannot start without.

        Raises:
            MissingCredentialError: If no Gemini API key is configured
        """
        if not cls.API_KEY:
            raise MissingCredentialError(
                "API_KEY environment variable not set. "
                "Set it in the .env file or environment variables."
            )

    @classmethod
    def generation_settings(cls) -> Dict[str, Any]:
        """Get the fixed sampling parameters sent with every conversation."""
        return {
            "temperature": cls.TEMPERATURE,
            "top_p": cls.TOP_P,
            "top_k": cls.TOP_K,
        }


class DevelopmentConfig(Config):
    """Development configuration."""

    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    LOG_LEVEL = "INFO"


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
