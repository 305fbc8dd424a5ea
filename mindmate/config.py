"""
Configuration module for loading environment variables and settings.

This module handles:
1. Loading settings from a .env file
2. Setting default configurations for the hosted agent endpoint and UI pacing
3. Optional validation of the API key
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


class Config:
    """Configuration manager for the agent endpoint and chat pacing."""

    # Hosted agent inference endpoint
    API_URL: str = os.getenv('MINDMATE_API_URL', 'https://agent-prod.studio.lyzr.ai/v3/inference/chat/')
    API_KEY: str = os.getenv('MINDMATE_API_KEY', '')
    AGENT_ID: str = os.getenv('MINDMATE_AGENT_ID', '68e0e2a0615699d53b623bbc')
    TIMEOUT_SECONDS: float = _env_float('MINDMATE_TIMEOUT_SECONDS', 60.0)

    # Artificial "typing" pause before an agent reply is shown
    REPLY_DELAY_SECONDS: float = _env_float('MINDMATE_REPLY_DELAY_SECONDS', 1.0)

    # CLI
    LOG_LEVEL: str = os.getenv('MINDMATE_LOG_LEVEL', 'WARNING').upper()
    THEME: str = os.getenv('MINDMATE_THEME', 'dark').lower()

    # Validation flags
    REQUIRE_API_KEY: bool = os.getenv('MINDMATE_REQUIRE_API_KEY', 'false').lower() in ('1', 'true', 'yes')

    @classmethod
    def validate_api_keys(cls) -> None:
        """
        Optionally validate that the API key is set.
        Not enforced by default so the chat can run against a local endpoint.
        """
        if cls.REQUIRE_API_KEY and not cls.API_KEY:
            raise ValueError(
                "Missing required API key: MINDMATE_API_KEY. "
                "Unset MINDMATE_REQUIRE_API_KEY to make it optional."
            )
