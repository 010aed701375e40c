"""
Configuration management for the Inworld TTS client.
"""

import os
from typing import Any

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://api.inworld.ai/tts/v1/voice"


class ServiceConfig:
    """Configuration management using environment variables and an optional .env file."""

    def __init__(self, env_path: str | None = None) -> None:
        """Initialize configuration by loading environment variables."""
        # Exported variables take precedence over the .env file
        self.env_path = env_path or os.path.join(os.getcwd(), ".env")
        load_dotenv(dotenv_path=self.env_path, override=False)
        self.config: dict[str, Any] = {}
        self.load_from_env()

    def load_from_env(self) -> None:
        """Load configuration from environment variables."""
        base_url = os.getenv("INWORLD_TTS_BASE_URL", DEFAULT_BASE_URL)
        self.config = {
            "inworld_api_key": os.getenv("INWORLD_API_KEY"),
            "base_url": base_url,
            "stream_url": os.getenv("INWORLD_TTS_STREAM_URL"),
            "timeout": self._parse_timeout(os.getenv("INWORLD_TTS_TIMEOUT")),
            "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
            "pause_mode": os.getenv("INWORLD_TTS_PAUSE_MODE", "silence").lower(),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found or unset

        Returns:
            Configuration value
        """
        value = self.config.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self.config[key] = value

    def reload(self) -> None:
        """Reload configuration from the .env file and environment variables."""
        load_dotenv(dotenv_path=self.env_path, override=False)
        self.load_from_env()

    @staticmethod
    def _parse_timeout(raw: str | None) -> float | None:
        if raw is None or not raw.strip():
            return None
        try:
            value = float(raw)
        except ValueError:
            return None
        return value if value > 0 else None


# Global configuration instance
config = ServiceConfig()
