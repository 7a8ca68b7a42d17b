"""Configuration management for Pantry Chef.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini API key: the only credential the recipe client needs
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Default: gemini-2.5-flash (fast, supports structured JSON output)
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # Temperature: higher values give more varied recipes between requests
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "1.0"))
        # Max Output Tokens: three full recipes with instructions fit comfortably in 8192
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "8192"))
        # HTTP timeout for a single generation request, in seconds
        self.REQUEST_TIMEOUT_SECONDS: int = int(os.getenv("REQUEST_TIMEOUT_SECONDS", "60"))
        # Output language used when no language option is chosen
        self.DEFAULT_LANGUAGE: str = os.getenv("DEFAULT_LANGUAGE", "English")
        # Theme preference file (single "theme" key)
        self.PREFERENCES_FILE: str = os.getenv(
            "PREFERENCES_FILE", os.path.join(os.path.expanduser("~"), ".pantry_chef", "preferences.json")
        )
        # Directory where exported .txt recipes are written
        self.EXPORT_DIR: str = os.getenv("EXPORT_DIR", ".")

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If the API key is missing or invalid values provided.
        """
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if not (0.0 <= self.TEMPERATURE <= 2.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 2.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if self.REQUEST_TIMEOUT_SECONDS < 1:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be at least 1 second, got: {self.REQUEST_TIMEOUT_SECONDS}"
            )
        if not self.DEFAULT_LANGUAGE.strip():
            raise ValueError("DEFAULT_LANGUAGE must not be empty")


# Create module-level config instance and validate immediately
config = Config()
config.validate()
