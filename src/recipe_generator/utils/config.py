"""Configuration management for Recipe Generation Service.

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
        # Gemini API Key: not required at startup. A missing key surfaces as a
        # fatal CONFIGURATION_MISSING error on the first generation request.
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Default: gemini-2.5-flash (fast, cost-effective)
        # For richer recipes: use gemini-2.5-pro
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

        # LLM Sampling Parameters (sent alongside the prompt, never inside it)
        # Temperature: Controls randomness (0.0 = deterministic, 1.0 = max randomness)
        # For original recipes: 0.7 favours creativity while keeping JSON stable
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Top P: nucleus sampling threshold (0.0 - 1.0)
        self.TOP_P: float = float(os.getenv("TOP_P", "0.95"))
        # Top K: candidate pool width
        self.TOP_K: int = int(os.getenv("TOP_K", "40"))
        # Max Output Tokens: a full recipe with steps and shopping list needs ~2-4k
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "8192"))

        # Generation Retry Configuration - absorbs malformed or non-conforming model output
        # MAX_ATTEMPTS: Total provider calls per generation request (retry budget)
        self.MAX_ATTEMPTS: int = int(os.getenv("MAX_ATTEMPTS", "2"))
        # RETRY_DELAY_SECONDS: Fixed delay between attempts (no backoff)
        self.RETRY_DELAY_SECONDS: float = float(os.getenv("RETRY_DELAY_SECONDS", "1"))
        # REQUEST_TIMEOUT_SECONDS: Per-call timeout for the Gemini HTTP request
        self.REQUEST_TIMEOUT_SECONDS: int = int(os.getenv("REQUEST_TIMEOUT_SECONDS", "60"))

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any value is out of its allowed range.
        """
        if not (0.0 <= self.TEMPERATURE <= 1.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 1.0, got: {self.TEMPERATURE}"
            )
        if not (0.0 <= self.TOP_P <= 1.0):
            raise ValueError(
                f"TOP_P must be between 0.0 and 1.0, got: {self.TOP_P}"
            )
        if self.TOP_K < 1:
            raise ValueError(
                f"TOP_K must be at least 1, got: {self.TOP_K}"
            )
        if self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if self.MAX_ATTEMPTS < 1:
            raise ValueError(
                f"MAX_ATTEMPTS must be at least 1, got: {self.MAX_ATTEMPTS}"
            )
        if self.RETRY_DELAY_SECONDS < 0:
            raise ValueError(
                f"RETRY_DELAY_SECONDS must not be negative, got: {self.RETRY_DELAY_SECONDS}"
            )
        if self.REQUEST_TIMEOUT_SECONDS < 1:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be at least 1 second, got: {self.REQUEST_TIMEOUT_SECONDS}"
            )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
