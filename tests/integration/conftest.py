"""Pytest configuration and fixtures for integration tests.

Ensures environment variables are loaded and validates the Gemini API key
before running integration tests against the real model.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load .env before collection so the settings module sees the key."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    # One retry with no wait keeps live runs short
    os.environ.setdefault("RETRY_DELAY_SECONDS", "0")

    print("\n" + "=" * 70)
    print("Note: These tests require a valid GEMINI_API_KEY")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip integration tests when GEMINI_API_KEY is not configured."""
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip(
            "Integration tests skipped. Missing API keys: GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )
