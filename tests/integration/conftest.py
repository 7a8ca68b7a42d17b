"""Pytest configuration for integration tests.

These tests call the live Gemini API and are skipped unless a real
GEMINI_API_KEY is available (environment or .env in the project root).
"""

import os

import pytest


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip the integration suite when only the placeholder key is set."""
    gemini_key = os.getenv("GEMINI_API_KEY")
    if not gemini_key or gemini_key == "test-gemini-key":
        pytest.skip(
            "Integration tests skipped. Missing GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )
