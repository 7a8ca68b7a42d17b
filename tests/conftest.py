"""Shared pytest configuration and fixtures.

The config module validates at import time, so a placeholder API key is set
before any pantry_chef module is imported. A real key from .env wins.
"""

import os

import pytest
from dotenv import load_dotenv

load_dotenv()
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")

PLACEHOLDER_API_KEY = "test-gemini-key"


@pytest.fixture
def recipe_payload():
    """One recipe as the Gemini API returns it (camelCase JSON)."""
    return {
        "recipeName": "Spinach Omelette",
        "description": "A fluffy omelette packed with greens.",
        "rating": 4,
        "ingredients": [
            {"item": "egg", "quantity": "2"},
            {"item": "spinach", "quantity": "1 cup"},
        ],
        "instructions": [
            "Whisk the eggs.",
            "Wilt the spinach in a hot pan.",
            "Pour in the eggs and fold.",
        ],
        "notes": "Add feta for a salty kick.",
    }
