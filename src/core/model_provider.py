"""Credential resolution and client construction for the Gemini image model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.config import get_env_api_key
from core.exceptions import MissingCredentialError

if TYPE_CHECKING:
    from google import genai


def resolve_api_key(user_key: str | None = None) -> str:
    """Pick the API key to use for a request.

    Checks for available credentials in order:
    1. Key entered by the user for this session
    2. Key from the environment (deployment variable)

    Raises:
        MissingCredentialError: If neither source provides a key
    """
    if user_key and user_key.strip():
        return user_key.strip()

    env_key = get_env_api_key()
    if env_key:
        return env_key

    raise MissingCredentialError()


def get_client(api_key: str) -> genai.Client:
    """Get a configured Gemini client for the given key."""
    from google import genai

    return genai.Client(api_key=api_key)
