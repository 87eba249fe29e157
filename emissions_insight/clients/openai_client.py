"""Singleton accessor for the async OpenAI SDK client."""

from __future__ import annotations

from openai import AsyncOpenAI as _AsyncOpenAIClient

from ..config import OPENAI_API_KEY

_client: _AsyncOpenAIClient | None = None


def get_openai() -> _AsyncOpenAIClient:
    """Return a singleton instance of :class:`openai.AsyncOpenAI`.

    Raises :class:`EnvironmentError` when no API key is configured; the
    gateway calls this lazily so the failure surfaces per request.
    """
    global _client
    if _client is None:
        if not OPENAI_API_KEY:
            raise EnvironmentError("OPENAI_API_KEY is not set in environment variables")
        _client = _AsyncOpenAIClient(api_key=OPENAI_API_KEY)
    return _client

__all__ = ["get_openai"]
