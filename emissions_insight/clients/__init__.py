"""Convenience re-exports for singleton SDK accessors."""

from .openai_client import get_openai  # noqa: F401
from .http_client import get_session as get_http_session  # noqa: F401

__all__ = [
    "get_openai",
    "get_http_session",
]
