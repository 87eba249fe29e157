"""Centralised configuration for emissions_insight.

Environment variables are loaded once and all related constants are
grouped by concern for easier maintenance.
"""

from __future__ import annotations

import os
from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Load environment variables from `.env` (if present)
# ---------------------------------------------------------------------------
load_dotenv()


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name)
    return float(raw) if raw else None


# ---------------------------------------------------------------------------
# Core credentials (from environment)
# A missing key must not break import; gateway calls fail closed instead.
# ---------------------------------------------------------------------------
OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")

# ---------------------------------------------------------------------------
# Upstream fetching
# ---------------------------------------------------------------------------
CORS_PROXY_URL: str = os.getenv("CORS_PROXY_URL", "https://corsproxy.io/?")
# None means requests waits indefinitely
HTTP_TIMEOUT_SECONDS: float | None = _optional_float("HTTP_TIMEOUT_SECONDS")

# ---------------------------------------------------------------------------
# Conversational gateway
# ---------------------------------------------------------------------------
CHAT_MODEL: str = os.getenv("CHAT_MODEL", "gpt-4.1-mini")
MAX_CALLS_PER_DAY: int = int(os.getenv("MAX_CALLS_PER_DAY", "2"))
CALL_WINDOW_HOURS: float = float(os.getenv("CALL_WINDOW_HOURS", "24"))

# ---------------------------------------------------------------------------
# HTTP service
# ---------------------------------------------------------------------------
PORT: int = int(os.getenv("PORT", "3000"))

# ---------------------------------------------------------------------------
# Re-exported names
# ---------------------------------------------------------------------------
__all__ = [
    # credentials
    "OPENAI_API_KEY",
    # fetching
    "CORS_PROXY_URL",
    "HTTP_TIMEOUT_SECONDS",
    # gateway
    "CHAT_MODEL",
    "MAX_CALLS_PER_DAY",
    "CALL_WINDOW_HOURS",
    # service
    "PORT",
]
