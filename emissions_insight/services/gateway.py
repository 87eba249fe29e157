"""Rate-limited conversational gateway in front of the OpenAI Responses API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from ..clients.openai_client import get_openai
from ..config import CALL_WINDOW_HOURS, CHAT_MODEL, MAX_CALLS_PER_DAY
from ..models import ChatMessage, GroundingSource
from ..utils.datetime_utils import format_timestamp, get_current_timestamp

APOLOGY_TEXT: str = (
    "I apologize, but I encountered an error while processing your request. Please try again."
)
DEFAULT_SOURCE_TITLE: str = "Web Source"
SEARCH_TOOL: Dict[str, str] = {"type": "web_search"}

AVAILABLE = "Available"
THROTTLED = "Throttled"

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class CallBudget:
    """Sliding-window call counter.

    Timestamps older than ``window`` are discarded lazily whenever the budget
    is consulted. State lives in memory only.
    """

    def __init__(
        self,
        max_calls: int = MAX_CALLS_PER_DAY,
        window: timedelta = timedelta(hours=CALL_WINDOW_HOURS),
        clock: Clock = get_current_timestamp,
        calls: Iterable[datetime] = (),
    ) -> None:
        self.max_calls = max_calls
        self.window = window
        self._clock = clock
        self._calls: List[datetime] = sorted(calls)

    @property
    def calls(self) -> tuple[datetime, ...]:
        return tuple(self._calls)

    def _prune(self, now: datetime) -> None:
        self._calls = [t for t in self._calls if now - t < self.window]

    def state(self) -> str:
        self._prune(self._clock())
        return THROTTLED if len(self._calls) >= self.max_calls else AVAILABLE

    def try_acquire(self) -> bool:
        """Record a call and return ``True`` if the window has room left."""
        now = self._clock()
        self._prune(now)
        if len(self._calls) >= self.max_calls:
            return False
        self._calls.append(now)
        return True

    def next_available(self) -> Optional[datetime]:
        """Earliest time a slot frees up, or ``None`` if nothing is recorded."""
        if not self._calls:
            return None
        return min(self._calls) + self.window


@dataclass(slots=True)
class GatewayReply:
    text: str
    sources: List[GroundingSource] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "sources": [s.to_dict() for s in self.sources]}


def history_payload(history: Sequence[ChatMessage]) -> List[Dict[str, str]]:
    """Convert *history* to Responses API input, dropping "thinking" placeholders."""
    return [
        {"role": "assistant" if msg.role == "model" else "user", "content": msg.text}
        for msg in history
        if not (msg.role == "model" and msg.is_thinking)
    ]


def dedupe_sources(sources: Iterable[GroundingSource]) -> List[GroundingSource]:
    """Keep the first source seen for each URI, in order of appearance."""
    unique: Dict[str, GroundingSource] = {}
    for source in sources:
        unique.setdefault(source.uri, source)
    return list(unique.values())


def extract_sources(response: Any) -> List[GroundingSource]:
    """Collect URL citations from a Responses API result."""
    sources: List[GroundingSource] = []
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            for annotation in getattr(part, "annotations", None) or []:
                if getattr(annotation, "type", None) != "url_citation":
                    continue
                uri = getattr(annotation, "url", None)
                if not uri:
                    continue
                title = getattr(annotation, "title", None) or DEFAULT_SOURCE_TITLE
                sources.append(GroundingSource(title=title, uri=uri))
    return dedupe_sources(sources)


class ConversationalGateway:
    """Answer chat messages within a call budget, grounded on a context string.

    The budget check and the slot reservation happen without awaiting, so
    concurrent requests on one event loop cannot overshoot the cap.
    """

    def __init__(
        self,
        budget: CallBudget | None = None,
        client_factory: Callable[[], Any] = get_openai,
        model: str = CHAT_MODEL,
    ) -> None:
        self.budget = budget or CallBudget()
        self._client_factory = client_factory
        self.model = model

    def _throttled_reply(self) -> GatewayReply:
        next_available = self.budget.next_available()
        when = format_timestamp(next_available) if next_available else "the current window resets"
        logger.warning("Call budget exhausted – next slot at %s", when)
        return GatewayReply(text=f"Rate limit exceeded. You can send another message after {when}.")

    async def send_message(
        self,
        history: Sequence[ChatMessage],
        new_message: str,
        system_instruction: str,
    ) -> GatewayReply:
        if not self.budget.try_acquire():
            return self._throttled_reply()

        try:
            client = self._client_factory()
            logger.info("Requesting answer from %s (%d history messages)", self.model, len(history))
            response = await client.responses.create(
                model=self.model,
                instructions=system_instruction,
                input=[*history_payload(history), {"role": "user", "content": new_message}],
                tools=[SEARCH_TOOL],
            )
            sources = extract_sources(response)
            logger.info("Received answer with %d unique sources", len(sources))
            return GatewayReply(text=response.output_text or "", sources=sources)
        except Exception:
            logger.exception("Language model call failed")
            return GatewayReply(text=APOLOGY_TEXT)

__all__ = [
    "APOLOGY_TEXT",
    "AVAILABLE",
    "THROTTLED",
    "CallBudget",
    "GatewayReply",
    "ConversationalGateway",
    "history_payload",
    "dedupe_sources",
    "extract_sources",
]
