"""Domain models used across the project."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from .utils.datetime_utils import get_current_timestamp, parse_timestamp

# Coarse sectors carried by every point of the yearly series
SERIES_SECTORS: tuple[str, ...] = ("Energy", "Industry", "Agriculture", "Transport", "Waste")

Role = Literal["user", "model"]


@dataclass(slots=True)
class EmissionDataPoint:
    """Emissions for one calendar year, split by coarse sector (Gt CO2e).

    ``derived`` marks points modelled from an aggregate total rather than
    observed year by year.
    """

    year: int
    energy: float = 0.0
    industry: float = 0.0
    agriculture: float = 0.0
    transport: float = 0.0
    waste: float = 0.0
    derived: bool = False

    def sector_values(self) -> Dict[str, float]:
        """Return ``{sector: value}`` keyed by the coarse sector names."""
        return {name: getattr(self, name.lower()) for name in SERIES_SECTORS}

    def total(self) -> float:
        return sum(self.sector_values().values())

    def to_dict(self) -> Dict[str, Any]:
        return {"year": self.year, **self.sector_values(), "derived": self.derived}


@dataclass(slots=True)
class SectorEmission:
    """A raw per-sector observation as returned by the sector endpoint."""

    asset_count: int = 0
    emissions: float = 0.0
    year: Optional[int] = None
    month: Optional[int] = None
    gas: str = "co2e_100yr"
    sector: str = "Unknown"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "AssetCount": self.asset_count,
            "Emissions": self.emissions,
            "Year": self.year,
            "Month": self.month,
            "Gas": self.gas,
            "Sector": self.sector,
        }


@dataclass(slots=True)
class SectorEmissionResponse:
    all: List[SectorEmission] = field(default_factory=list)

    def total_emissions(self) -> float:
        return sum(item.emissions for item in self.all)

    def to_dict(self) -> Dict[str, Any]:
        return {"all": [item.to_dict() for item in self.all]}


@dataclass(slots=True)
class Asset:
    """A single high-emission facility (emissions in tonnes)."""

    id: str
    name: str = "Unknown Asset"
    country: str = "N/A"
    sector: str = "N/A"
    emissions: float = 0.0
    last_update: str = "2023"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "country": self.country,
            "sector": self.sector,
            "emissions": self.emissions,
            "lastUpdate": self.last_update,
        }


@dataclass(slots=True, frozen=True)
class GroundingSource:
    """A web citation attached to a model answer; identified by ``uri``."""

    title: str
    uri: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "uri": self.uri}


@dataclass(slots=True)
class ChatMessage:
    """One turn of the conversation shown in the chat panel."""

    role: Role
    text: str
    timestamp: datetime = field(default_factory=get_current_timestamp)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    sources: List[GroundingSource] = field(default_factory=list)
    is_thinking: bool = False

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ChatMessage":
        """Build a message from its camel-case wire representation."""
        timestamp = raw.get("timestamp")
        return cls(
            role=raw.get("role", "user"),
            text=raw.get("text") or "",
            timestamp=parse_timestamp(timestamp) if timestamp else get_current_timestamp(),
            id=raw.get("id") or uuid.uuid4().hex,
            sources=[
                GroundingSource(title=s.get("title", ""), uri=s["uri"])
                for s in raw.get("sources") or []
                if s.get("uri")
            ],
            is_thinking=bool(raw.get("isThinking", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
            "sources": [s.to_dict() for s in self.sources],
            "isThinking": self.is_thinking,
        }


__all__ = [
    "SERIES_SECTORS",
    "EmissionDataPoint",
    "SectorEmission",
    "SectorEmissionResponse",
    "Asset",
    "GroundingSource",
    "ChatMessage",
]
