"""Climate TRACE ingestion and normalisation into the canonical data model."""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, TypeVar

import requests

from ..models import Asset, EmissionDataPoint, SectorEmission, SectorEmissionResponse
from .fetcher import FetchFailure, fetch_json

# ---------------------------------------------------------------------------
# Local Climate TRACE settings (only used by this service)
# ---------------------------------------------------------------------------
CT_EMISSIONS_URL: str = "https://api.climatetrace.org/v6/country/emissions?iso=USA&since=2015&to=2023"
CT_ASSETS_URL: str = "https://api.climatetrace.org/v6/assets?limit=20"
CT_EMISSIONS_BY_SECTORS_URL: str = "https://api.climatetrace.org/v6/assets/emissions"

GAS_CO2E_100YR: str = "co2e_100yr"
TONNES_PER_GIGATONNE: float = 1_000_000_000
SERIES_YEARS: range = range(2015, 2023 + 1)
# Approximate US sector split applied to the national total
SECTOR_SPLIT: Mapping[str, float] = {
    "Energy": 0.40,
    "Industry": 0.25,
    "Agriculture": 0.15,
    "Transport": 0.15,
    "Waste": 0.05,
}
TOP_ASSETS_LIMIT: int = 10

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Outcome statuses
OK = "ok"
EMPTY = "empty"
MALFORMED = "malformed"
UNREACHABLE = "unreachable"


@dataclass(slots=True)
class FetchOutcome(Generic[T]):
    """A pipeline result together with why it may be empty."""

    value: T
    status: str = OK
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == OK


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


def _quantity(value: Any) -> float:
    """Coerce an upstream emissions quantity to a non-negative float.

    Missing values count as 0. Unparsable, non-finite or negative values are
    logged and also count as 0, so one bad record never sinks a whole payload.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        logger.warning("Ignoring non-numeric emissions quantity: %r", value)
        return 0.0
    try:
        quantity = float(value)
    except ValueError:
        logger.warning("Ignoring non-numeric emissions quantity: %r", value)
        return 0.0
    if not math.isfinite(quantity) or quantity < 0:
        logger.warning("Clamping invalid emissions quantity %r to 0", value)
        return 0.0
    return quantity


# ---------------------------------------------------------------------------
# Country totals -> synthetic yearly series
# ---------------------------------------------------------------------------

def synthesize_series(
    total_gt: float,
    years: Iterable[int] = SERIES_YEARS,
    split: Mapping[str, float] = SECTOR_SPLIT,
) -> List[EmissionDataPoint]:
    """Spread one aggregate total across *years* using a fixed sector *split*.

    Every year receives identical values; the points are flagged ``derived``
    because they are modelled, not measured.
    """
    return [
        EmissionDataPoint(
            year=year,
            energy=total_gt * split["Energy"],
            industry=total_gt * split["Industry"],
            agriculture=total_gt * split["Agriculture"],
            transport=total_gt * split["Transport"],
            waste=total_gt * split["Waste"],
            derived=True,
        )
        for year in years
    ]


def load_country_totals(session: requests.Session | None = None) -> FetchOutcome[List[EmissionDataPoint]]:
    logger.info("Fetching country emissions from: %s", CT_EMISSIONS_URL)
    try:
        raw = fetch_json(CT_EMISSIONS_URL, session=session)
    except FetchFailure as exc:
        logger.error("Failed to fetch emission data: %s", exc)
        return FetchOutcome([], UNREACHABLE, str(exc))

    emissions = raw.get("emissions") if isinstance(raw, dict) else None
    co2e = emissions.get(GAS_CO2E_100YR) if isinstance(emissions, dict) else None
    if isinstance(co2e, bool) or not isinstance(co2e, (int, float)) or co2e < 0:
        logger.warning("Unexpected country emissions format: %s", raw)
        return FetchOutcome([], MALFORMED, "country payload lacks a usable emissions.co2e_100yr total")

    series = synthesize_series(co2e / TONNES_PER_GIGATONNE)
    logger.info("Synthesised %d yearly points from a %.2f Gt total", len(series), co2e / TONNES_PER_GIGATONNE)
    return FetchOutcome(series)


def fetch_country_totals(session: requests.Session | None = None) -> List[EmissionDataPoint]:
    """Return the 2015–2023 series derived from the national total, or ``[]``."""
    return load_country_totals(session).value


# ---------------------------------------------------------------------------
# Per-sector observations
# ---------------------------------------------------------------------------

def _to_sector_emission(item: Dict[str, Any]) -> SectorEmission:
    return SectorEmission(
        asset_count=_or_default(item.get("AssetCount"), 0),
        emissions=_quantity(item.get("Emissions")),
        year=item.get("Year"),
        month=item.get("Month"),
        gas=_or_default(item.get("Gas"), GAS_CO2E_100YR),
        sector=_or_default(item.get("Sector"), "Unknown"),
    )


def load_sector_breakdown(session: requests.Session | None = None) -> FetchOutcome[SectorEmissionResponse]:
    logger.info("Fetching sector emissions from: %s", CT_EMISSIONS_BY_SECTORS_URL)
    try:
        raw = fetch_json(CT_EMISSIONS_BY_SECTORS_URL, session=session)
    except FetchFailure as exc:
        logger.error("Failed to fetch sector emissions: %s", exc)
        return FetchOutcome(SectorEmissionResponse(), UNREACHABLE, str(exc))

    items = raw.get("all") if isinstance(raw, dict) else None
    if not isinstance(items, list):
        logger.warning("Invalid sector data format: %s", raw)
        return FetchOutcome(SectorEmissionResponse(), MALFORMED, "sector payload lacks an 'all' array")

    response = SectorEmissionResponse(
        all=[_to_sector_emission(item) for item in items if isinstance(item, dict)]
    )
    logger.info("Received %d sector observations", len(response.all))
    return FetchOutcome(response, OK if response.all else EMPTY)


def fetch_sector_breakdown(session: requests.Session | None = None) -> SectorEmissionResponse:
    """Return raw sector observations with defaults filled in; no aggregation."""
    return load_sector_breakdown(session).value


# ---------------------------------------------------------------------------
# Top assets
# ---------------------------------------------------------------------------

def _co2e_quantity(summaries: Any) -> float:
    if not isinstance(summaries, list):
        return 0.0
    for entry in summaries:
        if isinstance(entry, dict) and entry.get("Gas") == GAS_CO2E_100YR:
            return _quantity(entry.get("EmissionsQuantity"))
    return 0.0


def _to_asset(item: Dict[str, Any]) -> Asset:
    asset_id = item.get("Id")
    return Asset(
        id=str(asset_id) if asset_id not in (None, "") else str(uuid.uuid4()),
        name=_or_default(item.get("Name"), "Unknown Asset"),
        country=_or_default(item.get("Country"), "N/A"),
        sector=_or_default(item.get("Sector"), "N/A"),
        emissions=_co2e_quantity(item.get("EmissionsSummary")),
        last_update="2023",
    )


def load_top_assets(session: requests.Session | None = None) -> FetchOutcome[List[Asset]]:
    logger.info("Fetching assets from: %s", CT_ASSETS_URL)
    try:
        raw = fetch_json(CT_ASSETS_URL, session=session)
    except FetchFailure as exc:
        logger.error("Failed to fetch assets: %s", exc)
        return FetchOutcome([], UNREACHABLE, str(exc))

    items = raw.get("assets") if isinstance(raw, dict) else None
    if not isinstance(items, list):
        logger.warning("Invalid assets format: %s", raw)
        return FetchOutcome([], MALFORMED, "assets payload lacks an 'assets' array")

    assets = [_to_asset(item) for item in items if isinstance(item, dict)]
    assets.sort(key=lambda asset: asset.emissions, reverse=True)

    top = assets[:TOP_ASSETS_LIMIT]
    logger.info("Keeping top %d of %d assets", len(top), len(assets))
    return FetchOutcome(top, OK if top else EMPTY)


def fetch_top_assets(session: requests.Session | None = None) -> List[Asset]:
    """Return up to ten assets ranked by CO2e (100-year) emissions, highest first."""
    return load_top_assets(session).value

__all__ = [
    "FetchOutcome",
    "synthesize_series",
    "load_country_totals",
    "load_sector_breakdown",
    "load_top_assets",
    "fetch_country_totals",
    "fetch_sector_breakdown",
    "fetch_top_assets",
]
