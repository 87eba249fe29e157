"""Load all dashboard data concurrently and derive the assistant context."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from ..logging_config import logging as _  # noqa: F401  # ensure config applied early
from ..models import Asset, EmissionDataPoint, SectorEmissionResponse
from ..services.context import build_context
from ..services.emissions import load_country_totals, load_sector_breakdown, load_top_assets

EMPTY_DATASET_MESSAGE: str = "API returned no valid data (all emissions sources are empty)"

logger = logging.getLogger(__name__)


class EmptyDatasetError(RuntimeError):
    """Every upstream source came back empty."""


@dataclass(slots=True)
class DashboardSnapshot:
    data: List[EmissionDataPoint] = field(default_factory=list)
    assets: List[Asset] = field(default_factory=list)
    sectors: SectorEmissionResponse = field(default_factory=SectorEmissionResponse)
    context: str = ""
    outcomes: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not (self.data or self.assets or self.sectors.all)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [point.to_dict() for point in self.data],
            "assets": [asset.to_dict() for asset in self.assets],
            "sectors": self.sectors.to_dict(),
            "context": self.context,
            "outcomes": self.outcomes,
            "error": self.error,
        }


async def load_dashboard(
    strict: bool = False,
    session: requests.Session | None = None,
) -> DashboardSnapshot:
    """Fetch series, assets and sector observations concurrently.

    Each source fails independently. When all three are empty the snapshot
    carries an ``error`` (or :class:`EmptyDatasetError` is raised if *strict*).
    """
    totals, assets, sectors = await asyncio.gather(
        asyncio.to_thread(load_country_totals, session),
        asyncio.to_thread(load_top_assets, session),
        asyncio.to_thread(load_sector_breakdown, session),
    )
    snapshot = DashboardSnapshot(
        data=totals.value,
        assets=assets.value,
        sectors=sectors.value,
        outcomes={
            "countryTotals": totals.status,
            "topAssets": assets.status,
            "sectorBreakdown": sectors.status,
        },
    )

    if snapshot.is_empty:
        logger.error("Critical failure in dashboard data loading: %s", EMPTY_DATASET_MESSAGE)
        if strict:
            raise EmptyDatasetError(EMPTY_DATASET_MESSAGE)
        snapshot.error = EMPTY_DATASET_MESSAGE
        snapshot.context = f"Data unavailable. Error: {EMPTY_DATASET_MESSAGE}"
        return snapshot

    snapshot.context = build_context(snapshot.data, snapshot.assets, snapshot.sectors)
    return snapshot


def run() -> DashboardSnapshot:
    """Load the dashboard once and log what came back."""
    logger.info("Starting emissions dashboard load")
    snapshot = asyncio.run(load_dashboard())
    _log_stats(snapshot)
    return snapshot


def _log_stats(snapshot: DashboardSnapshot) -> None:
    logger.info("=== Emissions Dashboard Statistics ===")
    logger.info("Yearly points: %d", len(snapshot.data))
    logger.info("Top assets: %d", len(snapshot.assets))
    logger.info("Sector observations: %d", len(snapshot.sectors.all))
    for source, status in snapshot.outcomes.items():
        logger.info("Source %s: %s", source, status)
    logger.info("======================================")

__all__ = ["DashboardSnapshot", "EmptyDatasetError", "load_dashboard", "run"]
