"""Natural-language summary of the dashboard data used to ground the assistant."""

from __future__ import annotations

from typing import Sequence

from ..models import Asset, EmissionDataPoint, SectorEmissionResponse
from .metrics import format_megatonnes, latest_breakdown

NO_DATA_CONTEXT: str = "No data available. The API might be down."

# Country-level Climate TRACE totals stay far below this per-sector value
_GLOBAL_ENERGY_THRESHOLD_GT: float = 10


def build_context(
    data: Sequence[EmissionDataPoint],
    assets: Sequence[Asset],
    sectors: SectorEmissionResponse | None,
) -> str:
    """Return the system instruction describing *data*, *assets* and *sectors*."""
    if not data:
        return NO_DATA_CONTEXT

    latest = data[-1]
    start_year, end_year = data[0].year, latest.year
    values = latest_breakdown(data)
    top_asset = f"{assets[0].name} ({assets[0].country})" if assets else "N/A"
    sector_sum = sectors.total_emissions() if sectors is not None else 0
    scope = (
        "United States (Climate Trace API)"
        if latest.energy < _GLOBAL_ENERGY_THRESHOLD_GT
        else "Global"
    )
    provenance = (
        "Note: the yearly values are modelled by splitting a single national total"
        " across sectors with fixed shares; they are estimates, not measured yearly data.\n"
        if any(point.derived for point in data)
        else ""
    )

    return f"""
You are an intelligent assistant integrated into the "EcoInsight" Dashboard.
Current Dataset: {scope} Greenhouse Gas Emissions (in Billion Tonnes CO2e) from {start_year} to {end_year}.
Key Sectors tracked: Energy, Industry Processes, Agriculture, Transportation, and Waste.
{provenance}
Data Summary (Latest Data - {end_year}):
- Energy: {values["Energy"]} Gt
- Industry: {values["Industry"]} Gt
- Transport: {values["Transport"]} Gt
- Agriculture: {values["Agriculture"]} Gt
- Waste: {values["Waste"]} Gt

Top High-Emission Asset on Watchlist: {top_asset}

Sector Emissions (Sum): {format_megatonnes(sector_sum)} CO2e

Trends:
- Analyse the provided data range from {start_year} to {end_year}.
- Note any dips (e.g., around 2020 due to COVID-19) or rises.

Your Role:
1. Answer questions specifically about this data.
2. If the user asks about external factors, future predictions beyond {end_year}, or specific policies, USE THE WEB SEARCH TOOL to find the latest information.
3. Be concise, professional, and data-driven.
"""

__all__ = ["NO_DATA_CONTEXT", "build_context"]
