"""Display-ready figures derived from the canonical data model.

The canonical model keeps full precision; rounding happens only here, at the
point values are prepared for presentation.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

from ..models import SERIES_SECTORS, EmissionDataPoint, SectorEmissionResponse
from .taxonomy import get_taxonomy

TONNES_PER_MEGATONNE: float = 1_000_000


def _percent_change(current: float, previous: float) -> float:
    if previous == 0:
        return 0.0
    return round((current - previous) / previous * 100, 1)


def series_total(point: EmissionDataPoint) -> float:
    return round(point.total(), 2)


def latest_breakdown(data: Sequence[EmissionDataPoint]) -> Dict[str, float]:
    """Latest year's sector values rounded to 2 decimals (empty if no data)."""
    if not data:
        return {}
    return {name: round(value, 2) for name, value in data[-1].sector_values().items()}


def year_over_year_growth(data: Sequence[EmissionDataPoint]) -> float:
    """Percent change of the latest total against the previous year."""
    if len(data) < 2:
        return 0.0
    return _percent_change(data[-1].total(), data[-2].total())


def sector_growth(data: Sequence[EmissionDataPoint], sector: str) -> float:
    if sector not in SERIES_SECTORS:
        raise ValueError(f"Unknown series sector {sector!r}")
    if len(data) < 2:
        return 0.0
    latest, previous = data[-1].sector_values(), data[-2].sector_values()
    return _percent_change(latest[sector], previous[sector])


def sector_shares(sectors: SectorEmissionResponse) -> List[Dict[str, float | str]]:
    """Each observation's share of the summed emissions, in percent."""
    total = sectors.total_emissions()
    return [
        {
            "name": item.sector,
            "value": round(item.emissions / total * 100, 2) if total > 0 else 0,
        }
        for item in sectors.all
    ]


def category_totals(sectors: SectorEmissionResponse, taxonomy: str = "breakdown") -> Dict[str, float]:
    """Sum raw observations into the coarse categories of *taxonomy*.

    Every category of the taxonomy is present in the result, zero if unused.
    """
    scheme = get_taxonomy(taxonomy)
    totals: Dict[str, float] = defaultdict(float)
    for item in sectors.all:
        totals[scheme.map(item.sector)] += item.emissions
    ordered = {category: round(totals.pop(category, 0.0), 2) for category in scheme.categories}
    # fallback outside the category list (series taxonomy) is reported last
    ordered.update({category: round(value, 2) for category, value in totals.items()})
    return ordered


def format_megatonnes(tonnes: float) -> str:
    """Format *tonnes* as megatonnes, e.g. ``1,234.57 Mt``."""
    value = round(tonnes / TONNES_PER_MEGATONNE, 2)
    return f"{value:,.2f}".rstrip("0").rstrip(".") + " Mt"

__all__ = [
    "series_total",
    "latest_breakdown",
    "year_over_year_growth",
    "sector_growth",
    "sector_shares",
    "category_totals",
    "format_megatonnes",
]
