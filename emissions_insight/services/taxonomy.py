"""Map fine-grained Climate TRACE sector labels onto small reporting taxonomies.

Labels are grouped once by what they describe; each named taxonomy then
decides which coarse category every group lands in. Lookup is exact and
case-sensitive, and anything not in the table falls back to the taxonomy's
fallback category.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

# ---------------------------------------------------------------------------
# Upstream labels, grouped by activity
# ---------------------------------------------------------------------------
_LABEL_GROUPS: Dict[str, Tuple[str, ...]] = {
    "energy": (
        "power",
        "electricity-generation",
        "heat-plants",
        "other-energy-use",
        "fossil-fuel-operations",
        "oil-and-gas-production",
        "oil-and-gas-refining",
        "oil-and-gas-transport",
        "solid-fuel-transformation",
        "buildings",
        "residential-onsite-fuel-usage",
        "non-residential-onsite-fuel-usage",
    ),
    "industry": (
        "manufacturing",
        "cement",
        "steel",
        "iron-and-steel",
        "aluminum",
        "chemicals",
        "petrochemical-steam-cracking",
        "pulp-and-paper",
        "glass",
        "lime",
        "food-beverage-tobacco",
        "textiles-leather-apparel",
        "wood-and-wood-products",
        "other-manufacturing",
    ),
    "mining": (
        "mineral-extraction",
        "coal-mining",
        "bauxite-mining",
        "copper-mining",
        "iron-mining",
        "rock-quarrying",
        "sand-quarrying",
        "other-mining-quarrying",
    ),
    "transport": (
        "transportation",
        "domestic-aviation",
        "international-aviation",
        "domestic-shipping",
        "international-shipping",
        "road-transportation",
        "railways",
        "other-transport",
    ),
    "agriculture": (
        "agriculture",
        "forestry-and-land-use",
        "enteric-fermentation-cattle-feedlot",
        "enteric-fermentation-cattle-pasture",
        "enteric-fermentation-other",
        "manure-management-cattle-feedlot",
        "manure-left-on-pasture-cattle",
        "rice-cultivation",
        "synthetic-fertilizer-application",
        "cropland-fires",
        "crop-residues",
    ),
    "waste": (
        "waste",
        "solid-waste-disposal",
        "biological-treatment-of-solid-waste",
        "incineration-and-open-burning-of-waste",
        "domestic-wastewater-treatment-and-discharge",
        "industrial-wastewater-treatment-and-discharge",
    ),
}


@dataclass(frozen=True)
class Taxonomy:
    """A named set of coarse categories plus the label table feeding it."""

    name: str
    categories: Tuple[str, ...]
    fallback: str
    table: Mapping[str, str]

    def map(self, label: str | None) -> str:
        if not isinstance(label, str):
            return self.fallback
        return self.table.get(label, self.fallback)


def _build(name: str, categories: Tuple[str, ...], fallback: str, groups: Mapping[str, str]) -> Taxonomy:
    table: Dict[str, str] = {}
    for group, category in groups.items():
        if category not in categories:
            raise ValueError(f"Category {category!r} is not part of taxonomy {name!r}")
        for label in _LABEL_GROUPS[group]:
            table[label] = category
    return Taxonomy(name, categories, fallback, MappingProxyType(table))


# Aggregation of raw sector observations and assets
BREAKDOWN = _build(
    "breakdown",
    ("Energy", "Industry", "Transport", "Mining", "Other"),
    "Other",
    {
        "energy": "Energy",
        "industry": "Industry",
        "mining": "Mining",
        "transport": "Transport",
    },
)

# Columns of the yearly emissions series
SERIES = _build(
    "series",
    ("Energy", "Industry", "Agriculture", "Transport", "Waste"),
    "Other",
    {
        "energy": "Energy",
        "industry": "Industry",
        "mining": "Industry",
        "transport": "Transport",
        "agriculture": "Agriculture",
        "waste": "Waste",
    },
)

TAXONOMIES: Mapping[str, Taxonomy] = MappingProxyType({t.name: t for t in (BREAKDOWN, SERIES)})


def get_taxonomy(name: str) -> Taxonomy:
    try:
        return TAXONOMIES[name]
    except KeyError:
        raise ValueError(f"Unknown taxonomy {name!r}; expected one of {sorted(TAXONOMIES)}") from None


def map_sector(label: str | None, taxonomy: str = "breakdown") -> str:
    """Return the coarse category of *label* in the named *taxonomy*.

    Unrecognised labels (including empty or missing ones) return the
    taxonomy's fallback, ``"Other"`` for both built-in variants.
    """
    return get_taxonomy(taxonomy).map(label)

__all__ = ["Taxonomy", "BREAKDOWN", "SERIES", "TAXONOMIES", "get_taxonomy", "map_sector"]
