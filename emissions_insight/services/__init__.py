"""Service layer modules grouping business logic by concern.

This module provides convenience re-exports so that callers can simply do for
example `from emissions_insight.services import fetch_top_assets` without
having to know which underlying module provides the symbol.
"""

from .fetcher import FetchFailure, fetch_json  # noqa: F401
from .taxonomy import map_sector  # noqa: F401
from .emissions import (  # noqa: F401
    FetchOutcome,
    fetch_country_totals,
    fetch_sector_breakdown,
    fetch_top_assets,
)
from .context import build_context  # noqa: F401
from .gateway import CallBudget, ConversationalGateway, GatewayReply  # noqa: F401

__all__ = [
    "FetchFailure",
    "fetch_json",
    "map_sector",
    "FetchOutcome",
    "fetch_country_totals",
    "fetch_sector_breakdown",
    "fetch_top_assets",
    "build_context",
    "CallBudget",
    "ConversationalGateway",
    "GatewayReply",
]
