"""Run one dashboard load: `python -m emissions_insight`."""

from .workflows.dashboard_pipeline import run

run()
