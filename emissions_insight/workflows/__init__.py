"""End-to-end workflows composed from the service layer."""

from .dashboard_pipeline import DashboardSnapshot, EmptyDatasetError, load_dashboard, run  # noqa: F401

__all__ = ["DashboardSnapshot", "EmptyDatasetError", "load_dashboard", "run"]
