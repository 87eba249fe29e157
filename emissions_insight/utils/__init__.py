"""Utility functions for the emissions insight project.

Re-exports the datetime helpers so that imports like
`from ..utils import get_current_timestamp` work as expected.
"""

from .datetime_utils import get_current_timestamp, parse_timestamp, format_timestamp  # noqa: F401

__all__ = [
    "get_current_timestamp",
    "parse_timestamp",
    "format_timestamp",
]
