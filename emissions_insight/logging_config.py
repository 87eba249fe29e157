"""Centralised logging configuration.

Importing this module applies the project log format once; the level comes
from ``LOG_LEVEL`` (default INFO). Other modules simply import `logging` and
call `logging.getLogger(__name__)`.
"""

import logging
import os

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

__all__ = ["logging"]
