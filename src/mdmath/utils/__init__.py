"""Utility modules for mdmath.

Provides:
- logger: get_logger for logging
"""

from mdmath.utils.logger import ROOT_LOGGER, get_logger

__all__ = [
    "ROOT_LOGGER",
    "get_logger",
]
