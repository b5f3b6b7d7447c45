"""
Core module containing configuration, logging and database access.
"""

from .config import Settings, get_settings
from .logger import logger, format_exception_short

__all__ = [
    "Settings",
    "get_settings",
    "logger",
    "format_exception_short",
]
