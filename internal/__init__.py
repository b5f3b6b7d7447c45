"""
Internal package.
Contains API routes, schemas and dependencies.
"""

from . import api

__all__ = [
    "api",
]
