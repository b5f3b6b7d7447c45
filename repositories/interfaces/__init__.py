"""
Repository Interfaces.
"""

from .repository_interface import EntityT, IRepository

__all__ = [
    "EntityT",
    "IRepository",
]
