"""
Service layer holding ToDo query building.
"""

from .todo_queries import (
    IncomingWindow,
    build_incoming_filter,
    build_search_filter,
    utc_today,
)

__all__ = [
    "IncomingWindow",
    "build_incoming_filter",
    "build_search_filter",
    "utc_today",
]
