"""
API Routes.
"""

from .health_routes import create_health_routes
from .todo_routes import create_todo_routes

__all__ = [
    "create_health_routes",
    "create_todo_routes",
]
