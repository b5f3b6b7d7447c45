"""
FastAPI dependencies.
"""

from .todo_dependencies import get_todo_repository

__all__ = ["get_todo_repository"]
