"""
API Schemas (Request/Response Models).
"""

from .common_schemas import (
    StandardResponse,
    HealthResponse,
)
from .todo_schemas import (
    ToDoCreateRequest,
    ToDoResponse,
    ToDoUpdateRequest,
)

__all__ = [
    # Common schemas
    "StandardResponse",
    "HealthResponse",
    # ToDo schemas
    "ToDoCreateRequest",
    "ToDoResponse",
    "ToDoUpdateRequest",
]
