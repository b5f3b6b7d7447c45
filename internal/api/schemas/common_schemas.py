"""
Common API schemas shared across different endpoints.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class StandardResponse(BaseModel):
    """
    Standard API response format for all endpoints.

    - error_code: 0 = success, 1 = error
    - message: Success or error message
    - data: Response data (optional)
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error_code": 0,
                    "message": "ToDo item retrieved",
                    "data": {
                        "id": 1,
                        "title": "Buy groceries",
                        "description": "Milk, eggs and bread",
                        "expiryDate": "2025-01-15T18:00:00",
                        "percentComplete": 0,
                        "isDone": False,
                    },
                },
                {"error_code": 1, "message": "ToDo item not found.", "data": None},
            ]
        }
    )

    error_code: int = 0
    message: str
    data: Optional[Any] = None


class HealthResponse(BaseModel):
    """Response model for health check (internal use)."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "status": "healthy",
                    "service": "ToDo API",
                    "version": "1.0.0",
                    "database": "connected",
                }
            ]
        }
    )

    status: str
    service: str
    version: str
    database: str
