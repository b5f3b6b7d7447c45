"""
API utility functions for response formatting.
"""

from typing import Any, Dict, Optional

from fastapi import status
from fastapi.responses import JSONResponse

from internal.api.schemas.todo_schemas import ToDoResponse
from repositories.models import ToDo
from repositories.results import OperationResult


def success_response(message: str = "Success", data: Any = None) -> Dict:
    """
    Create a success response.

    Args:
        message: Success message
        data: Response data (optional)

    Returns:
        Standard response dictionary with error_code=0
    """
    return {"error_code": 0, "message": message, "data": data}


def error_response(message: str, error_code: int = 1, data: Any = None) -> Dict:
    """
    Create an error response.

    Args:
        message: Error message
        error_code: Error code (default: 1)
        data: Optional error data

    Returns:
        Standard response dictionary with error_code=1
    """
    return {"error_code": error_code, "message": message, "data": data}


def bad_request(message: str, result: Optional[OperationResult] = None) -> JSONResponse:
    """400 response; a failed repository result contributes its error kind."""
    data = None
    if result is not None and result.error is not None:
        data = {"reason": result.error.kind.value}
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response(message=message, data=data),
    )


def not_found(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_response(message=message),
    )


def serialize_todo(todo: ToDo) -> Dict[str, Any]:
    """Serialize a ToDo with camelCase keys and ISO timestamps."""
    return ToDoResponse.model_validate(todo).model_dump(mode="json", by_alias=True)
