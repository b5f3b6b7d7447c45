"""
Pydantic schemas for the ToDo API.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ToDoPayload(BaseModel):
    """Fields a client supplies when creating or updating a ToDo."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "title": "Buy groceries",
                    "description": "Milk, eggs and bread",
                    "expiryDate": "2025-01-15T18:00:00Z",
                }
            ]
        },
    )

    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(..., min_length=1, description="Task description")
    expiry_date: datetime = Field(..., description="When the task expires (UTC)")

    @field_validator("title", "description")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("expiry_date")
    @classmethod
    def to_naive_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class ToDoCreateRequest(ToDoPayload):
    """Request model for ToDo creation."""


class ToDoUpdateRequest(ToDoPayload):
    """Request model for a full ToDo update."""


class ToDoResponse(BaseModel):
    """Response model for a ToDo item."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        json_schema_extra={
            "examples": [
                {
                    "id": 1,
                    "title": "Buy groceries",
                    "description": "Milk, eggs and bread",
                    "expiryDate": "2025-01-15T18:00:00",
                    "percentComplete": 0,
                    "isDone": False,
                }
            ]
        },
    )

    id: int
    title: str
    description: str
    expiry_date: datetime
    percent_complete: int
    is_done: bool
