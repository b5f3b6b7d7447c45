"""
ToDo Dependencies.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from repositories import IRepository, Repository, ToDo


def get_todo_repository(
    session: AsyncSession = Depends(get_session),
) -> IRepository[ToDo]:
    """Get a ToDo repository bound to the request's session."""
    return Repository(session, ToDo)
