"""
Relational models using SQLAlchemy's declarative mapping.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

TODOS_TABLE = "todos"


class Base(DeclarativeBase):
    """Declarative base shared by every mapped model."""


class BaseEntity(Base):
    """
    Abstract base for entities identified by a store-assigned integer id.

    Generic repositories are bound to this type.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class ToDo(BaseEntity):
    """A to-do item (table `todos`)."""

    __tablename__ = TODOS_TABLE

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # Naive UTC
    expiry_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    percent_complete: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_done: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"ToDo(id={self.id!r}, title={self.title!r}, is_done={self.is_done!r})"
