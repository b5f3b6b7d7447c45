"""
Repository layer for data access.
Implements Repository Pattern and follows Single Responsibility Principle.
"""

from .base_repository import Repository
from .filters import AllOf, AnyOf, Condition, FilterSpec, InvalidFilterError, Operator
from .interfaces import IRepository
from .models import Base, BaseEntity, ToDo
from .results import OperationResult, RepositoryError, RepositoryErrorKind

__all__ = [
    "AllOf",
    "AnyOf",
    "Base",
    "BaseEntity",
    "Condition",
    "FilterSpec",
    "IRepository",
    "InvalidFilterError",
    "Operator",
    "OperationResult",
    "Repository",
    "RepositoryError",
    "RepositoryErrorKind",
    "ToDo",
]
