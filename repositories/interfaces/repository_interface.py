"""
Interface for the generic entity repository.
Defines the contract that all entity repositories must implement.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from repositories.filters import FilterSpec
from repositories.models import BaseEntity
from repositories.results import OperationResult, RepositoryError

EntityT = TypeVar("EntityT", bound=BaseEntity)


class IRepository(ABC, Generic[EntityT]):
    """Interface for CRUD and filtered queries over one entity type."""

    last_error: Optional[RepositoryError] = None

    @abstractmethod
    async def list_all(self) -> List[EntityT]:
        """
        Fetch every record.

        Returns:
            List[EntityT]: All records, or an empty list if the store failed
        """
        pass

    @abstractmethod
    async def get_by_id(self, entity_id: Optional[int]) -> Optional[EntityT]:
        """
        Find a record by id.

        Args:
            entity_id: Identifier; None or <= 0 never reaches the store

        Returns:
            Optional[EntityT]: The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_all_where(self, spec: FilterSpec) -> Optional[List[EntityT]]:
        """
        Fetch records matching a filter specification.

        Args:
            spec: Filter evaluated by the store

        Returns:
            Optional[List[EntityT]]: Matching records, None if the query failed
        """
        pass

    @abstractmethod
    async def add(self, entity: EntityT) -> OperationResult:
        """Insert a new record and commit."""
        pass

    @abstractmethod
    async def update(self, entity: EntityT) -> OperationResult:
        """Overwrite the record with the entity's id and commit."""
        pass

    @abstractmethod
    async def remove(self, entity: EntityT) -> OperationResult:
        """Delete the record with the entity's id, if it still exists, and commit."""
        pass
