"""
Generic repository with common CRUD operations.
Follows Single Responsibility Principle - only handles data access.

Every operation catches storage failures at its own boundary: reads return
an empty or absent value, writes return a falsy OperationResult. Nothing is
raised to the caller.
"""

from typing import Any, Dict, List, Optional, Type

from sqlalchemy import inspect, select
from sqlalchemy import update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import make_transient

from core.logger import format_exception_short, logger
from repositories.filters import FilterSpec
from repositories.interfaces import EntityT, IRepository
from repositories.results import (
    OperationResult,
    RepositoryError,
    RepositoryErrorKind,
)


class Repository(IRepository[EntityT]):
    """
    Repository providing CRUD and filtered queries for one model.

    Bound to a single AsyncSession, normally one per request.
    """

    def __init__(self, session: AsyncSession, model: Type[EntityT]):
        """
        Initialize repository.

        Args:
            session: Session used for every operation
            model: Mapped entity class
        """
        self.session = session
        self.model = model
        self.last_error: Optional[RepositoryError] = None

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def _record_failure(self, exc: BaseException, action: str) -> RepositoryError:
        error = RepositoryError.from_exception(exc)
        self.last_error = error
        error_formatted = format_exception_short(exc, f"Failed to {action} {self.model_name}")
        logger.error(f"❌ {error_formatted}")
        logger.exception(f"{self.model_name} {action} error details:")
        return error

    async def _rollback(self) -> None:
        try:
            await self.session.rollback()
        except Exception as e:
            logger.error(f"❌ Rollback failed for {self.model_name}: {e}")

    def _column_values(self, entity: EntityT) -> Dict[str, Any]:
        mapper = inspect(self.model)
        primary_keys = {column.key for column in mapper.primary_key}
        return {
            attr.key: getattr(entity, attr.key)
            for attr in mapper.column_attrs
            if attr.key not in primary_keys
        }

    async def list_all(self) -> List[EntityT]:
        self.last_error = None
        try:
            result = await self.session.execute(select(self.model))
            entities = list(result.scalars().all())
            logger.debug(f"Found {len(entities)} {self.model_name} records")
            return entities
        except Exception as e:
            self._record_failure(e, "list")
            return []

    async def get_by_id(self, entity_id: Optional[int]) -> Optional[EntityT]:
        self.last_error = None
        if entity_id is None or entity_id <= 0:
            logger.warning(f"⚠️ Invalid ID provided for {self.model_name} lookup: {entity_id}")
            return None

        try:
            logger.debug(f"🔍 Fetching {self.model_name}: id={entity_id}")
            result = await self.session.execute(
                select(self.model).where(self.model.id == entity_id)
            )
            entity = result.scalars().first()
            if entity is None:
                logger.debug(f"{self.model_name} not found: id={entity_id}")
            return entity
        except Exception as e:
            self._record_failure(e, "fetch")
            return None

    async def get_all_where(self, spec: FilterSpec) -> Optional[List[EntityT]]:
        self.last_error = None
        try:
            clause = spec.to_clause(self.model)
            result = await self.session.execute(select(self.model).where(clause))
            entities = list(result.scalars().all())
            logger.debug(f"Filter matched {len(entities)} {self.model_name} records: {spec!r}")
            return entities
        except Exception as e:
            self._record_failure(e, "query")
            return None

    async def add(self, entity: EntityT) -> OperationResult:
        self.last_error = None
        try:
            # A previously stored instance is inserted again so the store
            # reports the duplicate key
            if inspect(entity).has_identity:
                make_transient(entity)

            self.session.add(entity)
            await self.session.commit()
            logger.info(f"✅ {self.model_name} created: id={entity.id}")
            return OperationResult.ok()
        except Exception as e:
            error = self._record_failure(e, "create")
            await self._rollback()
            return OperationResult(succeeded=False, error=error)

    async def update(self, entity: EntityT) -> OperationResult:
        self.last_error = None
        try:
            values = self._column_values(entity)
            if entity in self.session:
                # Pending attribute changes are written by the UPDATE below
                self.session.expunge(entity)

            statement = (
                sql_update(self.model)
                .where(self.model.id == entity.id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            result = await self.session.execute(statement)

            if result.rowcount == 0:
                await self._rollback()
                message = f"{self.model_name} not found for update: id={entity.id}"
                logger.warning(f"⚠️ {message}")
                failure = OperationResult.fail(RepositoryErrorKind.NOT_FOUND, message)
                self.last_error = failure.error
                return failure

            await self.session.commit()
            logger.info(f"✅ {self.model_name} updated: id={entity.id}")
            return OperationResult.ok()
        except Exception as e:
            error = self._record_failure(e, "update")
            await self._rollback()
            return OperationResult(succeeded=False, error=error)

    async def remove(self, entity: EntityT) -> OperationResult:
        self.last_error = None
        try:
            result = await self.session.execute(
                select(self.model)
                .where(self.model.id == entity.id)
                .execution_options(populate_existing=True)
            )
            existing = result.scalars().first()

            if existing is None:
                message = f"{self.model_name} not found for deletion: id={entity.id}"
                logger.warning(f"⚠️ {message}")
                failure = OperationResult.fail(RepositoryErrorKind.NOT_FOUND, message)
                self.last_error = failure.error
                return failure

            await self.session.delete(existing)
            await self.session.commit()
            logger.info(f"✅ {self.model_name} deleted: id={entity.id}")
            return OperationResult.ok()
        except Exception as e:
            error = self._record_failure(e, "delete")
            await self._rollback()
            return OperationResult(succeeded=False, error=error)
