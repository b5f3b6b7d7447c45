from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from repositories import (
    AllOf,
    Condition,
    Operator,
    Repository,
    RepositoryErrorKind,
    ToDo,
)


def new_todo(title="Task", description="Description", days=1, **fields) -> ToDo:
    return ToDo(
        title=title,
        description=description,
        expiry_date=datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(days=days),
        **fields,
    )


@pytest.mark.asyncio
async def test_list_all_returns_inserted_todos(repository, session):
    session.add_all([new_todo("Test Task 1", days=5), new_todo("Test Task 2", days=10)])
    await session.commit()

    result = await repository.list_all()

    titles = {todo.title for todo in result}
    assert {"Test Task 1", "Test Task 2"} <= titles


@pytest.mark.asyncio
async def test_list_all_returns_empty_list_on_storage_failure():
    session = AsyncMock(spec=AsyncSession)
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("database is down"))
    repository = Repository(session, ToDo)

    result = await repository.list_all()

    assert result == []
    assert repository.last_error.kind == RepositoryErrorKind.STORAGE_UNAVAILABLE


@pytest.mark.asyncio
async def test_get_by_id_returns_matching_todo(repository, session):
    todo = new_todo("Test Task", "Test Description", days=5, id=9)
    session.add(todo)
    await session.commit()

    result = await repository.get_by_id(9)

    assert result is not None
    assert result.id == 9
    assert result.title == "Test Task"
    assert result.description == "Test Description"


@pytest.mark.asyncio
@pytest.mark.parametrize("todo_id", [None, 0, -1])
async def test_get_by_id_rejects_invalid_id_without_querying(todo_id):
    session = AsyncMock(spec=AsyncSession)
    repository = Repository(session, ToDo)

    result = await repository.get_by_id(todo_id)

    assert result is None
    session.execute.assert_not_called()


@pytest.mark.asyncio
async def test_get_by_id_returns_none_for_missing_todo(repository):
    assert await repository.get_by_id(12345) is None
    assert repository.last_error is None


@pytest.mark.asyncio
async def test_add_assigns_id_and_persists(repository):
    todo = new_todo("New Task", days=3)

    result = await repository.add(todo)

    assert result
    assert result.error is None
    assert todo.id is not None
    assert len(await repository.list_all()) == 1


@pytest.mark.asyncio
async def test_add_same_entity_twice_fails(repository):
    todo = new_todo("New Task to add", days=5)
    assert await repository.add(todo)

    result = await repository.add(todo)

    assert not result
    assert result.error_kind == RepositoryErrorKind.CONSTRAINT_VIOLATION
    assert len(await repository.list_all()) == 1


@pytest.mark.asyncio
async def test_add_reports_failure_when_commit_raises():
    session = AsyncMock(spec=AsyncSession)
    session.commit.side_effect = IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed"))
    repository = Repository(session, ToDo)

    result = await repository.add(new_todo())

    assert not result
    assert result.error_kind == RepositoryErrorKind.CONSTRAINT_VIOLATION
    session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_persists_all_fields(repository, session):
    session.add(new_todo("Old Task", "Old Description", days=2, id=400, percent_complete=20, is_done=False))
    await session.commit()

    todo = await repository.get_by_id(400)
    todo.title = "Updated old Task"
    todo.description = "Updated old Description"
    todo.percent_complete = 90
    todo.is_done = True

    result = await repository.update(todo)

    assert result
    session.expunge_all()
    updated = await repository.get_by_id(400)
    assert updated.title == "Updated old Task"
    assert updated.description == "Updated old Description"
    assert updated.percent_complete == 90
    assert updated.is_done is True


@pytest.mark.asyncio
async def test_update_of_missing_todo_reports_not_found(repository):
    todo = new_todo("Non-existent Task", id=777, percent_complete=0, is_done=False)

    result = await repository.update(todo)

    assert not result
    assert result.error_kind == RepositoryErrorKind.NOT_FOUND
    assert await repository.list_all() == []


@pytest.mark.asyncio
async def test_remove_deletes_persisted_todo(repository, session):
    todo = new_todo("New Task to Remove!", days=7)
    session.add(todo)
    await session.commit()

    result = await repository.remove(todo)

    assert result
    assert await repository.get_by_id(todo.id) is None
    assert all(t.title != "New Task to Remove!" for t in await repository.list_all())


@pytest.mark.asyncio
async def test_remove_of_missing_todo_fails(repository):
    todo = new_todo("Non-existent Task", days=10, id=-1, percent_complete=0, is_done=False)

    result = await repository.remove(todo)

    assert not result
    assert result.error_kind == RepositoryErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_remove_twice_fails_second_time(repository):
    todo = new_todo("Remove me")
    await repository.add(todo)

    assert await repository.remove(todo)
    assert not await repository.remove(todo)


@pytest.mark.asyncio
async def test_get_all_where_filters_in_store(repository, session):
    session.add_all(
        [
            new_todo("Task 1", "Description 1", days=1, percent_complete=10, is_done=False),
            new_todo("Task 2", "Description 2", days=2, percent_complete=20, is_done=True),
            new_todo("Task 3", "Description 3", days=3, percent_complete=30, is_done=False),
        ]
    )
    await session.commit()

    result = await repository.get_all_where(Condition("title", Operator.CONTAINS, "Task 1"))

    assert result is not None
    assert [todo.title for todo in result] == ["Task 1"]

    done = await repository.get_all_where(
        AllOf(
            Condition("is_done", Operator.EQ, True),
            Condition("percent_complete", Operator.GE, 20),
        )
    )
    assert [todo.title for todo in done] == ["Task 2"]


@pytest.mark.asyncio
async def test_get_all_where_returns_empty_list_when_nothing_matches(repository, session):
    session.add(new_todo("Task", "Description 1"))
    await session.commit()

    result = await repository.get_all_where(
        Condition("title", Operator.CONTAINS, "Non-existing Task")
    )

    assert result == []


@pytest.mark.asyncio
async def test_get_all_where_returns_none_for_invalid_filter(repository):
    result = await repository.get_all_where(Condition("owner", Operator.EQ, "someone"))

    assert result is None
    assert repository.last_error.kind == RepositoryErrorKind.INVALID_QUERY


@pytest.mark.asyncio
async def test_contains_treats_wildcards_literally(repository, session):
    session.add_all([new_todo("100% done"), new_todo("1000 things")])
    await session.commit()

    result = await repository.get_all_where(Condition("title", Operator.CONTAINS, "0%"))

    assert [todo.title for todo in result] == ["100% done"]


@pytest.mark.asyncio
async def test_contains_is_case_sensitive(repository, session):
    session.add_all([new_todo("Buy Groceries"), new_todo("groceries run")])
    await session.commit()

    result = await repository.get_all_where(Condition("title", Operator.CONTAINS, "Groceries"))

    assert [todo.title for todo in result] == ["Buy Groceries"]
    assert await repository.get_all_where(Condition("title", Operator.CONTAINS, "GROCERIES")) == []


def failing_session() -> AsyncMock:
    session = AsyncMock(spec=AsyncSession)
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("database is down"))
    return session


@pytest.mark.asyncio
async def test_get_by_id_returns_none_on_storage_failure():
    repository = Repository(failing_session(), ToDo)

    result = await repository.get_by_id(1)

    assert result is None
    assert repository.last_error.kind == RepositoryErrorKind.STORAGE_UNAVAILABLE


@pytest.mark.asyncio
async def test_get_all_where_returns_none_on_storage_failure():
    repository = Repository(failing_session(), ToDo)

    result = await repository.get_all_where(Condition("title", Operator.CONTAINS, "Task"))

    assert result is None
    assert repository.last_error.kind == RepositoryErrorKind.STORAGE_UNAVAILABLE


@pytest.mark.asyncio
async def test_remove_reports_failure_when_store_is_down():
    session = failing_session()
    repository = Repository(session, ToDo)

    result = await repository.remove(new_todo(id=3))

    assert not result
    assert result.error_kind == RepositoryErrorKind.STORAGE_UNAVAILABLE
    session.rollback.assert_awaited_once()
    session.commit.assert_not_called()


@pytest.mark.asyncio
async def test_update_reports_failure_when_store_is_down():
    session = failing_session()
    repository = Repository(session, ToDo)

    result = await repository.update(new_todo(id=3))

    assert not result
    assert result.error_kind == RepositoryErrorKind.STORAGE_UNAVAILABLE
    session.rollback.assert_awaited_once()
