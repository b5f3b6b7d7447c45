import importlib.util
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add project root to PYTHONPATH for imports to work
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from core.config import Settings  # noqa: E402
from core.database import Database  # noqa: E402
from internal.api.dependencies import get_todo_repository  # noqa: E402
from repositories import IRepository, Repository, ToDo  # noqa: E402

# Import cmd.api.main by path to avoid conflict with stdlib cmd
file_path = project_root / "cmd" / "api" / "main.py"
spec = importlib.util.spec_from_file_location("cmd.api.main", file_path)
main_module = importlib.util.module_from_spec(spec)
sys.modules["cmd.api.main"] = main_module
spec.loader.exec_module(main_module)
create_app = main_module.create_app


def make_todo(todo_id=1, title="Test", description="Description", **overrides) -> ToDo:
    """Detached ToDo for mocked repositories."""
    fields = {
        "id": todo_id,
        "title": title,
        "description": description,
        "expiry_date": datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(days=1),
        "percent_complete": 0,
        "is_done": False,
    }
    fields.update(overrides)
    return ToDo(**fields)


@pytest.fixture
def todo_factory():
    return make_todo


@pytest.fixture
def memory_settings():
    return Settings(DATABASE_URL="sqlite+aiosqlite://", LOG_TO_FILE=False)


@pytest_asyncio.fixture
async def database(memory_settings):
    db = Database(memory_settings)
    await db.connect()
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.disconnect()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as db_session:
        yield db_session


@pytest.fixture
def repository(session):
    return Repository(session, ToDo)


@pytest.fixture
def mock_repository():
    return AsyncMock(spec=IRepository)


@pytest.fixture
def client(mock_repository):
    app = create_app()
    app.dependency_overrides[get_todo_repository] = lambda: mock_repository
    return TestClient(app)


@pytest.fixture
def live_client(tmp_path):
    """Client backed by a real SQLite file; the lifespan creates the tables."""
    settings = Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'todo.db'}",
        ENVIRONMENT="test",
        LOG_TO_FILE=False,
    )
    with TestClient(create_app(settings)) as test_client:
        yield test_client
