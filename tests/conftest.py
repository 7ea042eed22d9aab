from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import inject
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient

from task_tracker.domain.models import Task, TaskStatus
from task_tracker.domain.repositories import TaskRepository
from task_tracker.infrastructure.postgres.orm import PostgresOrm
from task_tracker.infrastructure.postgres.repository import PostgresTaskRepository


class StubTaskRepository(TaskRepository):
    """Simple in-memory TaskRepository replacement for tests."""

    def __init__(self) -> None:
        self.tasks: dict[int, Task] = {}
        self.deleted_ids: list[int] = []
        self._last_id = 0

    async def save(self, task: Task) -> Task | None:
        if task.id is None:
            self._last_id += 1
            task = task.model_copy(update={"id": self._last_id})
        elif task.id not in self.tasks:
            return None
        self.tasks[task.id] = task.model_copy()
        return task.model_copy()

    async def find_by_id(self, task_id: int) -> Task | None:
        task = self.tasks.get(task_id)
        return task.model_copy() if task else None

    async def find_all(self) -> list[Task]:
        return [self.tasks[key].model_copy() for key in sorted(self.tasks)]

    async def find_by_title(self, title: str) -> Task | None:
        for task in await self.find_all():
            if task.title == title:
                return task
        return None

    async def find_by_status(self, status: TaskStatus) -> list[Task]:
        return [task for task in await self.find_all() if task.status == status]

    async def delete_by_id(self, task_id: int) -> None:
        self.deleted_ids.append(task_id)
        self.tasks.pop(task_id, None)


def _sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def stub_repository() -> StubTaskRepository:
    return StubTaskRepository()


@pytest_asyncio.fixture
async def orm(tmp_path: Path) -> AsyncIterator[PostgresOrm]:
    """ORM bound to a throwaway SQLite database with the schema created."""
    orm = PostgresOrm(_sqlite_url(tmp_path / "tasks.db"))
    await orm.create_schema()
    yield orm
    await orm.dispose()


@pytest_asyncio.fixture
async def repository(orm: PostgresOrm) -> PostgresTaskRepository:
    return PostgresTaskRepository(orm)


@pytest.fixture
def env_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Provide environment variables for ApiSettings and DatabaseSettings."""
    monkeypatch.setenv("APP_NAME", "Test API")
    monkeypatch.setenv("APP_VERSION", "0.1.0")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DATABASE_URL", _sqlite_url(tmp_path / "api.db"))
    monkeypatch.setenv("DB_CREATE_SCHEMA", "true")


@pytest.fixture
def api_client(env_settings: None) -> Iterator[TestClient]:
    """FastAPI test client backed by a SQLite database."""
    from task_tracker.presentation.main import create_app

    with TestClient(create_app()) as client:
        yield client
    inject.clear()


@pytest.fixture
def stub_app(env_settings: None, stub_repository: StubTaskRepository) -> Iterator[FastAPI]:
    """Application whose task repository is replaced by the stub."""
    from task_tracker.presentation.main import create_app

    app = create_app()

    def _config(binder: inject.Binder) -> None:
        binder.bind(TaskRepository, stub_repository)

    # Rebind after create_app so the routes resolve the stub.
    inject.clear_and_configure(_config)
    yield app
    inject.clear()


@pytest.fixture
def stub_api_client(
    stub_app: FastAPI, stub_repository: StubTaskRepository
) -> Iterator[tuple[TestClient, StubTaskRepository]]:
    """FastAPI test client with the task repository replaced by the stub."""
    with TestClient(stub_app) as client:
        yield client, stub_repository
