from __future__ import annotations

import logging
from functools import wraps

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from task_tracker.domain.exceptions import TaskStorageError
from task_tracker.domain.models.task import Task
from task_tracker.domain.models.task_status import TaskStatus
from task_tracker.domain.repositories import TaskRepository
from task_tracker.infrastructure.postgres.mappers import OrmMapper
from task_tracker.infrastructure.postgres.orm import MAX_TASK_ID, PostgresOrm, TaskRow

logger = logging.getLogger(__name__)


def _storable_id(task_id: int) -> bool:
    # Ids outside the key column range cannot match a row.
    return 0 < task_id <= MAX_TASK_ID


def storage_errors(func):
    """Re-raise SQLAlchemy failures as ``TaskStorageError``."""

    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            logger.exception("Task storage operation failed", extra={"operation": func.__name__})
            raise TaskStorageError(func.__name__) from exc

    return wrapper


class PostgresTaskRepository(TaskRepository):
    """Relational task storage using SQLAlchemy async sessions."""

    def __init__(self, orm: PostgresOrm) -> None:
        self._orm = orm

    @storage_errors
    async def save(self, task: Task) -> Task | None:
        """
        Insert a task without an id, or update the row with the task's id.

        Updating a row that no longer exists returns ``None`` and writes nothing,
        so deleted ids are never brought back.
        """
        if task.id is None:
            task_row = OrmMapper.to_task_row(task)
            async with self._orm.session_factory() as session:
                async with session.begin():
                    session.add(task_row)
                    await session.flush()
            return OrmMapper.to_domain_task(task_row)

        if not _storable_id(task.id):
            return None
        async with self._orm.session_factory() as session:
            async with session.begin():
                task_row = await session.get(TaskRow, task.id)
                if task_row is None:
                    return None
                OrmMapper.update_task_row(task_row, task)
        return OrmMapper.to_domain_task(task_row)

    @storage_errors
    async def find_by_id(self, task_id: int) -> Task | None:
        if not _storable_id(task_id):
            return None
        async with self._orm.session_factory() as session:
            task_row = await session.get(TaskRow, task_id)

        if task_row is None:
            return None
        return OrmMapper.to_domain_task(task_row)

    @storage_errors
    async def find_all(self) -> list[Task]:
        async with self._orm.session_factory() as session:
            result = await session.execute(select(TaskRow).order_by(TaskRow.id))
            rows = result.scalars().all()

        return [OrmMapper.to_domain_task(row) for row in rows]

    @storage_errors
    async def find_by_title(self, title: str) -> Task | None:
        """Return the earliest inserted task with ``title``; duplicates are logged."""
        statement = select(TaskRow).where(TaskRow.title == title).order_by(TaskRow.id).limit(2)

        async with self._orm.session_factory() as session:
            result = await session.execute(statement)
            rows = result.scalars().all()

        if not rows:
            return None
        if len(rows) > 1:
            logger.warning(
                "Several tasks share a title, returning the first one",
                extra={"title": title, "task_id": rows[0].id},
            )
        return OrmMapper.to_domain_task(rows[0])

    @storage_errors
    async def find_by_status(self, status: TaskStatus) -> list[Task]:
        statement = select(TaskRow).where(TaskRow.status == status).order_by(TaskRow.id)

        async with self._orm.session_factory() as session:
            result = await session.execute(statement)
            rows = result.scalars().all()

        return [OrmMapper.to_domain_task(row) for row in rows]

    @storage_errors
    async def delete_by_id(self, task_id: int) -> None:
        if not _storable_id(task_id):
            return
        async with self._orm.session_factory() as session:
            async with session.begin():
                await session.execute(delete(TaskRow).where(TaskRow.id == task_id))
