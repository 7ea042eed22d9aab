from __future__ import annotations

from datetime import UTC, datetime

from task_tracker.domain.models.task import Task
from task_tracker.infrastructure.postgres.orm import TaskRow


class OrmMapper:
    @staticmethod
    def to_task_row(task: Task) -> TaskRow:
        now = datetime.now(UTC)
        created_at = task.created_at or now
        return TaskRow(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            created_at=created_at,
            updated_at=task.updated_at or created_at,
        )

    @staticmethod
    def update_task_row(row: TaskRow, task: Task) -> None:
        """Copy the mutable fields of ``task`` onto a persistent row."""
        row.title = task.title
        row.description = task.description
        row.status = task.status
        row.priority = task.priority
        row.due_date = task.due_date
        if task.updated_at is not None:
            row.updated_at = task.updated_at

    @staticmethod
    def to_domain_task(row: TaskRow) -> Task:
        return Task(
            id=row.id,
            title=row.title,
            description=row.description,
            status=row.status,
            priority=row.priority,
            due_date=row.due_date,
            created_at=OrmMapper._as_utc(row.created_at),
            updated_at=OrmMapper._as_utc(row.updated_at),
        )

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        # SQLite drops tzinfo on the way back; stored values are always UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
