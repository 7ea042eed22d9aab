from __future__ import annotations

from typing import Protocol

from task_tracker.domain.models.task import Task
from task_tracker.domain.models.task_status import TaskStatus


class TaskRepository(Protocol):
    """Repository contract for persisting tasks.

    Lookups return ``None`` for absent records; callers decide whether absence
    is an error.
    """

    async def save(self, task: Task) -> Task | None:
        """Insert ``task`` when it has no id, otherwise update it. Return the stored record.

        Returns ``None`` when the task has an id that matches no stored row;
        nothing is inserted in that case.
        """

    async def find_by_id(self, task_id: int) -> Task | None:
        """Fetch a task by id."""

    async def find_all(self) -> list[Task]:
        """Return every task in insertion order."""

    async def find_by_title(self, title: str) -> Task | None:
        """Return one task with the given title.

        Titles are not unique. When several rows match, the earliest inserted
        one is returned; callers must not rely on that choice.
        """

    async def find_by_status(self, status: TaskStatus) -> list[Task]:
        """Return every task in ``status``, in insertion order."""

    async def delete_by_id(self, task_id: int) -> None:
        """Delete a task. Unknown ids are ignored."""
