import logging
from datetime import UTC, datetime, timedelta

from task_tracker.application.dtos import TaskResponse, TaskUpdateRequest
from task_tracker.domain.exceptions import TaskNotFoundError
from task_tracker.domain.models import Task
from task_tracker.domain.repositories import TaskRepository

logger = logging.getLogger(__name__)


def _next_timestamp(previous: datetime | None) -> datetime:
    now = datetime.now(UTC)
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class TaskService:
    """Task use cases on top of a ``TaskRepository``."""

    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    async def create_new_task(self, task: Task) -> TaskResponse:
        """Persist a new task and return its projection."""
        now = datetime.now(UTC)
        candidate = task.model_copy(update={"id": None, "created_at": now, "updated_at": now})
        saved = await self._repository.save(candidate)
        logger.info("Task created", extra={"task_id": saved.id})
        return self.to_response(saved)

    async def get_task_by_id(self, task_id: int) -> TaskResponse:
        """Return the task identified by ``task_id`` or raise ``TaskNotFoundError``."""
        task = await self._repository.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return self.to_response(task)

    async def get_all_tasks(self) -> list[TaskResponse]:
        tasks = await self._repository.find_all()
        return [self.to_response(task) for task in tasks]

    async def update_task(self, task_id: int, request: TaskUpdateRequest) -> TaskResponse:
        """
        Apply the fields supplied in ``request`` to an existing task.

        Fields absent from the request keep their stored value. Status changes
        are not validated against any transition rules.
        """
        existing = await self._repository.find_by_id(task_id)
        if existing is None:
            raise TaskNotFoundError(task_id)

        changes = request.changes()
        changes["updated_at"] = _next_timestamp(existing.updated_at)
        updated = existing.model_copy(update=changes)
        saved = await self._repository.save(updated)
        if saved is None:
            # Deleted between the lookup and the write.
            raise TaskNotFoundError(task_id)
        logger.info(
            "Task updated",
            extra={"task_id": task_id, "fields": sorted(request.model_fields_set)},
        )
        return self.to_response(saved)

    async def delete_task(self, task_id: int) -> None:
        """Delete a task. Deleting an unknown id succeeds silently."""
        await self._repository.delete_by_id(task_id)
        logger.info("Task deleted", extra={"task_id": task_id})

    @staticmethod
    def to_response(task: Task) -> TaskResponse:
        return TaskResponse.from_task(task)
