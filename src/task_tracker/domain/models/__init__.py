from task_tracker.domain.models.task import Task
from task_tracker.domain.models.task_priority import TaskPriority
from task_tracker.domain.models.task_status import TaskStatus

__all__ = [
    "Task",
    "TaskPriority",
    "TaskStatus",
]
