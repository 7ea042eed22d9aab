from datetime import date, datetime

from pydantic import BaseModel, Field

from task_tracker.domain.models.task_priority import TaskPriority
from task_tracker.domain.models.task_status import TaskStatus


class Task(BaseModel):
    id: int | None = Field(default=None, description="Server-assigned task identifier.")
    title: str = Field(description="Short task title.")
    description: str | None = Field(default=None, description="Optional longer description.")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Current task status.")
    priority: TaskPriority = Field(description="Task priority.")
    due_date: date | None = Field(default=None, description="Optional due date.")
    created_at: datetime | None = Field(
        default=None, description="Creation timestamp (UTC), set once."
    )
    updated_at: datetime | None = Field(
        default=None, description="Last modification timestamp (UTC)."
    )
