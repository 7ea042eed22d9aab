from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from task_tracker.domain.models import Task, TaskPriority, TaskStatus

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

# An update may omit these but never set them to null.
_NON_NULLABLE_FIELDS = ("title", "status", "priority")


class _CamelModel(BaseModel):
    """Base DTO exposing camelCase JSON names over snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _reject_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("title must not be blank")
    return value


class TaskRequest(_CamelModel):
    """Payload for creating a task."""

    title: str = Field(min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority
    due_date: date | None = None

    @field_validator("title")
    @classmethod
    def check_title_not_blank(cls, value: str) -> str:
        return _reject_blank(value)

    @classmethod
    def new_task(
        cls, title: str, description: str | None, priority: TaskPriority
    ) -> TaskRequest:
        return cls(
            title=title,
            description=description,
            status=TaskStatus.TODO,
            priority=priority,
            due_date=None,
        )

    def to_entity(self) -> Task:
        return Task(
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            due_date=self.due_date,
        )


class TaskUpdateRequest(_CamelModel):
    """Partial update payload. Only the fields present in the body are applied."""

    title: str | None = Field(
        default=None, min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH
    )
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None

    @field_validator("title")
    @classmethod
    def check_title_not_blank(cls, value: str | None) -> str | None:
        return _reject_blank(value)

    @model_validator(mode="after")
    def check_required_fields_not_null(self) -> TaskUpdateRequest:
        for name in _NON_NULLABLE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} must not be null")
        return self

    def changes(self) -> dict:
        """Return the supplied fields keyed by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class TaskResponse(_CamelModel):
    id: int
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: date | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> TaskResponse:
        if task.id is None:
            raise ValueError("Task id is required to build a TaskResponse.")
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
