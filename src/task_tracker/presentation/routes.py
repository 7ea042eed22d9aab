from __future__ import annotations

import logging

import inject
from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from task_tracker.application.dtos import TaskRequest, TaskResponse, TaskUpdateRequest
from task_tracker.application.services import TaskService
from task_tracker.domain.repositories import TaskRepository

router = APIRouter(prefix="/v1", tags=["tasks"])
logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Task deleted"

_NOT_FOUND = {404: {"description": "Task not found."}}
_BAD_REQUEST = {400: {"description": "Invalid request body or path parameter."}}


def get_task_service() -> TaskService:
    """Build a service around the repository bound in the DI container."""
    return TaskService(inject.instance(TaskRepository))


@router.post(
    "/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses=_BAD_REQUEST,
)
async def create_task(
    body: TaskRequest, service: TaskService = Depends(get_task_service)
) -> TaskResponse:
    logger.info("Creating task")
    return await service.create_new_task(body.to_entity())


@router.get("/tasks", response_model=list[TaskResponse], summary="List all tasks")
async def list_tasks(service: TaskService = Depends(get_task_service)) -> list[TaskResponse]:
    logger.info("Listing tasks")
    return await service.get_all_tasks()


@router.get(
    "/tasks/{task_id}",
    response_model=TaskResponse,
    summary="Fetch a task",
    responses={**_NOT_FOUND, **_BAD_REQUEST},
)
async def get_task(
    task_id: int, service: TaskService = Depends(get_task_service)
) -> TaskResponse:
    logger.info("Fetching task %s", task_id, extra={"task_id": task_id})
    return await service.get_task_by_id(task_id)


@router.put(
    "/tasks/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
    description="Applies only the fields present in the body; omitted fields are left unchanged.",
    responses={**_NOT_FOUND, **_BAD_REQUEST},
)
async def update_task(
    task_id: int,
    body: TaskUpdateRequest,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    logger.info("Updating task %s", task_id, extra={"task_id": task_id})
    return await service.update_task(task_id, body)


@router.delete(
    "/tasks/{task_id}",
    response_class=PlainTextResponse,
    summary="Delete a task",
    description="Idempotent: deleting an unknown id also succeeds.",
    responses=_BAD_REQUEST,
)
async def delete_task(
    task_id: int, service: TaskService = Depends(get_task_service)
) -> str:
    logger.info("Deleting task %s", task_id, extra={"task_id": task_id})
    await service.delete_task(task_id)
    return DELETE_CONFIRMATION
