from datetime import date

import pytest

from task_tracker.application.dtos import TaskRequest, TaskUpdateRequest
from task_tracker.application.services import TaskService
from task_tracker.domain.exceptions import TaskNotFoundError
from task_tracker.domain.models import Task, TaskPriority, TaskStatus


def _new_task(title: str = "Write report") -> Task:
    return TaskRequest(
        title=title,
        description="Quarterly numbers",
        priority=TaskPriority.MEDIUM,
        due_date=date(2026, 11, 30),
    ).to_entity()


@pytest.mark.asyncio
async def test_create_assigns_id_and_equal_timestamps(stub_repository) -> None:
    service = TaskService(stub_repository)

    response = await service.create_new_task(_new_task())

    assert response.id == 1
    assert response.created_at == response.updated_at
    assert response.status is TaskStatus.TODO


@pytest.mark.asyncio
async def test_create_ignores_client_supplied_id(stub_repository) -> None:
    service = TaskService(stub_repository)
    task = _new_task().model_copy(update={"id": 42})

    response = await service.create_new_task(task)

    assert response.id == 1
    assert 42 not in stub_repository.tasks


@pytest.mark.asyncio
async def test_get_by_id_returns_created_projection(stub_repository) -> None:
    service = TaskService(stub_repository)
    created = await service.create_new_task(_new_task())

    fetched = await service.get_task_by_id(created.id)

    assert fetched == created


@pytest.mark.asyncio
async def test_get_unknown_id_raises_not_found(stub_repository) -> None:
    service = TaskService(stub_repository)

    with pytest.raises(TaskNotFoundError) as excinfo:
        await service.get_task_by_id(999999)

    assert excinfo.value.task_id == 999999


@pytest.mark.asyncio
async def test_update_changes_only_supplied_fields(stub_repository) -> None:
    service = TaskService(stub_repository)
    created = await service.create_new_task(_new_task())

    updated = await service.update_task(
        created.id, TaskUpdateRequest(title="Revised title")
    )

    assert updated.title == "Revised title"
    assert updated.updated_at > created.updated_at
    assert updated.created_at == created.created_at
    assert (updated.description, updated.status, updated.priority, updated.due_date) == (
        created.description,
        created.status,
        created.priority,
        created.due_date,
    )


@pytest.mark.asyncio
async def test_update_allows_any_status_transition(stub_repository) -> None:
    service = TaskService(stub_repository)
    created = await service.create_new_task(_new_task())

    done = await service.update_task(created.id, TaskUpdateRequest(status=TaskStatus.DONE))
    reopened = await service.update_task(created.id, TaskUpdateRequest(status=TaskStatus.TODO))

    assert done.status is TaskStatus.DONE
    assert reopened.status is TaskStatus.TODO
    assert reopened.updated_at > done.updated_at


@pytest.mark.asyncio
async def test_update_can_clear_nullable_fields(stub_repository) -> None:
    service = TaskService(stub_repository)
    created = await service.create_new_task(_new_task())

    updated = await service.update_task(
        created.id,
        TaskUpdateRequest.model_validate({"description": None, "dueDate": None, "priority": "HIGH"}),
    )

    assert updated.description is None
    assert updated.due_date is None
    assert updated.priority is TaskPriority.HIGH
    assert updated.title == created.title


@pytest.mark.asyncio
async def test_update_unknown_id_raises_not_found(stub_repository) -> None:
    service = TaskService(stub_repository)

    with pytest.raises(TaskNotFoundError):
        await service.update_task(999999, TaskUpdateRequest(title="Revised title"))

    assert stub_repository.tasks == {}


@pytest.mark.asyncio
async def test_delete_then_get_raises_and_repeat_delete_succeeds(stub_repository) -> None:
    service = TaskService(stub_repository)
    created = await service.create_new_task(_new_task())

    await service.delete_task(created.id)
    with pytest.raises(TaskNotFoundError):
        await service.get_task_by_id(created.id)
    await service.delete_task(created.id)

    assert stub_repository.deleted_ids == [created.id, created.id]


@pytest.mark.asyncio
async def test_get_all_returns_every_task_once(stub_repository) -> None:
    service = TaskService(stub_repository)
    created_ids = [
        (await service.create_new_task(_new_task(f"Task number {index}"))).id
        for index in range(5)
    ]

    listed = await service.get_all_tasks()

    assert sorted(task.id for task in listed) == sorted(created_ids)
    assert len(listed) == 5


@pytest.mark.asyncio
async def test_update_of_task_deleted_mid_flight_raises_not_found(stub_repository) -> None:
    service = TaskService(stub_repository)
    created = await service.create_new_task(_new_task())
    original_find = stub_repository.find_by_id

    async def find_then_delete(task_id: int):
        task = await original_find(task_id)
        await stub_repository.delete_by_id(task_id)
        return task

    stub_repository.find_by_id = find_then_delete

    with pytest.raises(TaskNotFoundError):
        await service.update_task(created.id, TaskUpdateRequest(title="Revised title"))

    assert created.id not in stub_repository.tasks


@pytest.mark.asyncio
async def test_later_update_wins(stub_repository) -> None:
    service = TaskService(stub_repository)
    created = await service.create_new_task(_new_task())

    await service.update_task(created.id, TaskUpdateRequest(title="First edit"))
    await service.update_task(created.id, TaskUpdateRequest(title="Second edit"))

    assert (await service.get_task_by_id(created.id)).title == "Second edit"
