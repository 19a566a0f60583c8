from fastapi import APIRouter, Body, Depends, Query, status

from task_manager.common.exceptions import (
    ResourceType,
    ValidationErrorCode,
    bad_request_response,
    resource_not_found_response,
)
from task_manager.tasks.dependencies import get_task_service
from task_manager.tasks.schemas import CreateTaskRequest, Task, UpdateTaskRequest
from task_manager.tasks.service import TaskService


router = APIRouter(
    prefix="/api/tasks",
    tags=["Tasks"],
)


@router.get(
    "", responses={**bad_request_response(ValidationErrorCode.INVALID_STATUS)}
)
def list_tasks(
    status_filter: str | None = Query(
        None, alias="status", description="One of: todo, in_progress, done"
    ),
    task_service: TaskService = Depends(get_task_service),
) -> list[Task]:
    return task_service.list_tasks(status_filter)


@router.get("/{task_id}", responses={**resource_not_found_response(ResourceType.TASK)})
def get_task(
    task_id: int, task_service: TaskService = Depends(get_task_service)
) -> Task:
    return task_service.get_task(task_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={
        **bad_request_response(
            ValidationErrorCode.MISSING_TITLE, ValidationErrorCode.INVALID_STATUS
        )
    },
)
def create_task(
    task_input: CreateTaskRequest | None = Body(None),
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    return task_service.create_task(task_input or CreateTaskRequest())


@router.put(
    "/{task_id}",
    responses={
        **bad_request_response(
            ValidationErrorCode.EMPTY_UPDATE,
            ValidationErrorCode.MISSING_TITLE,
            ValidationErrorCode.INVALID_STATUS,
        ),
        **resource_not_found_response(ResourceType.TASK),
    },
)
def update_task(
    task_id: int,
    task_input: UpdateTaskRequest | None = Body(None),
    task_service: TaskService = Depends(get_task_service),
) -> Task:
    return task_service.update_task(task_id, task_input or UpdateTaskRequest())


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**resource_not_found_response(ResourceType.TASK)},
)
def delete_task(
    task_id: int, task_service: TaskService = Depends(get_task_service)
):
    task_service.delete_task(task_id)
