"""Request validation for tasks.

These functions are pure: they never touch the database, so a malformed
request is rejected before any query runs.
"""

from task_manager.common.exceptions import TaskValidationException, ValidationErrorCode
from task_manager.tasks.schemas import (
    CreateTaskRequest,
    NewTask,
    TaskStatus,
    TaskUpdate,
    UpdateTaskRequest,
)

VALID_STATUSES: tuple[str, ...] = tuple(s.value for s in TaskStatus)


def parse_status(value: str) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError as e:
        raise TaskValidationException(
            ValidationErrorCode.INVALID_STATUS,
            f"Invalid status '{value}'. Accepted values are: {', '.join(VALID_STATUSES)}",
        ) from e


def parse_status_filter(value: str | None) -> TaskStatus | None:
    # An empty query value means no filter
    if not value:
        return None
    return parse_status(value)


def _check_title(title: str) -> str:
    if not title.strip():
        raise TaskValidationException(
            ValidationErrorCode.MISSING_TITLE, "Title must not be empty"
        )
    return title


def validate_create(request: CreateTaskRequest) -> NewTask:
    if request.title is None:
        raise TaskValidationException(
            ValidationErrorCode.MISSING_TITLE, "Title is required"
        )

    title = _check_title(request.title)
    status = (
        parse_status(request.status) if request.status is not None else TaskStatus.TODO
    )

    return NewTask(title=title, description=request.description, status=status)


def validate_update(request: UpdateTaskRequest) -> TaskUpdate:
    # An explicit null description clears it; a null title or status is
    # treated as absent.
    provided = request.model_fields_set
    updates: dict[str, str | TaskStatus | None] = {}

    if "title" in provided and request.title is not None:
        updates["title"] = _check_title(request.title)
    if "description" in provided:
        updates["description"] = request.description
    if "status" in provided and request.status is not None:
        updates["status"] = parse_status(request.status)

    if not updates:
        raise TaskValidationException(
            ValidationErrorCode.EMPTY_UPDATE,
            "At least one of title, description or status is required",
        )

    return TaskUpdate(**updates)
