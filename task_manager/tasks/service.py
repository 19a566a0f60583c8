import logging

from task_manager.tasks.schemas import (
    CreateTaskRequest,
    Task,
    UpdateTaskRequest,
)
from task_manager.tasks.store.base import TaskStore
from task_manager.tasks.validator import (
    parse_status_filter,
    validate_create,
    validate_update,
)

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, task_store: TaskStore):
        self.task_store = task_store

    def list_tasks(self, status: str | None = None) -> list[Task]:
        status_filter = parse_status_filter(status)
        return self.task_store.list_tasks(status_filter)

    def get_task(self, task_id: int) -> Task:
        return self.task_store.get_task(task_id)

    def create_task(self, task_input: CreateTaskRequest) -> Task:
        new_task = validate_create(task_input)
        task = self.task_store.create_task(new_task)
        logger.info(f"Created task {task.id}")
        return task

    def update_task(self, task_id: int, task_input: UpdateTaskRequest) -> Task:
        updates = validate_update(task_input)
        task = self.task_store.update_task(task_id, updates)
        logger.info(
            f"Updated task {task_id}: {', '.join(sorted(updates.model_fields_set))}"
        )
        return task

    def delete_task(self, task_id: int) -> None:
        self.task_store.delete_task(task_id)
        logger.info(f"Deleted task {task_id}")
