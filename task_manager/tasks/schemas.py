from enum import Enum
from pydantic import BaseModel


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class Task(BaseModel):
    id: int
    title: str
    description: str | None = None
    status: TaskStatus


class CreateTaskRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    status: str | None = None


class UpdateTaskRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    status: str | None = None


class NewTask(BaseModel):
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO


class TaskUpdate(BaseModel):
    """Partial update. Only fields that were explicitly set are written."""

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
