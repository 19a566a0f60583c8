from abc import ABC, abstractmethod

from task_manager.tasks.schemas import NewTask, Task, TaskStatus, TaskUpdate


class TaskStore(ABC):
    @abstractmethod
    def ping(self) -> None:
        pass

    @abstractmethod
    def create_schema(self) -> None:
        pass

    @abstractmethod
    def count_tasks(self) -> int:
        pass

    @abstractmethod
    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        pass

    @abstractmethod
    def get_task(self, task_id: int) -> Task:
        pass

    @abstractmethod
    def create_task(self, task: NewTask) -> Task:
        pass

    @abstractmethod
    def update_task(self, task_id: int, updates: TaskUpdate) -> Task:
        pass

    @abstractmethod
    def delete_task(self, task_id: int) -> None:
        pass
