from contextlib import contextmanager
import logging
from typing import Iterator
from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from task_manager.common.exceptions import (
    ResourceNotFoundException,
    ResourceType,
    StorageException,
)
from task_manager.tasks.schemas import NewTask, Task, TaskStatus, TaskUpdate
from task_manager.tasks.store.base import TaskStore
from task_manager.tasks.store.model import Base, TaskModel

logger = logging.getLogger(__name__)


class SqlTaskStore(TaskStore):
    def __init__(self, engine: Engine):
        self.engine = engine
        self.Session = sessionmaker(bind=self.engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self.Session() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                logger.exception("Task query failed")
                raise StorageException(str(e)) from e

    def _map_task(self, task: TaskModel) -> Task:
        return Task(
            id=task.id,
            title=task.title,
            description=task.description,
            status=TaskStatus(task.status),
        )

    def ping(self) -> None:
        try:
            with self.engine.connect() as connection:
                result = connection.execute(text("SELECT 1")).scalar()
        except SQLAlchemyError as e:
            raise StorageException(str(e)) from e

        if result != 1:
            raise StorageException("Unexpected result from connectivity check")

    def create_schema(self) -> None:
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageException(str(e)) from e

    def count_tasks(self) -> int:
        with self._session() as session:
            return session.query(TaskModel).count()

    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        with self._session() as session:
            query = session.query(TaskModel)
            if status is not None:
                query = query.filter_by(status=status.value)
            return [self._map_task(task) for task in query.all()]

    def get_task(self, task_id: int) -> Task:
        with self._session() as session:
            task = session.get(TaskModel, task_id)

            if not task:
                raise ResourceNotFoundException(ResourceType.TASK, task_id)

            return self._map_task(task)

    def create_task(self, task: NewTask) -> Task:
        with self._session() as session:
            new_task = TaskModel(
                title=task.title,
                description=task.description,
                status=task.status.value,
            )
            session.add(new_task)
            session.commit()
            session.refresh(new_task)

            return self._map_task(new_task)

    def update_task(self, task_id: int, updates: TaskUpdate) -> Task:
        with self._session() as session:
            task = session.get(TaskModel, task_id)

            if not task:
                raise ResourceNotFoundException(ResourceType.TASK, task_id)

            for field, value in updates.model_dump(
                mode="json", exclude_unset=True
            ).items():
                setattr(task, field, value)

            session.commit()
            session.refresh(task)

            return self._map_task(task)

    def delete_task(self, task_id: int) -> None:
        with self._session() as session:
            deleted = session.query(TaskModel).filter_by(id=task_id).delete()

            if deleted == 0:
                raise ResourceNotFoundException(ResourceType.TASK, task_id)

            session.commit()
