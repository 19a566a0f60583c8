import logging
from fastapi import Depends, FastAPI, Request
from sqlalchemy import Engine

from task_manager.common.database import get_db_engine
from task_manager.tasks.service import TaskService
from task_manager.tasks.store.base import TaskStore
from task_manager.tasks.store.sql_store import SqlTaskStore

logger = logging.getLogger(__name__)


def ensure_schema(app: FastAPI, task_store: TaskStore) -> None:
    """Create the tasks table once per process, retried until it succeeds."""
    if getattr(app.state, "schema_ready", False):
        return

    task_store.create_schema()
    app.state.schema_ready = True
    logger.info("Tasks table is ready")


def get_task_store(engine: Engine = Depends(get_db_engine)) -> TaskStore:
    return SqlTaskStore(engine)


def get_ready_task_store(
    request: Request,
    task_store: TaskStore = Depends(get_task_store),
) -> TaskStore:
    ensure_schema(request.app, task_store)
    return task_store


def get_task_service(
    task_store: TaskStore = Depends(get_ready_task_store),
) -> TaskService:
    return TaskService(task_store=task_store)
