from typing import Any
from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url

from task_manager.config import Settings


def create_db_engine(settings: Settings) -> Engine:
    database_url = make_url(settings.DATABASE_URL)
    engine_options: dict[str, Any] = {"pool_pre_ping": settings.DB_POOL_PRE_PING}

    # SQLite manages its own pool, bounds only apply to server databases
    if database_url.get_backend_name() != "sqlite":
        engine_options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )

    return create_engine(database_url, **engine_options)


def get_db_engine(request: Request) -> Engine:
    return request.app.state.db_engine
