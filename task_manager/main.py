import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from task_manager.common.connectivity import ConnectionState, wait_for_storage
from task_manager.common.database import create_db_engine
from task_manager.common.exceptions import (
    ResourceNotFoundException,
    StorageException,
    TaskValidationException,
    resource_not_found_handler,
    storage_exception_handler,
    task_validation_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
    internal_error_response,
    validation_error_response,
)
from task_manager.common.opentelemetry import instrument_engine, setup_opentelemetry
from task_manager.common.retry import create_retry_policy
from task_manager.config import get_settings
from task_manager.healthcheck.router import router as health_router
from task_manager.tasks.dependencies import ensure_schema
from task_manager.tasks.router import router as tasks_router
from task_manager.tasks.store.sql_store import SqlTaskStore

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
)

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to Task Manager API"


async def check_storage(app: FastAPI) -> ConnectionState:
    task_store = SqlTaskStore(app.state.db_engine)
    app.state.storage_state = await wait_for_storage(
        task_store.ping, create_retry_policy(settings)
    )

    if app.state.storage_state == ConnectionState.READY:
        try:
            ensure_schema(app, task_store)
            logger.info(f"Tasks in database: {task_store.count_tasks()}")
        except StorageException as e:
            logger.error(f"Failed to prepare the tasks table: {e}")

    return app.state.storage_state


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.db_engine = create_db_engine(settings)
    app.state.storage_state = ConnectionState.ATTEMPTING
    app.state.schema_ready = False
    app.state.expose_error_details = settings.expose_error_details

    if settings.OTEL_ENABLED:
        instrument_engine(app.state.db_engine)

    # The server starts whatever the outcome, requests fail individually
    # while the database is unreachable and create the table once it answers.
    await check_storage(app)

    yield
    app.state.db_engine.dispose()


app = FastAPI(
    title=settings.API_NAME,
    summary=settings.API_SUMMARY,
    lifespan=lifespan,
    responses={
        **internal_error_response,
        **validation_error_response,
    },
    version=settings.API_VERSION,
)

if settings.OTEL_ENABLED:
    setup_opentelemetry(settings.OTEL_SERVICE_NAME, app)

if settings.CORS_ENABLED:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(TaskValidationException)(task_validation_exception_handler)
app.exception_handler(ResourceNotFoundException)(resource_not_found_handler)
app.exception_handler(StorageException)(storage_exception_handler)
app.exception_handler(Exception)(unexpected_exception_handler)


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
def welcome() -> str:
    return WELCOME_MESSAGE


app.include_router(health_router)
app.include_router(tasks_router)
