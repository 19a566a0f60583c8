from typing import Any
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from task_manager.common.connectivity import ConnectionState
from task_manager.tasks.dependencies import ensure_schema, get_task_store
from task_manager.tasks.store.base import TaskStore

router = APIRouter()


@router.get(
    "/healthcheck",
    tags=["Healthcheck"],
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "Healthcheck status",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "database": {"status": "ok", "startup": "ready"},
                    }
                }
            },
        },
        503: {
            "description": "Service unavailable",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "database": {
                            "status": "error",
                            "startup": "gave_up",
                            "message": "Connection error",
                        },
                    }
                }
            },
        },
    },
)
def healthcheck(
    request: Request,
    task_store: TaskStore = Depends(get_task_store),
) -> JSONResponse:
    startup_state: ConnectionState = getattr(
        request.app.state, "storage_state", ConnectionState.ATTEMPTING
    )
    health_status: dict[str, Any] = {
        "api": {"status": "ok"},
        "database": {"status": "ok", "startup": startup_state.value},
    }

    try:
        task_store.ping()
        ensure_schema(request.app, task_store)
    except Exception as e:
        health_status["database"].update({"status": "error", "message": str(e)})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=health_status)
