from enum import Enum
import logging
from typing import Any
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


class ResourceType(str, Enum):
    TASK = "Task"


class ValidationErrorCode(str, Enum):
    MISSING_TITLE = "MissingTitle"
    INVALID_STATUS = "InvalidStatus"
    EMPTY_UPDATE = "EmptyUpdate"


# Exceptions
class ResourceNotFoundException(Exception):
    def __init__(self, resource_type: ResourceType, identifier: str | int):
        self.resource_type = resource_type.value
        self.identifier = identifier
        super().__init__(f"{self.resource_type} '{identifier}' not found")


class TaskValidationException(Exception):
    def __init__(self, code: ValidationErrorCode, message: str):
        self.code = code
        super().__init__(message)


class StorageException(Exception):
    """Raised when the underlying database fails to serve a query."""

    def __init__(self, message: str):
        super().__init__(message)


# Exception handlers
def resource_not_found_handler(request: Request, exc: ResourceNotFoundException):
    logger.warning(exc)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": str(exc)},
    )


def task_validation_exception_handler(request: Request, exc: TaskValidationException):
    logger.warning(f"{exc.code.value}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": str(exc), "code": exc.code.value},
    )


def _internal_error_content(request: Request, exc: Exception) -> dict[str, Any]:
    content: dict[str, Any] = {"error": GENERIC_ERROR_MESSAGE}
    if getattr(request.app.state, "expose_error_details", False):
        content["detail"] = str(exc)
    return content


def storage_exception_handler(request: Request, exc: StorageException):
    logger.error(
        f"Storage error on {request.method} {request.url.path}: {exc}", exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_internal_error_content(request, exc),
    )


def unexpected_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unexpected error on {request.method} {request.url.path}", exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_internal_error_content(request, exc),
    )


def validation_exception_handler(request: Request, exc: RequestValidationError):
    def loc_to_dot_sep(loc: tuple[Any, ...]) -> str:
        """Convert a tuple of location parts to a dot-separated string"""
        path = ""
        for i, x in enumerate(loc):
            if isinstance(x, str):
                if i > 0:
                    path += "."
                path += x
            elif isinstance(x, int):
                path += f"[{x}]"
            else:
                raise TypeError("Unexpected type")
        return path

    errors = [
        {
            "type": error["type"],
            "loc": loc_to_dot_sep(error["loc"]),
            "msg": error["msg"],
            "input": error.get("input"),
        }
        for error in exc.errors()
    ]

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({"error": "Validation error", "errors": errors}),
    )


# Response definitions for OpenAPI documentation
ResponseDict = dict[int | str, dict[str, Any]]


def resource_not_found_response(
    resource_type: ResourceType,
) -> ResponseDict:
    return {
        404: {
            "description": f"{resource_type.value} not found",
            "content": {
                "application/json": {
                    "example": {"error": f"{resource_type.value} '1' not found"}
                }
            },
        }
    }


def bad_request_response(*codes: ValidationErrorCode) -> ResponseDict:
    return {
        400: {
            "description": "Invalid request: " + ", ".join(c.value for c in codes),
            "content": {
                "application/json": {
                    "example": {
                        "error": "Invalid status 'archived'. Accepted values are: todo, in_progress, done",
                        "code": ValidationErrorCode.INVALID_STATUS.value,
                    }
                }
            },
        }
    }


internal_error_response: ResponseDict = {
    500: {
        "description": "Internal server error",
        "content": {"application/json": {"example": {"error": GENERIC_ERROR_MESSAGE}}},
    }
}

validation_error_response: ResponseDict = {
    422: {
        "description": "Validation error",
        "content": {
            "application/json": {
                "example": {
                    "error": "Validation error",
                    "errors": [
                        {
                            "type": "int_parsing",
                            "loc": "path.task_id",
                            "msg": "Input should be a valid integer",
                            "input": "abc",
                        }
                    ],
                }
            }
        },
    }
}
