from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from task_tracker.domain.exceptions import TaskNotFoundError, TaskStorageError

logger = logging.getLogger(__name__)


def _make_body(detail: Any, code: str) -> dict[str, Any]:
    return {"detail": detail, "code": code}


def _validation_details(exc: RequestValidationError) -> list[dict[str, Any]]:
    # ``ctx`` may hold exception objects that are not JSON serialisable.
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskNotFoundError)
    async def handle_not_found(request: Request, exc: TaskNotFoundError) -> JSONResponse:
        logger.info("Task not found", extra={"task_id": exc.task_id})
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_make_body(str(exc), "not_found"),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Request validation failed", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_make_body(_validation_details(exc), "validation_error"),
        )

    @app.exception_handler(TaskStorageError)
    async def handle_storage(request: Request, exc: TaskStorageError) -> JSONResponse:
        # The repository has already logged the underlying failure.
        logger.debug("Storage failure", extra={"operation": exc.operation})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_make_body("Internal server error.", "internal_error"),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error", exc_info=exc, extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_make_body("Internal server error.", "internal_error"),
        )
