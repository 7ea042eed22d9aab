from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from task_tracker.presentation.errors import register_error_handlers
from task_tracker.presentation.routes import router as api_router
from task_tracker.setup.api_config import get_api_settings
from task_tracker.setup.app_config import configure_di
from task_tracker.setup.db_config import get_database_settings
from task_tracker.setup.logging_config import configure_logging


def create_app() -> FastAPI:
    """Build the API application and wire its dependencies."""
    settings = get_api_settings()
    db_settings = get_database_settings()
    configure_logging(settings.LOG_LEVEL)
    orm = configure_di(db_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if db_settings.DB_CREATE_SCHEMA:
            await orm.create_schema()
        yield
        await orm.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Task tracking REST API",
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.include_router(api_router, prefix="")
    return app


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_api_settings()
    uvicorn.run(
        "task_tracker.presentation.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
    )


if __name__ == "__main__":
    main()
