import inject

from task_tracker.domain.repositories import TaskRepository
from task_tracker.infrastructure.postgres.orm import PostgresOrm
from task_tracker.infrastructure.postgres.repository import PostgresTaskRepository
from task_tracker.setup.db_config import DatabaseSettings, get_database_settings


def configure_di(settings: DatabaseSettings | None = None) -> PostgresOrm:
    """Bind the ORM and task repository into the DI container and return the ORM."""
    if settings is None:
        settings = get_database_settings()
    orm = PostgresOrm(settings.DATABASE_URL, echo=settings.DB_ECHO)
    repository = PostgresTaskRepository(orm)

    def _config(binder: inject.Binder) -> None:
        binder.bind(PostgresOrm, orm)
        binder.bind(TaskRepository, repository)

    inject.clear_and_configure(_config)
    return orm
