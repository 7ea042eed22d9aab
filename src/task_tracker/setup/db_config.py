from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """Connection settings. ``DATABASE_URL`` must use an async driver."""

    DATABASE_URL: str
    DB_ECHO: bool = False
    DB_CREATE_SCHEMA: bool = False

    model_config = ConfigDict(env_file=".env", extra="ignore")


def get_database_settings() -> DatabaseSettings:
    return DatabaseSettings()  # type: ignore[call-arg]
