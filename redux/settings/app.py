"""Environment settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from redux.endpoints import DEFAULT_HOST


class AppSettings(BaseSettings):
    """Credentials and host read from the environment or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    token: str | None = Field(default=None, validation_alias="REDUX_TOKEN")
    username: str | None = Field(default=None, validation_alias="REDUX_USERNAME")
    password: str | None = Field(default=None, validation_alias="REDUX_PASSWORD")
    host: str = Field(default=DEFAULT_HOST, validation_alias="REDUX_HOST")


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
