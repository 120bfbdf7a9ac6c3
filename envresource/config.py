"""Configuration from environment (defaults for the env-file resource)."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from envresource.runtime import Environment


class Settings(BaseSettings):
    """Resource defaults, command-line runtime and logging settings from env."""

    model_config = SettingsConfigDict(env_prefix="ENVRESOURCE_", extra="ignore")

    # Folder holding the env files, relative to the project root
    folder: str = ".env"
    # File loaded from the copied folder in production
    prod_file: str = ".env"
    # File loaded when running locally (empty = load nothing)
    local_file: str = ""

    # Runtime used by `python -m envresource`
    environment: Environment = Environment.LOCAL
    build_path: Path = Path(".")
    storage_path: Path = Path(".envresource-storage")

    # Logging (empty log_file = stderr only; level DEBUG|INFO|WARNING|ERROR)
    log_level: str = "INFO"
    log_file: str = ""


def get_settings() -> Settings:
    """Return resource settings."""
    return Settings()
