"""Application configuration from environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Process-level configuration loaded from the environment.

    Values stored in the database (see bookertargets.settings) are editable at
    runtime; these are fixed for the life of the process.
    """

    model_config = SettingsConfigDict(env_prefix="BOOKERTARGETS_", env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Booker Targets"
    data_dir: Path = Path("data")
    database_path: Path | None = None
    log_level: str = "INFO"

    # Web server
    host: str = "::"
    port: int = 8000

    @property
    def resolved_database_path(self) -> Path:
        """Database file path, defaulting to <data_dir>/targets.db."""
        return self.database_path or self.data_dir / "targets.db"


config = Config()
