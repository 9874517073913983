"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path("data")
    create_data_dir: bool = True
    debug: bool = False
    app_title: str = "FlatWiki"
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="FLATWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
    )


settings = Settings()
