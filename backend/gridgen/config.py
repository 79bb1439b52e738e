"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    gridgen_env: str = "development"
    gridgen_log_level: str = "info"

    # Debug mode: fatal image-load failures and a dump of the reduced image
    gridgen_debug: bool = False
    debug_artifact_path: str = "temp.png"

    # Grid defaults
    default_width: int = 50
    default_height: int = 50
    cell_size: int = 20

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
