"""Application configuration module."""
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    storage_backend: Literal["postgres", "memory"] = Field(default="postgres", alias="STORAGE_BACKEND")
    pg_host: str = Field(default="localhost", alias="PGHOST")
    pg_port: int = Field(default=5432, alias="PGPORT")
    pg_user: str = Field(default="postgres", alias="PGUSER")
    pg_password: str = Field(default="", alias="PGPASSWORD")
    pg_database: str = Field(default="bytebooks", alias="PGDATABASE")
    pg_ssl: bool = Field(default=False, alias="PGSSL")

    # Startup import of the CSV catalog
    skip_data_import: bool = Field(default=False, alias="SKIP_DATA_IMPORT")
    csv_import_file_path: Path = Field(default=Path("goodreads_dataset.csv"), alias="CSV_IMPORT_FILE_PATH")

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
