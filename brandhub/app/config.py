from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path
from typing import List


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_ENV: str = Field(default="development")

    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=5432)
    DB_USER: str = Field(default="brandhub")
    DB_PASSWORD: str = Field(default="brandhub")
    DB_NAME: str = Field(default="brandhub_pages")
    DB_SYNC_ECHO: bool = Field(default=False)
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)
    DB_POOL_TIMEOUT: int = Field(default=30)
    # full URL wins over the DB_* parts (e.g. sqlite for local runs)
    DATABASE_URL: str | None = Field(default=None)

    SITE_URL: str = Field(default="http://localhost:8000")
    SITE_NAME: str = Field(default="Brandhub")
    SUPPORTED_LOCALES: List[str] = Field(default=["en", "ua", "pl"])
    DEFAULT_LOCALE: str = Field(default="en")

    REDIS_URL: str | None = Field(default=None)
    PAGE_CACHE_TTL_SEC: int = Field(default=3600)

    @property
    def sync_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def project_root(self) -> Path:
        # brandhub/app/config.py -> parents[2] == repo root
        return Path(__file__).resolve().parents[2]


settings = Settings()
