"""Application settings loaded from environment variables / .env."""

from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class DataBackend(str, Enum):
    LOCAL = "local"
    SQL = "sql"
    FIRESTORE = "firestore"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Data access ────────────────────────────────
    data_backend: DataBackend = DataBackend.LOCAL
    local_data_path: str = "./data"
    seed_courses: bool = True
    seed_path: str = str(PACKAGE_DIR / "data" / "seed_courses.json")
    database_url: str = "sqlite+aiosqlite:///./coursehub.db"
    firestore_project: str | None = None

    # ── Caching ────────────────────────────────────
    cache_stale_seconds: float = 5 * 60
    cache_evict_seconds: float = 10 * 60

    # ── Recommendations ────────────────────────────
    recommendation_category_boost: float = 5
    recommendation_popularity_boost: float = 3
    recommendation_limit: int = 4

    cors_origins: list[str] = ["*"]


settings = Settings()
