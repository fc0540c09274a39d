import json
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from coursehub.adapters.store.local import LocalJsonStoreAdapter
from coursehub.config import DataBackend, Settings
from coursehub.main import create_app

BASE = "http://test"

SAMPLE_COURSES = [
    {"id": "A", "title": "Intro to AI", "category": "AI", "duration": "4 weeks", "is_popular": False},
    {"id": "B", "title": "Deep Learning", "category": "AI", "duration": "6 weeks", "is_popular": True},
    {"id": "C", "title": "Cloud Basics", "category": "Cloud", "duration": "3 weeks", "is_popular": False},
    {"id": "D", "title": "Kubernetes", "category": "Cloud", "duration": "5 weeks", "is_popular": True},
    {"id": "E", "title": "Security 101", "category": "Security", "duration": "2 weeks", "is_popular": False},
    {"id": "F", "title": "Data Wrangling", "category": "Data", "duration": "4 weeks", "is_popular": False},
]


@pytest.fixture
def seed_file(tmp_path: Path) -> Path:
    path = tmp_path / "seed.json"
    path.write_text(json.dumps({"courses": SAMPLE_COURSES}), encoding="utf-8")
    return path


@pytest.fixture
def store(tmp_path: Path, seed_file: Path) -> LocalJsonStoreAdapter:
    return LocalJsonStoreAdapter(str(tmp_path / "store"), seed_path=str(seed_file))


@pytest.fixture
def settings(tmp_path: Path, seed_file: Path) -> Settings:
    return Settings(
        _env_file=None,
        data_backend=DataBackend.LOCAL,
        local_data_path=str(tmp_path / "data"),
        seed_courses=True,
        seed_path=str(seed_file),
    )


@pytest.fixture
async def client(settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=create_app(settings))
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c


@pytest.fixture
def viewer_headers() -> dict[str, str]:
    return {"X-User-Id": "user-1", "X-User-Name": "Ada Lovelace", "X-User-Email": "ada@example.com"}
