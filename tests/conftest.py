import os
import tempfile
from pathlib import Path

_db_dir = Path(tempfile.mkdtemp(prefix="devdrop-tests-"))
_db_path = _db_dir / "devdrop_test.db"

os.environ["URL_DATABASE"] = f"sqlite+aiosqlite:///{_db_path}"
os.environ["RATE_LIMIT_ENABLED"] = "False"
os.environ.pop("HOST_REDIS", None)

import cloudinary.api
import cloudinary.uploader
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from main import app
from database import Base, rd


class FakeCloudinary:
    """Stands in for the Cloudinary SDK calls and records what was asked of it."""

    def __init__(self) -> None:
        self.uploads: list[tuple[str, dict]] = []
        self.destroyed: list[tuple[str, dict]] = []
        self.bulk_deleted: list[tuple[list[str], dict]] = []
        self.fail = False

    def upload(self, file, **options):
        if self.fail:
            raise Exception("Upload failed")
        self.uploads.append((file, options))
        n = len(self.uploads)
        return {
            "public_id": f"devdrop_files/snippet{n}",
            "secure_url": f"https://res.cloudinary.com/demo/raw/upload/devdrop_files/snippet{n}.txt",
            "resource_type": "raw",
            "bytes": 12,
            "format": "txt",
            "original_filename": f"snippet{n}",
        }

    def destroy(self, public_id, **options):
        if self.fail:
            raise Exception("Destroy failed")
        self.destroyed.append((public_id, options))
        return {"result": "ok"}

    def delete_resources(self, public_ids, **options):
        if self.fail:
            raise Exception("Delete failed")
        self.bulk_deleted.append((list(public_ids), options))
        return {"deleted": {public_id: "deleted" for public_id in public_ids}}


class FakeRedis:
    """In-memory stand-in for the redis.asyncio calls RedisDB makes."""

    def __init__(self) -> None:
        self.data: dict[str, object] = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.data[key] = value

    async def incr(self, key):
        self.data[key] = int(self.data.get(key, 0)) + 1
        return self.data[key]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_tables():
    engine = create_engine(f"sqlite:///{_db_path}")
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    engine.dispose()
    yield


@pytest.fixture
def fake_cloudinary(monkeypatch):
    fake = FakeCloudinary()
    monkeypatch.setattr(cloudinary.uploader, "upload", fake.upload)
    monkeypatch.setattr(cloudinary.uploader, "destroy", fake.destroy)
    monkeypatch.setattr(cloudinary.api, "delete_resources", fake.delete_resources)
    yield fake


@pytest.fixture
def fake_redis(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(rd, "redis", fake)
    yield fake


@pytest.fixture
def tester():
    with TestClient(app=app) as client:
        yield client


@pytest.fixture
def create_note(tester):
    def create(name: str) -> dict:
        response = tester.post(url="/notes", json={"name": name})
        assert response.status_code == 201
        return response.json()

    return create
