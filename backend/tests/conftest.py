import io
import os

# Point the app at throwaway backends before anything imports scavenger.config
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SEED_LOCATIONS", "0")
os.environ.setdefault("ENVIRONMENT", "test")

import httpx
import pytest
import pytest_asyncio
from PIL import Image
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from scavenger.main import app
from scavenger.db import Base, get_session
from scavenger.models.user import User
from scavenger.security import hash_password
from scavenger.services.locations import seed_default_locations
from scavenger.services.storage import LocalStorage, get_storage

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-pass-123"


@pytest_asyncio.fixture
async def sessionmaker():
    engine = create_async_engine(
        "sqlite+aiosqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    maker = async_sessionmaker(engine, expire_on_commit=False)
    async with maker() as session:
        await seed_default_locations(session)
        session.add(User(username=ADMIN_USERNAME, password_hash=hash_password(ADMIN_PASSWORD), is_admin=True))
        await session.commit()
    yield maker
    await engine.dispose()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "uploads")


@pytest_asyncio.fixture
async def client(sessionmaker, storage):
    async def _get_session():
        async with sessionmaker() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_storage] = lambda: storage
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


async def register(ac: httpx.AsyncClient, username: str, password: str = "supersecret") -> dict:
    r = await ac.post("/api/auth/register", json={"username": username, "password": password})
    assert r.status_code == 201, r.text
    return r.json()


async def login(ac: httpx.AsyncClient, username: str, password: str) -> dict:
    ac.cookies.clear()
    r = await ac.post("/api/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


def png_bytes(color: str = "red") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (16, 16), color).save(buf, format="PNG")
    return buf.getvalue()
