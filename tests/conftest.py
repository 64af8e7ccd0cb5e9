import os

# Must be set before bistro.core.database creates its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import bistro.models  # noqa: F401
from bistro.core.database import Base, get_db
from bistro.core.security import get_password_hash
from bistro.data.menu_data import catalog_id
from bistro.main import create_app
from bistro.models.user import Profile, Role, User
from bistro.services.catalog_service import catalog_service

API = "/api/v1"
PASSWORD = "correct horse battery"

BRUSCHETTA_ID = catalog_id("app-1")
SALMON_ID = catalog_id("main-2")
COFFEE_ID = catalog_id("bev-3")

@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()

@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

@pytest.fixture
def app(session_factory):
    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    return app

@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

@pytest.fixture
async def seeded_menu(session_factory):
    async with session_factory() as db:
        await catalog_service.seed_catalog(db)

async def create_user(session_factory, email, role=Role.USER, full_name=None) -> int:
    async with session_factory() as db:
        user = User(
            email=email,
            hashed_password=get_password_hash(PASSWORD),
            role=role,
            profile=Profile(full_name=full_name),
        )
        db.add(user)
        await db.commit()
        return user.id

async def login(client, email) -> dict:
    resp = await client.post(f"{API}/auth/login", data={"username": email, "password": PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}

@pytest.fixture
async def customer(client, session_factory):
    user_id = await create_user(session_factory, "diner@example.com", full_name="Dana Diner")
    return user_id, await login(client, "diner@example.com")

@pytest.fixture
async def admin(client, session_factory):
    user_id = await create_user(session_factory, "boss@example.com", role=Role.ADMIN, full_name="Alex Admin")
    return user_id, await login(client, "boss@example.com")
