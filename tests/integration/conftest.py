from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.app import create_app
from src.app.services.password import hash_password
from src.domain.entities import Account, Session

ACCOUNT_NAME = "alice"
PASSWORD = "SecurePass123!"


class IntegrationConfig(ApplicationConfig):
    SESSION_SECRET = "integration-test-secret"
    SESSION_TTL_MINUTES = 60
    SESSION_SWEEP_GRACE_MINUTES = 20


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def ttl():
    return timedelta(minutes=IntegrationConfig.SESSION_TTL_MINUTES)


@pytest.fixture
def sweep_grace():
    return timedelta(minutes=IntegrationConfig.SESSION_SWEEP_GRACE_MINUTES)


@pytest.fixture
def insert_rows(session_maker):
    """Commit rows through a short-lived session so the app sees them"""

    async def _insert(*rows):
        async with session_maker() as session:
            for row in rows:
                session.add(row)
            await session.commit()
        return rows

    return _insert


@pytest.fixture
def fetch_sessions(session_maker):
    async def _fetch():
        async with session_maker() as session:
            result = await session.exec(select(Session))
            return list(result.all())

    return _fetch


@pytest_asyncio.fixture
async def account(insert_rows):
    account = Account(
        account_name=ACCOUNT_NAME,
        password_hash=hash_password(PASSWORD),
        preferred_language="de",
    )
    await insert_rows(account)
    return account


@pytest.fixture
def app(session_maker):
    return create_app(IntegrationConfig, session_maker=session_maker)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def login(client):
    async def _login(account_name=ACCOUNT_NAME, password=PASSWORD):
        response = await client.post(
            "/api/login", json={"account": account_name, "pw": password}
        )
        assert response.status_code == 200
        return response.json()

    return _login
