"""
Shared fixtures: a throwaway SQLite database per test and an HTTP client bound to it.
"""
import httpx
import pytest

from location_api.core.system_info import StaticSystemInfoProvider, get_system_info_provider
from location_api.main import app
from location_api.models import get_db
from location_api.models.database import Base, build_engine, build_session_maker
from location_api.schemas import SystemInfo

FAKE_SYSTEM_INFO = SystemInfo(
    hostname="test-host",
    platform="linux",
    arch="x86_64",
    runtime_version="CPython 3.12.0",
    uptime=42.0
)


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'locations.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def system_info_provider():
    return StaticSystemInfoProvider(FAKE_SYSTEM_INFO)


def _override_db(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            yield session
    return override_get_db


@pytest.fixture
async def client(session_maker, system_info_provider):
    app.dependency_overrides[get_db] = _override_db(session_maker)
    app.dependency_overrides[get_system_info_provider] = lambda: system_info_provider
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def broken_client(tmp_path, system_info_provider):
    """Client whose database has no locations table"""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    app.dependency_overrides[get_db] = _override_db(build_session_maker(engine))
    app.dependency_overrides[get_system_info_provider] = lambda: system_info_provider
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()
    await engine.dispose()
