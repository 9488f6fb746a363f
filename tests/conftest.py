"""Shared fixtures: a throwaway SQLite store and the app wired to it."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from core.settings import Settings
from main import create_app

ADMIN_KEY = "s3cret-key"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'votes.db'}",
        ADMIN_KEY=ADMIN_KEY,
        _env_file=None,
    )


@pytest_asyncio.fixture
async def app(settings):
    app = create_app(settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def session_factory(app):
    return app.state.session_factory


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
