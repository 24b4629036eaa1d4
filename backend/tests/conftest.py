"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh SQLite file under tmp_path
    - The app under test is built with create_app() around that store;
      ASGITransport does not run the lifespan, so the store is attached directly
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from httpx import ASGITransport, AsyncClient

from contacts_api.config import Settings
from contacts_api.infrastructure.database import DatabaseSessionManager
from contacts_api.main import create_app
from contacts_api.services.contacts import contact_resource
from contacts_api.services.crud import CrudService


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'contacts.db'}"


@pytest.fixture
async def store(database_url):
    manager = DatabaseSessionManager(database_url)
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
def service(store) -> CrudService:
    return CrudService(store, contact_resource)


@pytest.fixture
def settings(database_url) -> Settings:
    return Settings(database_url=database_url, log_format="text")


@pytest.fixture
def app(settings, store):
    app = create_app(settings)
    app.state.store = store
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
