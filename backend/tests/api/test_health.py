"""Health probes — liveness always up, readiness follows the store."""

from httpx import ASGITransport, AsyncClient

from contacts_api.infrastructure.database import DatabaseSessionManager
from contacts_api.main import create_app


async def test_liveness(client):
    res = await client.get("/api/health/")
    assert res.status_code == 200
    assert res.json()["code"] == 0


async def test_readiness_with_live_store(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json() == {"code": 0, "msg": "ready", "data": {"database": "healthy"}}


async def test_readiness_with_unreachable_store(settings, tmp_path):
    app = create_app(settings)
    store = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'contacts.db'}",
    )
    app.state.store = store
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            res = await c.get("/api/health/ready")
    finally:
        await store.dispose()
    assert res.status_code == 503
    assert res.json() == {"code": -1, "msg": "Service unavailable"}


async def test_readiness_without_store(settings):
    app = create_app(settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        res = await c.get("/api/health/ready")
    assert res.status_code == 503
    assert res.json() == {"code": -1, "msg": "Service unavailable"}
