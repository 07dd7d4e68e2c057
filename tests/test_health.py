"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and the storage backend."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "storage_backend": "memory"}


async def test_unknown_route_returns_json_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"


async def test_lifespan_starts_and_stops(app) -> None:
    from officeauth.core.lifespan import create_lifespan

    async with create_lifespan(app):
        assert app.state.token_purge_task is None


async def test_purge_expired_tokens_uses_app_backend(app, make_user) -> None:
    from officeauth.api.v1.dependencies import (
        Stores,
        build_token_manager,
        purge_expired_tokens,
    )

    record, _ = await make_user()
    memory = app.state.memory
    manager = build_token_manager(
        Stores(
            overrides=memory.overrides,
            tokens=memory.tokens,
            branding=memory.branding,
            offices=memory.offices,
            credentials=memory.credentials,
            audit=memory.audit,
        )
    )
    issued = await manager.issue_password_reset_token(record.id)
    await manager.consume(issued.token)
    assert await purge_expired_tokens(app) == 1
    assert await memory.tokens.get(issued.token) is None
