"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.pm_market.application.registry import MarketRegistry, get_market_registry


@pytest.fixture
def registry() -> MarketRegistry:
    """Fresh, empty registry per test."""
    return MarketRegistry()


@pytest.fixture
async def client(registry: MarketRegistry) -> AsyncClient:
    """Async HTTP client wired to the per-test registry."""
    app.dependency_overrides[get_market_registry] = lambda: registry
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
