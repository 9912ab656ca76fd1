"""Unit tests for MarketRegistry."""
import asyncio
from decimal import Decimal

import pytest

from src.pm_common.errors import (
    DuplicateEventError,
    InvalidEventIdError,
    InvalidLiquidityError,
    MarketNotFoundError,
)
from src.pm_market.application.registry import MarketRegistry, get_market_registry


@pytest.fixture
def registry() -> MarketRegistry:
    return MarketRegistry()


class TestCreate:
    async def test_default_liquidity_from_settings(self, registry: MarketRegistry) -> None:
        ledger = await registry.create("evt-1")
        snap = ledger.snapshot()
        assert snap.pool_a == snap.pool_b == Decimal(1000)
        assert snap.invariant == Decimal(1000) ** 2

    async def test_custom_liquidity(self, registry: MarketRegistry) -> None:
        ledger = await registry.create("evt-1", "250.5")
        snap = ledger.snapshot()
        assert snap.pool_a == Decimal("250.5")
        assert snap.invariant == Decimal("250.5") * Decimal("250.5")

    async def test_duplicate_rejected_and_original_kept(self, registry: MarketRegistry) -> None:
        original = await registry.create("evt-1", 100)
        with pytest.raises(DuplicateEventError) as exc_info:
            await registry.create("evt-1", 999)
        assert exc_info.value.http_status == 409
        assert registry.get("evt-1") is original
        assert original.snapshot().pool_a == Decimal(100)

    @pytest.mark.parametrize("liquidity", [0, -1])
    async def test_invalid_liquidity_not_registered(
        self, registry: MarketRegistry, liquidity: int
    ) -> None:
        with pytest.raises(InvalidLiquidityError):
            await registry.create("evt-1", liquidity)
        assert "evt-1" not in registry
        assert len(registry) == 0

    async def test_empty_event_id_rejected(self, registry: MarketRegistry) -> None:
        with pytest.raises(InvalidEventIdError):
            await registry.create("")

    async def test_concurrent_create_same_id_one_winner(self, registry: MarketRegistry) -> None:
        results = await asyncio.gather(
            *(registry.create("evt-race") for _ in range(5)), return_exceptions=True
        )
        created = [r for r in results if not isinstance(r, Exception)]
        dupes = [r for r in results if isinstance(r, DuplicateEventError)]
        assert len(created) == 1
        assert len(dupes) == 4


class TestLookup:
    async def test_get_unknown_returns_none(self, registry: MarketRegistry) -> None:
        assert registry.get("nope") is None

    async def test_require_unknown_raises(self, registry: MarketRegistry) -> None:
        with pytest.raises(MarketNotFoundError) as exc_info:
            registry.require("nope")
        assert exc_info.value.code == 3001

    async def test_list_in_creation_order(self, registry: MarketRegistry) -> None:
        for event_id in ("c", "a", "b"):
            await registry.create(event_id)
        assert [m.event_id for m in registry.list_markets()] == ["c", "a", "b"]

    async def test_markets_do_not_share_state(self, registry: MarketRegistry) -> None:
        first = await registry.create("evt-1")
        second = await registry.create("evt-2")
        await first.buy("alice", "A", 100)
        assert second.total_volume == 0
        assert second.get_position("alice").is_empty


def test_module_registry_is_singleton() -> None:
    assert get_market_registry() is get_market_registry()
