# tests/unit/test_admin_service.py
"""Unit tests for AdminService."""
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from src.pm_admin.application.service import AdminService
from src.pm_amm.domain.models import PoolState
from src.pm_common.errors import AlreadyResolvedError, MarketNotFoundError
from src.pm_market.application.registry import MarketRegistry


async def test_resolve_returns_settlement() -> None:
    registry = MarketRegistry()
    ledger = await registry.create("evt-1", 1000)
    await ledger.buy("alice", "A", 100)

    result = await AdminService(store=registry).resolve_market("evt-1", "A")
    assert result.winning_outcome == "A"
    assert result.payouts["alice"] == pytest.approx(90.909, abs=1e-3)
    assert result.total_payout == pytest.approx(90.909, abs=1e-3)


async def test_resolve_twice_rejected() -> None:
    registry = MarketRegistry()
    await registry.create("evt-1")
    svc = AdminService(store=registry)
    await svc.resolve_market("evt-1", "DRAW")
    with pytest.raises(AlreadyResolvedError):
        await svc.resolve_market("evt-1", "A")


async def test_resolve_missing_market_raises() -> None:
    with pytest.raises(MarketNotFoundError):
        await AdminService(store=MarketRegistry()).resolve_market("nope", "A")


async def test_invariants_ok_after_trading() -> None:
    registry = MarketRegistry()
    ledger = await registry.create("evt-1")
    await registry.create("evt-2")
    for i in range(20):
        await ledger.buy("p", "A" if i % 2 else "B", i + 1)

    report = AdminService(store=registry).verify_all_invariants()
    assert report == {"ok": True, "checked": 2, "violations": []}


async def test_resolved_markets_skipped() -> None:
    registry = MarketRegistry()
    ledger = await registry.create("evt-1")
    await ledger.resolve("A")
    assert AdminService(store=registry).verify_all_invariants()["checked"] == 0


def test_violation_reported() -> None:
    broken = MagicMock()
    broken.event_id = "evt-broken"
    broken.resolved = False
    broken.pool_state.return_value = PoolState(
        pool_a=Decimal(10), pool_b=Decimal(10), invariant=Decimal(1000)
    )
    store = MagicMock()
    store.list_markets.return_value = [broken]

    report = AdminService(store=store, tolerance=Decimal("1e-18")).verify_all_invariants()
    assert report["ok"] is False
    assert report["violations"][0].startswith("evt-broken: product drift")


def test_resolve_request_rejects_unknown_outcome() -> None:
    from src.pm_admin.api.router import ResolveRequest

    with pytest.raises(ValidationError):
        ResolveRequest(outcome="VOID")
    assert ResolveRequest(outcome="DRAW").outcome.value == "DRAW"
