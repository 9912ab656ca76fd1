from decimal import Decimal

import pytest

from src.pm_amm.domain.models import PoolState
from src.pm_amm.engine.invariants import check_pool_invariants, verify_invariants_after_trade
from src.pm_common.errors import InvariantViolationError

TOL = Decimal("1e-18")


def test_healthy_pool_has_no_violations() -> None:
    pool = PoolState(pool_a=Decimal(400), pool_b=Decimal(2500), invariant=Decimal(1_000_000))
    assert check_pool_invariants(pool, TOL) == []


def test_non_positive_pool_reported() -> None:
    pool = PoolState(pool_a=Decimal(0), pool_b=Decimal(10), invariant=Decimal(100))
    violations = check_pool_invariants(pool, TOL)
    assert len(violations) == 1
    assert "non-positive reserves" in violations[0]


def test_product_drift_reported() -> None:
    pool = PoolState(pool_a=Decimal(1000), pool_b=Decimal("1000.5"), invariant=Decimal(1_000_000))
    violations = check_pool_invariants(pool, TOL)
    assert any("product drift" in v for v in violations)


def test_drift_within_tolerance_accepted() -> None:
    pool = PoolState(pool_a=Decimal(1000), pool_b=Decimal("1000.5"), invariant=Decimal(1_000_000))
    assert check_pool_invariants(pool, Decimal("0.001")) == []


def test_verify_raises_on_violation() -> None:
    pool = PoolState(pool_a=Decimal(-1), pool_b=Decimal(10), invariant=Decimal(100))
    with pytest.raises(InvariantViolationError) as exc_info:
        verify_invariants_after_trade("evt-bad", pool, TOL)
    assert exc_info.value.code == 9001
    assert "evt-bad" in exc_info.value.message
