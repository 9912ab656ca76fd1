"""Pool invariant verification, run on every candidate post-trade pool."""

import logging
from decimal import Decimal, localcontext

from src.pm_amm.domain.models import PoolState
from src.pm_amm.domain.pricing import prices
from src.pm_common.amounts import AMM_CONTEXT, ONE, ZERO
from src.pm_common.errors import InvariantViolationError

logger = logging.getLogger(__name__)


def check_pool_invariants(pool: PoolState, tolerance: Decimal) -> list[str]:
    """Return human-readable violations for `pool`; empty list means healthy.

    reserves:  pool_a > 0 and pool_b > 0
    product:   |pool_a * pool_b - k| <= k * tolerance
    price sum: |price_a + price_b - 1| <= tolerance
    """
    if pool.pool_a <= ZERO or pool.pool_b <= ZERO:
        # Prices are undefined past this point
        return [f"non-positive reserves: pool_a={pool.pool_a}, pool_b={pool.pool_b}"]

    violations: list[str] = []
    with localcontext(AMM_CONTEXT):
        drift = abs(pool.pool_a * pool.pool_b - pool.invariant)
        if drift > pool.invariant * tolerance:
            violations.append(
                f"product drift: pool_a * pool_b moved {drift} from k={pool.invariant}"
            )
        price_a, price_b = prices(pool)
        if abs(price_a + price_b - ONE) > tolerance:
            violations.append(f"price sum drift: price_a + price_b = {price_a + price_b}")
    return violations


def verify_invariants_after_trade(event_id: str, pool: PoolState, tolerance: Decimal) -> None:
    """Raise InvariantViolationError if `pool` may not be committed."""
    violations = check_pool_invariants(pool, tolerance)
    if violations:
        logger.error("Invariant check failed: event=%s %s", event_id, "; ".join(violations))
        raise InvariantViolationError(f"{event_id}: {'; '.join(violations)}")
    logger.debug(
        "Invariants OK: event=%s, pool_a=%s, pool_b=%s", event_id, pool.pool_a, pool.pool_b
    )
