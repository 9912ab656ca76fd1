"""Constant-product pricing for a two-outcome pool.

Curve: pool_a * pool_b = k, fixed at market creation.
Marginal price of A = pool_b / (pool_a + pool_b), so price(A) + price(B) = 1.

Buying outcome X with `amount` currency:
  other'  = other + amount          (the opposite pool absorbs the currency)
  traded' = k / other'              (the traded pool is recomputed on the curve)
  tokens  = traded - traded'        (only the traded pool ever shrinks)

All functions are pure: they read a PoolState and return new values. They
are safe to call from any number of concurrent readers without a lock.
"""

from decimal import Decimal, localcontext

from src.pm_amm.domain.models import BuyQuote, PoolState
from src.pm_common.amounts import AMM_CONTEXT, ZERO, is_within_range, to_amount
from src.pm_common.enums import Outcome, parse_outcome
from src.pm_common.errors import InvalidAmountError


def price(pool: PoolState, outcome: Outcome | str) -> Decimal:
    """Instantaneous price of `outcome`: opposite reserve over total reserves."""
    side = parse_outcome(outcome)
    with localcontext(AMM_CONTEXT):
        return pool.reserve(side.opposite) / (pool.pool_a + pool.pool_b)


def prices(pool: PoolState) -> tuple[Decimal, Decimal]:
    """(price_a, price_b) for the same snapshot."""
    return price(pool, Outcome.A), price(pool, Outcome.B)


def validate_amount(amount_in: object) -> Decimal:
    """Return `amount_in` as a Decimal, or raise InvalidAmountError.

    Accepted: finite, greater than zero and no larger than MAX_AMOUNT.
    """
    try:
        amount = to_amount(amount_in)
    except ValueError:
        raise InvalidAmountError(amount_in) from None
    if not is_within_range(amount):
        raise InvalidAmountError(amount_in)
    return amount


def simulate_buy(pool: PoolState, outcome: Outcome | str, amount_in: object) -> BuyQuote:
    """Price a purchase of `outcome` for `amount_in` currency without touching any state."""
    side = parse_outcome(outcome)
    amount = validate_amount(amount_in)

    with localcontext(AMM_CONTEXT):
        traded = pool.reserve(side)
        other = pool.reserve(side.opposite)
        price_before = other / (traded + other)

        new_other = other + amount
        new_traded = pool.invariant / new_other
        tokens_out = traded - new_traded
        if tokens_out <= ZERO:
            # Only reachable on an exhausted pool; the curve is asymptotic otherwise
            raise InvalidAmountError(amount_in)

        avg_price = amount / tokens_out
        price_after = new_other / (new_traded + new_other)
        price_impact = (price_after - price_before) / price_before

    return BuyQuote(
        outcome=side,
        amount_in=amount,
        tokens_out=tokens_out,
        avg_price=avg_price,
        price_before=price_before,
        price_after=price_after,
        price_impact=price_impact,
        pool_after=pool.with_reserves(side, new_traded, new_other),
    )
