from decimal import Decimal, localcontext

from src.pm_amm.domain.models import BookLevel, PoolState, SyntheticOrderBook
from src.pm_amm.domain.pricing import simulate_buy
from src.pm_common.amounts import AMM_CONTEXT, MAX_AMOUNT, ONE, ZERO, to_amount
from src.pm_common.enums import Outcome
from src.pm_common.errors import InvalidAmountError, InvalidOrderBookParamsError


def synthesize(pool: PoolState, depth: int, step_size: object) -> SyntheticOrderBook:
    """Sample the curve at sizes step, 2*step, ..., depth*step for both outcomes.

    bids[X] = average price paid to buy X at that size.
    asks[X] = 1 - average price paid to buy the opposite outcome at that size.
    Read-only: works on the PoolState it is handed.
    """
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
        raise InvalidOrderBookParamsError(f"depth must be an integer >= 1, got {depth!r}")
    try:
        step = to_amount(step_size)
    except ValueError:
        raise InvalidOrderBookParamsError(f"step_size is not a number: {step_size!r}") from None
    if step <= ZERO:
        raise InvalidOrderBookParamsError(f"step_size must be positive, got {step_size!r}")
    # Deepest level must still be a tradable size
    if step > AMM_CONTEXT.divide(MAX_AMOUNT, Decimal(depth)):
        raise InvalidOrderBookParamsError(
            f"depth * step_size must not exceed {MAX_AMOUNT}, got {depth} * {step_size!r}"
        )

    book = SyntheticOrderBook(depth=depth, step_size=step)
    with localcontext(AMM_CONTEXT):
        for i in range(1, depth + 1):
            size: Decimal = step * i
            try:
                buy_a = simulate_buy(pool, Outcome.A, size)
                buy_b = simulate_buy(pool, Outcome.B, size)
            except InvalidAmountError:
                # Step below the pool's resolution returns no tokens
                raise InvalidOrderBookParamsError(
                    f"step_size {step_size!r} cannot be priced on this pool"
                ) from None

            book.a_bids.append(BookLevel(price=buy_a.avg_price, size=size))
            book.b_bids.append(BookLevel(price=buy_b.avg_price, size=size))
            book.a_asks.append(BookLevel(price=ONE - buy_b.avg_price, size=size))
            book.b_asks.append(BookLevel(price=ONE - buy_a.avg_price, size=size))
    return book
