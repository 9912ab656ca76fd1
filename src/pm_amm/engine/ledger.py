"""MarketLedger: stateful owner of one market's pools and positions."""
import asyncio
import logging
from dataclasses import replace
from decimal import Decimal, localcontext

from config.settings import settings
from src.pm_amm.domain.models import (
    BuyQuote,
    BuyResult,
    MarketSnapshot,
    PoolState,
    Position,
    Settlement,
    SyntheticOrderBook,
)
from src.pm_amm.domain.pricing import price, prices, simulate_buy
from src.pm_amm.engine.invariants import verify_invariants_after_trade
from src.pm_amm.engine.order_book import synthesize
from src.pm_common.amounts import AMM_CONTEXT, HALF, ZERO, is_within_range, to_amount
from src.pm_common.datetime_utils import utc_now
from src.pm_common.enums import Outcome, ResolutionResult, parse_outcome, parse_resolution
from src.pm_common.errors import (
    AlreadyResolvedError,
    InvalidLiquidityError,
    InvalidParticipantError,
    MarketResolvedError,
)

logger = logging.getLogger(__name__)


def calc_payout(position: Position, result: ResolutionResult) -> Decimal:
    """Winning tokens redeem at 1, losing at 0; a draw redeems every token at 0.5."""
    if result is ResolutionResult.A:
        return position.tokens_a
    if result is ResolutionResult.B:
        return position.tokens_b
    with localcontext(AMM_CONTEXT):
        return (position.tokens_a + position.tokens_b) * HALF


class MarketLedger:
    """Pools, positions and settlement for a single event.

    `buy` and `resolve` are serialized by a per-ledger asyncio.Lock. Every
    new value is computed before the first assignment and nothing awaits
    in between, so a mutation either lands completely or not at all.
    Readers work on the immutable PoolState current at call time.
    """

    def __init__(
        self,
        event_id: str,
        initial_liquidity: object,
        tolerance: Decimal | None = None,
    ) -> None:
        try:
            liquidity = to_amount(initial_liquidity)
        except ValueError:
            raise InvalidLiquidityError(initial_liquidity) from None
        if not is_within_range(liquidity):
            raise InvalidLiquidityError(initial_liquidity)

        self._event_id = event_id
        self._initial_liquidity = liquidity
        self._pool = PoolState(
            pool_a=liquidity,
            pool_b=liquidity,
            invariant=AMM_CONTEXT.multiply(liquidity, liquidity),
        )
        self._tolerance = tolerance if tolerance is not None else settings.INVARIANT_TOLERANCE
        self._positions: dict[str, Position] = {}
        self._total_volume = ZERO
        self._resolved = False
        self._winning_outcome: ResolutionResult | None = None
        self._settlement: Settlement | None = None
        self._created_at = utc_now()
        self._lock = asyncio.Lock()

    @property
    def event_id(self) -> str:
        return self._event_id

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def winning_outcome(self) -> ResolutionResult | None:
        return self._winning_outcome

    @property
    def total_volume(self) -> Decimal:
        return self._total_volume

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def buy(
        self, participant_id: str, outcome: Outcome | str, amount_in: object
    ) -> BuyResult:
        if not isinstance(participant_id, str) or not participant_id:
            raise InvalidParticipantError()
        side = parse_outcome(outcome)

        async with self._lock:
            if self._resolved:
                raise MarketResolvedError(self._event_id)
            quote = simulate_buy(self._pool, side, amount_in)
            verify_invariants_after_trade(self._event_id, quote.pool_after, self._tolerance)
            position = self._apply_to_position(participant_id, quote)

            # Commit: pool, position and volume together
            self._pool = quote.pool_after
            self._positions[participant_id] = position
            self._total_volume = AMM_CONTEXT.add(self._total_volume, quote.amount_in)

        new_price = quote.price_after
        logger.info(
            "BUY event=%s participant=%s outcome=%s amount=%s tokens=%s new_price=%s",
            self._event_id,
            participant_id,
            side.value,
            quote.amount_in,
            quote.tokens_out,
            new_price,
        )
        return BuyResult(
            event_id=self._event_id,
            participant_id=participant_id,
            outcome=side,
            amount_in=quote.amount_in,
            tokens_out=quote.tokens_out,
            avg_price=quote.avg_price,
            new_price=new_price,
            position=replace(position),
        )

    def _apply_to_position(self, participant_id: str, quote: BuyQuote) -> Position:
        """Build the post-trade position without touching the stored one."""
        current = self._positions.get(participant_id) or Position(participant_id=participant_id)
        with localcontext(AMM_CONTEXT):
            if quote.outcome is Outcome.A:
                return replace(
                    current,
                    tokens_a=current.tokens_a + quote.tokens_out,
                    total_spent=current.total_spent + quote.amount_in,
                )
            return replace(
                current,
                tokens_b=current.tokens_b + quote.tokens_out,
                total_spent=current.total_spent + quote.amount_in,
            )

    async def resolve(self, outcome: ResolutionResult | str) -> Settlement:
        """Close the market and compute every participant's payout. One-shot."""
        result = parse_resolution(outcome)

        async with self._lock:
            if self._resolved:
                assert self._winning_outcome is not None
                raise AlreadyResolvedError(self._event_id, self._winning_outcome.value)
            payouts = {
                pid: calc_payout(pos, result) for pid, pos in self._positions.items()
            }
            settlement = Settlement(
                event_id=self._event_id,
                winning_outcome=result,
                payouts=payouts,
                resolved_at=utc_now(),
            )
            self._resolved = True
            self._winning_outcome = result
            self._settlement = settlement

        logger.info(
            "RESOLVE event=%s outcome=%s participants=%d total_payout=%s",
            self._event_id,
            result.value,
            len(payouts),
            settlement.total_payout,
        )
        return replace(settlement, payouts=dict(payouts))

    # ------------------------------------------------------------------
    # Reads (no lock)
    # ------------------------------------------------------------------

    def pool_state(self) -> PoolState:
        return self._pool

    def price(self, outcome: Outcome | str) -> Decimal:
        return price(self._pool, outcome)

    def quote(self, outcome: Outcome | str, amount_in: object) -> BuyQuote:
        return simulate_buy(self._pool, outcome, amount_in)

    def order_book(self, depth: int, step_size: object) -> SyntheticOrderBook:
        return synthesize(self._pool, depth, step_size)

    def get_position(self, participant_id: str) -> Position:
        """Copy of the participant's position, or a zero position. Never inserts."""
        position = self._positions.get(participant_id)
        if position is None:
            return Position(participant_id=participant_id)
        return replace(position)

    def positions(self) -> list[Position]:
        return [replace(p) for p in self._positions.values()]

    def settlement(self) -> Settlement | None:
        if self._settlement is None:
            return None
        return replace(self._settlement, payouts=dict(self._settlement.payouts))

    def snapshot(self) -> MarketSnapshot:
        pool = self._pool
        price_a, price_b = prices(pool)
        return MarketSnapshot(
            event_id=self._event_id,
            pool_a=pool.pool_a,
            pool_b=pool.pool_b,
            invariant=pool.invariant,
            price_a=price_a,
            price_b=price_b,
            total_volume=self._total_volume,
            resolved=self._resolved,
            winning_outcome=self._winning_outcome,
            initial_liquidity=self._initial_liquidity,
            created_at=self._created_at,
            resolved_at=self._settlement.resolved_at if self._settlement else None,
        )
