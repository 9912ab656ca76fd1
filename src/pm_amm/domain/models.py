"""Domain models for pm_amm. Pure dataclasses, no business logic."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from src.pm_common.amounts import ZERO
from src.pm_common.enums import Outcome, ResolutionResult


@dataclass(frozen=True)
class PoolState:
    """Immutable reserve snapshot. Readers price against this, never the live ledger."""

    pool_a: Decimal
    pool_b: Decimal
    invariant: Decimal  # k = pool_a * pool_b at market creation

    def reserve(self, outcome: Outcome) -> Decimal:
        return self.pool_a if outcome is Outcome.A else self.pool_b

    def with_reserves(self, outcome: Outcome, traded: Decimal, other: Decimal) -> "PoolState":
        """Return a copy where `outcome`'s pool is `traded` and the opposite pool is `other`."""
        if outcome is Outcome.A:
            return PoolState(pool_a=traded, pool_b=other, invariant=self.invariant)
        return PoolState(pool_a=other, pool_b=traded, invariant=self.invariant)


@dataclass(frozen=True)
class BuyQuote:
    """Result of pricing a hypothetical purchase against a PoolState."""

    outcome: Outcome
    amount_in: Decimal
    tokens_out: Decimal
    avg_price: Decimal
    price_before: Decimal
    price_after: Decimal
    price_impact: Decimal  # (price_after - price_before) / price_before
    pool_after: PoolState


@dataclass
class Position:
    participant_id: str
    tokens_a: Decimal = ZERO
    tokens_b: Decimal = ZERO
    total_spent: Decimal = ZERO

    def tokens(self, outcome: Outcome) -> Decimal:
        return self.tokens_a if outcome is Outcome.A else self.tokens_b

    @property
    def is_empty(self) -> bool:
        return self.tokens_a == ZERO and self.tokens_b == ZERO and self.total_spent == ZERO


@dataclass(frozen=True)
class BuyResult:
    event_id: str
    participant_id: str
    outcome: Outcome
    amount_in: Decimal
    tokens_out: Decimal
    avg_price: Decimal
    new_price: Decimal  # post-trade price of the traded outcome
    position: Position  # copy, detached from the ledger


@dataclass(frozen=True)
class Settlement:
    event_id: str
    winning_outcome: ResolutionResult
    payouts: dict[str, Decimal]
    resolved_at: datetime

    @property
    def total_payout(self) -> Decimal:
        return sum(self.payouts.values(), ZERO)


@dataclass(frozen=True)
class MarketSnapshot:
    event_id: str
    pool_a: Decimal
    pool_b: Decimal
    invariant: Decimal
    price_a: Decimal
    price_b: Decimal
    total_volume: Decimal
    resolved: bool
    winning_outcome: ResolutionResult | None
    initial_liquidity: Decimal
    created_at: datetime
    resolved_at: datetime | None


@dataclass(frozen=True)
class BookLevel:
    """Single synthetic level: average price paid for a buy of `size` currency."""

    price: Decimal
    size: Decimal


@dataclass(frozen=True)
class SyntheticOrderBook:
    """Depth table sampled from the curve. Sizes ascend; bid prices never decrease."""

    depth: int
    step_size: Decimal
    a_bids: list[BookLevel] = field(default_factory=list)
    a_asks: list[BookLevel] = field(default_factory=list)
    b_bids: list[BookLevel] = field(default_factory=list)
    b_asks: list[BookLevel] = field(default_factory=list)

    def bids(self, outcome: Outcome) -> list[BookLevel]:
        return self.a_bids if outcome is Outcome.A else self.b_bids

    def asks(self, outcome: Outcome) -> list[BookLevel]:
        return self.a_asks if outcome is Outcome.A else self.b_asks

    def best_bid(self, outcome: Outcome) -> Decimal | None:
        levels = self.bids(outcome)
        return levels[0].price if levels else None

    def best_ask(self, outcome: Outcome) -> Decimal | None:
        levels = self.asks(outcome)
        return levels[0].price if levels else None

    def spread(self, outcome: Outcome) -> Decimal | None:
        bid = self.best_bid(outcome)
        ask = self.best_ask(outcome)
        if bid is None or ask is None:
            return None
        return ask - bid
