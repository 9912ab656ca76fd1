"""Pydantic schemas for pm_market API requests and responses.

Domain amounts are Decimal; responses render them as float. Requests
accept JSON numbers or numeric strings and hand Decimals to the domain,
which owns the positivity checks (so a zero amount surfaces as
InvalidAmountError 4001, not a schema error).
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from src.pm_amm.domain.models import (
    BookLevel,
    BuyQuote,
    BuyResult,
    MarketSnapshot,
    Position,
    Settlement,
    SyntheticOrderBook,
)
from src.pm_common.amounts import amount_to_display
from src.pm_common.datetime_utils import iso_or_none
from src.pm_common.enums import Outcome

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateMarketRequest(BaseModel):
    event_id: str = Field(min_length=1, max_length=128)
    initial_liquidity: Decimal | None = None


class BuyRequest(BaseModel):
    participant_id: str = Field(min_length=1, max_length=128)
    outcome: Outcome
    amount: Decimal


class EventCreatedRequest(BaseModel):
    event_id: str = Field(min_length=1, max_length=128)


class EventFinishedRequest(BaseModel):
    # Terminal status as the event source reports it: A, A_WINS, B, B_WINS, DRAW
    status: str = Field(min_length=1, max_length=32)


# ---------------------------------------------------------------------------
# Position
# ---------------------------------------------------------------------------


class PositionOut(BaseModel):
    participant_id: str
    tokens_a: float
    tokens_b: float
    total_spent: float

    @classmethod
    def from_domain(cls, p: Position) -> "PositionOut":
        return cls(
            participant_id=p.participant_id,
            tokens_a=float(p.tokens_a),
            tokens_b=float(p.tokens_b),
            total_spent=float(p.total_spent),
        )


# ---------------------------------------------------------------------------
# Market snapshot
# ---------------------------------------------------------------------------


class MarketSnapshotOut(BaseModel):
    event_id: str
    pool_a: float
    pool_b: float
    invariant: float
    price_a: float
    price_b: float
    total_volume: float
    total_volume_display: str
    resolved: bool
    winning_outcome: str | None
    initial_liquidity: float
    created_at: str
    resolved_at: str | None

    @classmethod
    def from_domain(cls, s: MarketSnapshot) -> "MarketSnapshotOut":
        return cls(
            event_id=s.event_id,
            pool_a=float(s.pool_a),
            pool_b=float(s.pool_b),
            invariant=float(s.invariant),
            price_a=float(s.price_a),
            price_b=float(s.price_b),
            total_volume=float(s.total_volume),
            total_volume_display=amount_to_display(s.total_volume),
            resolved=s.resolved,
            winning_outcome=s.winning_outcome.value if s.winning_outcome else None,
            initial_liquidity=float(s.initial_liquidity),
            created_at=s.created_at.isoformat(),
            resolved_at=iso_or_none(s.resolved_at),
        )


class MarketListResponse(BaseModel):
    items: list[MarketSnapshotOut]
    total: int


# ---------------------------------------------------------------------------
# Synthetic order book
# ---------------------------------------------------------------------------


class BookLevelOut(BaseModel):
    price: float
    size: float


def _levels(levels: list[BookLevel]) -> list[BookLevelOut]:
    return [BookLevelOut(price=float(lv.price), size=float(lv.size)) for lv in levels]


def _float_or_none(value: Decimal | None) -> float | None:
    return None if value is None else float(value)


class OutcomeSideOut(BaseModel):
    bids: list[BookLevelOut]
    asks: list[BookLevelOut]
    best_bid: float | None
    best_ask: float | None
    spread: float | None

    @classmethod
    def from_book(cls, book: SyntheticOrderBook, outcome: Outcome) -> "OutcomeSideOut":
        return cls(
            bids=_levels(book.bids(outcome)),
            asks=_levels(book.asks(outcome)),
            best_bid=_float_or_none(book.best_bid(outcome)),
            best_ask=_float_or_none(book.best_ask(outcome)),
            spread=_float_or_none(book.spread(outcome)),
        )


class OrderBookResponse(BaseModel):
    event_id: str
    depth: int
    step_size: float
    a: OutcomeSideOut
    b: OutcomeSideOut

    @classmethod
    def from_book(cls, event_id: str, book: SyntheticOrderBook) -> "OrderBookResponse":
        return cls(
            event_id=event_id,
            depth=book.depth,
            step_size=float(book.step_size),
            a=OutcomeSideOut.from_book(book, Outcome.A),
            b=OutcomeSideOut.from_book(book, Outcome.B),
        )


class MarketStateResponse(BaseModel):
    """Snapshot plus a default-depth order book, as viewers consume it."""

    market: MarketSnapshotOut
    order_book: OrderBookResponse


# ---------------------------------------------------------------------------
# Trading
# ---------------------------------------------------------------------------


class QuoteResponse(BaseModel):
    event_id: str
    outcome: str
    amount: float
    tokens_out: float
    avg_price: float
    price_before: float
    price_after: float
    price_impact: float

    @classmethod
    def from_domain(cls, event_id: str, q: BuyQuote) -> "QuoteResponse":
        return cls(
            event_id=event_id,
            outcome=q.outcome.value,
            amount=float(q.amount_in),
            tokens_out=float(q.tokens_out),
            avg_price=float(q.avg_price),
            price_before=float(q.price_before),
            price_after=float(q.price_after),
            price_impact=float(q.price_impact),
        )


class BuyResponse(BaseModel):
    event_id: str
    outcome: str
    amount: float
    tokens_out: float
    avg_price: float
    new_price: float
    position: PositionOut

    @classmethod
    def from_domain(cls, r: BuyResult) -> "BuyResponse":
        return cls(
            event_id=r.event_id,
            outcome=r.outcome.value,
            amount=float(r.amount_in),
            tokens_out=float(r.tokens_out),
            avg_price=float(r.avg_price),
            new_price=float(r.new_price),
            position=PositionOut.from_domain(r.position),
        )


# ---------------------------------------------------------------------------
# Settlement
# ---------------------------------------------------------------------------


class SettlementResponse(BaseModel):
    event_id: str
    winning_outcome: str
    payouts: dict[str, float]
    total_payout: float
    resolved_at: str

    @classmethod
    def from_domain(cls, s: Settlement) -> "SettlementResponse":
        return cls(
            event_id=s.event_id,
            winning_outcome=s.winning_outcome.value,
            payouts={pid: float(amount) for pid, amount in s.payouts.items()},
            total_payout=float(s.total_payout),
            resolved_at=s.resolved_at.isoformat(),
        )
