"""MarketApplicationService: thin composition layer.

Resolves event_id -> MarketLedger through the store, delegates to the
ledger and maps domain results onto response schemas. Every unknown
event_id raises MarketNotFoundError.
"""

from config.settings import settings
from src.pm_common.enums import Outcome
from src.pm_common.errors import MarketNotResolvedError
from src.pm_market.application.registry import MarketRegistry
from src.pm_market.application.schemas import (
    BuyResponse,
    MarketListResponse,
    MarketSnapshotOut,
    MarketStateResponse,
    OrderBookResponse,
    PositionOut,
    QuoteResponse,
    SettlementResponse,
)
from src.pm_market.domain.repository import MarketStoreProtocol


class MarketApplicationService:
    def __init__(self, store: MarketStoreProtocol | None = None) -> None:
        self._store: MarketStoreProtocol = store or MarketRegistry()

    async def create_market(
        self, event_id: str, initial_liquidity: object | None = None
    ) -> MarketSnapshotOut:
        ledger = await self._store.create(event_id, initial_liquidity)
        return MarketSnapshotOut.from_domain(ledger.snapshot())

    def list_markets(self) -> MarketListResponse:
        items = [MarketSnapshotOut.from_domain(m.snapshot()) for m in self._store.list_markets()]
        return MarketListResponse(items=items, total=len(items))

    def get_market_state(self, event_id: str) -> MarketStateResponse:
        ledger = self._store.require(event_id)
        # No await between the two reads, so both see the same reserves
        snapshot = ledger.snapshot()
        book = ledger.order_book(settings.DEFAULT_ORDERBOOK_DEPTH, settings.DEFAULT_ORDERBOOK_STEP)
        return MarketStateResponse(
            market=MarketSnapshotOut.from_domain(snapshot),
            order_book=OrderBookResponse.from_book(event_id, book),
        )

    def get_order_book(
        self, event_id: str, depth: int | None = None, step_size: object | None = None
    ) -> OrderBookResponse:
        ledger = self._store.require(event_id)
        book = ledger.order_book(
            depth if depth is not None else settings.DEFAULT_ORDERBOOK_DEPTH,
            step_size if step_size is not None else settings.DEFAULT_ORDERBOOK_STEP,
        )
        return OrderBookResponse.from_book(event_id, book)

    def quote(self, event_id: str, outcome: Outcome | str, amount: object) -> QuoteResponse:
        ledger = self._store.require(event_id)
        return QuoteResponse.from_domain(event_id, ledger.quote(outcome, amount))

    async def buy(
        self, event_id: str, participant_id: str, outcome: Outcome | str, amount: object
    ) -> BuyResponse:
        ledger = self._store.require(event_id)
        result = await ledger.buy(participant_id, outcome, amount)
        return BuyResponse.from_domain(result)

    def get_position(self, event_id: str, participant_id: str) -> PositionOut:
        ledger = self._store.require(event_id)
        return PositionOut.from_domain(ledger.get_position(participant_id))

    def get_settlement(self, event_id: str) -> SettlementResponse:
        ledger = self._store.require(event_id)
        settlement = ledger.settlement()
        if settlement is None:
            raise MarketNotResolvedError(event_id)
        return SettlementResponse.from_domain(settlement)
