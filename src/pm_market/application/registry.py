"""MarketRegistry: the process-wide collection of market ledgers.

One MarketLedger per event_id. Markets live for the process lifetime;
there is no eviction. Creation is guarded by a single coarse lock; lookups
are plain dict reads and never block.
"""
import asyncio
import logging
from decimal import Decimal

from config.settings import settings
from src.pm_amm.engine.ledger import MarketLedger
from src.pm_common.errors import DuplicateEventError, InvalidEventIdError, MarketNotFoundError

logger = logging.getLogger(__name__)


class MarketRegistry:
    def __init__(self, tolerance: Decimal | None = None) -> None:
        self._markets: dict[str, MarketLedger] = {}
        self._lock = asyncio.Lock()
        self._tolerance = tolerance

    async def create(
        self,
        event_id: str,
        initial_liquidity: object | None = None,
    ) -> MarketLedger:
        if not isinstance(event_id, str) or not event_id:
            raise InvalidEventIdError()
        liquidity = (
            settings.DEFAULT_INITIAL_LIQUIDITY if initial_liquidity is None else initial_liquidity
        )
        async with self._lock:
            if event_id in self._markets:
                raise DuplicateEventError(event_id)
            # Validates liquidity; nothing is registered if it raises
            ledger = MarketLedger(event_id, liquidity, tolerance=self._tolerance)
            self._markets[event_id] = ledger
        logger.info("Market created: event=%s liquidity=%s", event_id, liquidity)
        return ledger

    def get(self, event_id: str) -> MarketLedger | None:
        return self._markets.get(event_id)

    def require(self, event_id: str) -> MarketLedger:
        ledger = self._markets.get(event_id)
        if ledger is None:
            raise MarketNotFoundError(event_id)
        return ledger

    def list_markets(self) -> list[MarketLedger]:
        # dicts keep insertion order, i.e. creation order
        return list(self._markets.values())

    def __len__(self) -> int:
        return len(self._markets)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._markets


_registry: MarketRegistry | None = None


def get_market_registry() -> MarketRegistry:
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = MarketRegistry()
    return _registry
