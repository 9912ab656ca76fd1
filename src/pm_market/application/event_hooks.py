"""EventSourceAdapter: the boundary for the external event source.

The event source (whatever plays out the binary event) calls two hooks,
exposed over HTTP by pm_market.api.events_router:

    on_event_created(event_id)           -> opens a market at default liquidity
    on_event_finished(event_id, status)  -> resolves that market exactly once

Terminal statuses are mapped to ResolutionResult. Delivery is assumed to be
exactly-once; a repeated terminal signal is not deduplicated here and
surfaces AlreadyResolvedError to the caller.
"""
import logging

from src.pm_amm.domain.models import MarketSnapshot, Settlement
from src.pm_common.enums import ResolutionResult
from src.pm_common.errors import InvalidOutcomeError
from src.pm_market.domain.repository import MarketStoreProtocol

logger = logging.getLogger(__name__)

_TERMINAL_STATUS_MAP: dict[str, ResolutionResult] = {
    "A": ResolutionResult.A,
    "A_WINS": ResolutionResult.A,
    "B": ResolutionResult.B,
    "B_WINS": ResolutionResult.B,
    "DRAW": ResolutionResult.DRAW,
}


def outcome_from_status(status: str | ResolutionResult) -> ResolutionResult:
    if isinstance(status, ResolutionResult):
        return status
    result = _TERMINAL_STATUS_MAP.get(str(status).strip().upper())
    if result is None:
        raise InvalidOutcomeError(status)
    return result


class EventSourceAdapter:
    def __init__(self, store: MarketStoreProtocol, initial_liquidity: object | None = None) -> None:
        self._store = store
        self._initial_liquidity = initial_liquidity

    async def on_event_created(self, event_id: str) -> MarketSnapshot:
        ledger = await self._store.create(event_id, self._initial_liquidity)
        return ledger.snapshot()

    async def on_event_finished(self, event_id: str, status: str | ResolutionResult) -> Settlement:
        result = outcome_from_status(status)
        ledger = self._store.require(event_id)
        settlement = await ledger.resolve(result)
        logger.info(
            "Event finished: event=%s status=%s payouts=%s",
            event_id,
            status,
            {pid: str(amount) for pid, amount in settlement.payouts.items()},
        )
        return settlement
