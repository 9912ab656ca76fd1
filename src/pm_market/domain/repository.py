# src/pm_market/domain/repository.py
"""Market store Protocol: dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
The application layer provides the in-memory MarketRegistry.
"""

from typing import Protocol

from src.pm_amm.engine.ledger import MarketLedger


class MarketStoreProtocol(Protocol):
    async def create(
        self,
        event_id: str,
        initial_liquidity: object | None = None,
    ) -> MarketLedger: ...

    def get(self, event_id: str) -> MarketLedger | None: ...

    def require(self, event_id: str) -> MarketLedger: ...

    def list_markets(self) -> list[MarketLedger]: ...
