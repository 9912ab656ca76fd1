# src/pm_admin/application/service.py
"""Admin application service."""
import logging
from decimal import Decimal
from typing import Any

from config.settings import settings
from src.pm_amm.engine.invariants import check_pool_invariants
from src.pm_common.enums import ResolutionResult
from src.pm_market.application.registry import MarketRegistry
from src.pm_market.application.schemas import SettlementResponse
from src.pm_market.domain.repository import MarketStoreProtocol

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        store: MarketStoreProtocol | None = None,
        tolerance: Decimal | None = None,
    ) -> None:
        self._store: MarketStoreProtocol = store or MarketRegistry()
        self._tolerance = tolerance if tolerance is not None else settings.INVARIANT_TOLERANCE

    async def resolve_market(
        self, event_id: str, outcome: ResolutionResult | str
    ) -> SettlementResponse:
        ledger = self._store.require(event_id)
        settlement = await ledger.resolve(outcome)
        return SettlementResponse.from_domain(settlement)

    def verify_all_invariants(self) -> dict[str, Any]:
        """Audit every unresolved market's pool against the curve invariants."""
        violations: list[str] = []
        checked = 0
        for ledger in self._store.list_markets():
            if ledger.resolved:
                continue
            checked += 1
            for v in check_pool_invariants(ledger.pool_state(), self._tolerance):
                violations.append(f"{ledger.event_id}: {v}")
        if violations:
            logger.warning("Invariant audit found %d violation(s)", len(violations))
        return {"ok": len(violations) == 0, "checked": checked, "violations": violations}
