# src/pm_market/api/events_router.py
"""Event-source hooks REST API.

POST /events                     - event created: open its market at default liquidity
POST /events/{event_id}/finish   - event finished: resolve from its terminal status
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.pm_common.response import ApiResponse, success_response
from src.pm_market.application.event_hooks import EventSourceAdapter
from src.pm_market.application.registry import MarketRegistry, get_market_registry
from src.pm_market.application.schemas import (
    EventCreatedRequest,
    EventFinishedRequest,
    MarketSnapshotOut,
    SettlementResponse,
)

router = APIRouter(prefix="/events", tags=["events"])


def get_event_adapter(
    registry: Annotated[MarketRegistry, Depends(get_market_registry)],
) -> EventSourceAdapter:
    return EventSourceAdapter(registry)


Adapter = Annotated[EventSourceAdapter, Depends(get_event_adapter)]


@router.post("")
async def event_created(
    body: EventCreatedRequest, request: Request, adapter: Adapter
) -> ApiResponse:
    snapshot = await adapter.on_event_created(body.event_id)
    return success_response(
        MarketSnapshotOut.from_domain(snapshot).model_dump(),
        getattr(request.state, "request_id", None),
    )


@router.post("/{event_id}/finish")
async def event_finished(
    event_id: str, body: EventFinishedRequest, request: Request, adapter: Adapter
) -> ApiResponse:
    settlement = await adapter.on_event_finished(event_id, body.status)
    return success_response(
        SettlementResponse.from_domain(settlement).model_dump(),
        getattr(request.state, "request_id", None),
    )
