"""pm_market REST endpoints.

POST /markets                                     - create market for an event
GET  /markets                                     - list all markets
GET  /markets/{event_id}                          - snapshot + default order book
GET  /markets/{event_id}/orderbook                - synthetic depth table
GET  /markets/{event_id}/quote                    - simulate a buy (no state change)
POST /markets/{event_id}/buy                      - buy outcome tokens
GET  /markets/{event_id}/positions/{participant}  - participant position
GET  /markets/{event_id}/settlement               - payouts after resolution
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from config.settings import settings
from src.pm_common.enums import Outcome
from src.pm_common.response import ApiResponse, success_response
from src.pm_market.application.registry import MarketRegistry, get_market_registry
from src.pm_market.application.schemas import BuyRequest, CreateMarketRequest
from src.pm_market.application.service import MarketApplicationService

router = APIRouter(prefix="/markets", tags=["markets"])


def get_market_service(
    registry: Annotated[MarketRegistry, Depends(get_market_registry)],
) -> MarketApplicationService:
    return MarketApplicationService(store=registry)


Service = Annotated[MarketApplicationService, Depends(get_market_service)]


def _ok(request: Request, data: object) -> ApiResponse:
    return success_response(data, getattr(request.state, "request_id", None))


@router.post("")
async def create_market(
    body: CreateMarketRequest, request: Request, service: Service
) -> ApiResponse:
    result = await service.create_market(body.event_id, body.initial_liquidity)
    return _ok(request, result.model_dump())


@router.get("")
async def list_markets(request: Request, service: Service) -> ApiResponse:
    return _ok(request, service.list_markets().model_dump())


@router.get("/{event_id}")
async def get_market(event_id: str, request: Request, service: Service) -> ApiResponse:
    return _ok(request, service.get_market_state(event_id).model_dump())


@router.get("/{event_id}/orderbook")
async def get_orderbook(
    event_id: str,
    request: Request,
    service: Service,
    depth: int = Query(settings.DEFAULT_ORDERBOOK_DEPTH, ge=1, le=settings.MAX_ORDERBOOK_DEPTH),
    step_size: Decimal | None = Query(None),
) -> ApiResponse:
    return _ok(request, service.get_order_book(event_id, depth, step_size).model_dump())


@router.get("/{event_id}/quote")
async def quote(
    event_id: str,
    request: Request,
    service: Service,
    outcome: Outcome = Query(...),
    amount: Decimal = Query(...),
) -> ApiResponse:
    return _ok(request, service.quote(event_id, outcome, amount).model_dump())


@router.post("/{event_id}/buy")
async def buy(event_id: str, body: BuyRequest, request: Request, service: Service) -> ApiResponse:
    result = await service.buy(event_id, body.participant_id, body.outcome, body.amount)
    return _ok(request, result.model_dump())


@router.get("/{event_id}/positions/{participant_id}")
async def get_position(
    event_id: str, participant_id: str, request: Request, service: Service
) -> ApiResponse:
    return _ok(request, service.get_position(event_id, participant_id).model_dump())


@router.get("/{event_id}/settlement")
async def get_settlement(event_id: str, request: Request, service: Service) -> ApiResponse:
    return _ok(request, service.get_settlement(event_id).model_dump())
