# src/pm_admin/api/router.py
"""Admin REST API.

Resolution is normally driven by the event source through
POST /events/{event_id}/finish; this endpoint is the manual path for the same step.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from src.pm_admin.application.service import AdminService
from src.pm_common.enums import ResolutionResult
from src.pm_common.response import ApiResponse, success_response
from src.pm_market.application.registry import MarketRegistry, get_market_registry

router = APIRouter(prefix="/admin", tags=["admin"])


class ResolveRequest(BaseModel):
    outcome: ResolutionResult


def get_admin_service(
    registry: Annotated[MarketRegistry, Depends(get_market_registry)],
) -> AdminService:
    return AdminService(store=registry)


@router.post("/markets/{event_id}/resolve")
async def resolve_market(
    event_id: str,
    body: ResolveRequest,
    request: Request,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> ApiResponse:
    result = await service.resolve_market(event_id, body.outcome)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))


@router.get("/invariants")
async def verify_invariants(
    request: Request,
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> ApiResponse:
    return success_response(
        service.verify_all_invariants(), getattr(request.state, "request_id", None)
    )
