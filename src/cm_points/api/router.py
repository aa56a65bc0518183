"""cm_points REST API — balance and own transaction history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.bootstrap import Services, get_services
from src.cm_common.response import ApiResponse, success_response
from src.cm_gateway.auth.dependencies import get_current_user
from src.cm_gateway.user.models import User

router = APIRouter(prefix="/points", tags=["points"])


@router.get("/balance")
async def get_balance(
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    data = services.points.balance_response(current_user.id)
    return success_response(data.model_dump(), request)


@router.get("/transactions")
async def list_transactions(
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
) -> ApiResponse:
    data = services.points.list_transactions(current_user.id, cursor, limit)
    return success_response(data.model_dump(), request)
