"""Admin REST API — users, points adjustments, user ledgers, promotion plan catalog."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from src.bootstrap import Services, get_services
from src.cm_common.errors import AccountNotFoundError
from src.cm_common.response import ApiResponse, success_response
from src.cm_gateway.auth.dependencies import get_current_user, require_admin
from src.cm_gateway.user.models import User
from src.cm_gateway.user.schemas import AdminUserItem, UserInfo
from src.cm_points.application.schemas import (
    AdminAdjustRequest,
    AdminAdjustResponse,
    TransactionItem,
)
from src.cm_promotion.application.schemas import CreatePlanRequest, PlanItem, UpdatePlanRequest

router = APIRouter(prefix="/admin", tags=["admin"])


def _require_user(services: Services, user_id: str) -> User:
    user = services.users.get(user_id)
    if user is None:
        raise AccountNotFoundError(user_id)
    return user


@router.post("/bootstrap")
async def bootstrap_admin(
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    """Make the caller the first admin. Refused once any admin exists."""
    user = services.user_service.bootstrap_admin(current_user)
    resp = success_response(UserInfo.from_domain(user).model_dump(), request)
    resp.message = "Admin account created"
    return resp


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@router.get("/users")
async def list_users(
    admin: Annotated[User, Depends(require_admin)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    """All accounts with their point balances, oldest first."""
    items = [
        AdminUserItem.from_account(u, services.points.get_balance(u.id)).model_dump()
        for u in services.users.list_all()
    ]
    return success_response({"items": items}, request)


@router.post("/users/{user_id}/make-admin")
async def make_admin(
    user_id: str,
    admin: Annotated[User, Depends(require_admin)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    user = services.user_service.make_admin(admin, user_id)
    return success_response(UserInfo.from_domain(user).model_dump(), request)


# ---------------------------------------------------------------------------
# Points
# ---------------------------------------------------------------------------


@router.post("/users/{user_id}/points")
async def adjust_points(
    user_id: str,
    body: AdminAdjustRequest,
    admin: Annotated[User, Depends(require_admin)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    _require_user(services, user_id)
    tx = await services.points.adjust(user_id, body.points, body.description)
    data = AdminAdjustResponse(
        user_id=user_id,
        points=tx.balance_after,
        transaction=TransactionItem.from_domain(tx),
    )
    return success_response(data.model_dump(), request)


@router.get("/users/{user_id}/transactions")
async def list_user_transactions(
    user_id: str,
    admin: Annotated[User, Depends(require_admin)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100),
) -> ApiResponse:
    _require_user(services, user_id)
    data = services.points.list_transactions(user_id, cursor, limit)
    return success_response(data.model_dump(), request)


# ---------------------------------------------------------------------------
# Promotion plans
# ---------------------------------------------------------------------------


@router.get("/promotion-plans")
async def list_all_plans(
    admin: Annotated[User, Depends(require_admin)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    items = [PlanItem.from_domain(p).model_dump() for p in services.catalog.list_all()]
    return success_response({"items": items}, request)


@router.post("/promotion-plans", status_code=status.HTTP_201_CREATED)
async def create_plan(
    body: CreatePlanRequest,
    admin: Annotated[User, Depends(require_admin)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    plan = services.catalog.create(**body.model_dump())
    return success_response(PlanItem.from_domain(plan).model_dump(), request)


@router.patch("/promotion-plans/{plan_id}")
async def update_plan(
    plan_id: int,
    body: UpdatePlanRequest,
    admin: Annotated[User, Depends(require_admin)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    plan = services.catalog.update(plan_id, **body.model_dump(exclude_none=True))
    return success_response(PlanItem.from_domain(plan).model_dump(), request)


@router.delete("/promotion-plans/{plan_id}")
async def delete_plan(
    plan_id: int,
    admin: Annotated[User, Depends(require_admin)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    retired = services.catalog.delete(plan_id)
    if retired is None:
        resp = success_response({"id": plan_id, "deleted": True}, request)
    else:
        resp = success_response(PlanItem.from_domain(retired).model_dump(), request)
        resp.message = "Plan is referenced by past promotions and was deactivated"
    return resp
