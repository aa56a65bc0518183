"""cm_promotion REST API — plans, quotes, purchase, attach, detach."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from src.bootstrap import Services, get_services
from src.cm_ads.application.schemas import AdItem
from src.cm_common.enums import PromotionPosition
from src.cm_common.response import ApiResponse, success_response
from src.cm_gateway.auth.dependencies import get_current_user
from src.cm_gateway.user.models import User
from src.cm_promotion.application.schemas import (
    AdHocPromotionRequest,
    AttachPromotionRequest,
    AttachResponse,
    PlanItem,
    PromoteAdRequest,
    PromotionItem,
    PurchaseResponse,
    QuoteResponse,
)
from src.cm_promotion.domain.pricing import quote_points

router = APIRouter(tags=["promotions"])


@router.get("/promotion-plans")
async def list_plans(
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    items = [PlanItem.from_domain(p).model_dump() for p in services.catalog.list_active()]
    return success_response({"items": items}, request)


@router.get("/promotion-quote")
async def get_quote(
    request: Request,
    position: PromotionPosition = Query(..., description="rank1 or top10"),
    duration_days: int = Query(..., ge=1, le=365),
) -> ApiResponse:
    data = QuoteResponse(
        position=position.value,
        duration_days=duration_days,
        points=quote_points(position, duration_days),
    )
    return success_response(data.model_dump(), request)


@router.post("/ads/{ad_id}/promote")
async def promote_ad(
    ad_id: int,
    body: PromoteAdRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    promotion, ad = await services.promotions.purchase(current_user.id, ad_id, body.plan_id)
    now = services.clock()
    data = PurchaseResponse(
        promotion=PromotionItem.from_domain(promotion, now),
        ad=AdItem.from_domain(ad, now),
        points=services.points.get_balance(current_user.id),
    )
    resp = success_response(data.model_dump(), request)
    resp.message = "Ad promoted"
    return resp


@router.post("/ad-promotions", status_code=status.HTTP_201_CREATED)
async def purchase_ad_hoc(
    body: AdHocPromotionRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    promotion = await services.promotions.purchase_ad_hoc(
        current_user.id, body.position, body.duration_days, body.points
    )
    data = PurchaseResponse(
        promotion=PromotionItem.from_domain(promotion, services.clock()),
        ad=None,
        points=services.points.get_balance(current_user.id),
    )
    return success_response(data.model_dump(), request)


@router.get("/ad-promotions")
async def list_promotions(
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    now = services.clock()
    items = [
        PromotionItem.from_domain(p, now).model_dump()
        for p in services.promotions.list_promotions(current_user.id)
    ]
    return success_response({"items": items}, request)


@router.post("/ad-promotions/{promotion_id}/attach")
async def attach_promotion(
    promotion_id: int,
    body: AttachPromotionRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    promotion, ad = await services.promotions.attach(current_user.id, promotion_id, body.ad_id)
    now = services.clock()
    data = AttachResponse(
        promotion=PromotionItem.from_domain(promotion, now),
        ad=AdItem.from_domain(ad, now),
    )
    return success_response(data.model_dump(), request)


@router.delete("/ads/{ad_id}/promotion")
async def detach_promotion(
    ad_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    ad = await services.promotions.detach(current_user.id, ad_id)
    return success_response(AdItem.from_domain(ad, services.clock()).model_dump(), request)
