"""cm_ads REST API — post, fetch and list ads."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from src.bootstrap import Services, get_services
from src.cm_ads.application.schemas import AdItem, AdListResponse, CreateAdRequest
from src.cm_common.response import ApiResponse, success_response
from src.cm_gateway.auth.dependencies import get_current_user
from src.cm_gateway.user.models import User

router = APIRouter(tags=["ads"])


@router.post("/ads", status_code=status.HTTP_201_CREATED)
async def create_ad(
    body: CreateAdRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    ad = services.ad_service.create(
        current_user.id, body.title, body.location, body.description
    )
    return success_response(AdItem.from_domain(ad, services.clock()).model_dump(), request)


@router.get("/ads/location/{location}")
async def list_by_location(
    location: str,
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    now = services.clock()
    data = AdListResponse(
        items=[AdItem.from_domain(ad, now) for ad in services.ad_service.list_location(location)]
    )
    return success_response(data.model_dump(), request)


@router.get("/ads/{ad_id}")
async def get_ad(
    ad_id: int,
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    ad = services.ad_service.get(ad_id)
    return success_response(AdItem.from_domain(ad, services.clock()).model_dump(), request)


@router.get("/my-ads")
async def list_my_ads(
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    now = services.clock()
    data = AdListResponse(
        items=[AdItem.from_domain(ad, now) for ad in services.ad_service.list_mine(current_user.id)]
    )
    return success_response(data.model_dump(), request)
