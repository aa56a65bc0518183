"""Auth API router: register, login, refresh, me.

All endpoints return ApiResponse. request_id is read from request.state
(injected by RequestLogMiddleware).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from config.settings import settings
from src.bootstrap import Services, get_services
from src.cm_common.response import ApiResponse, success_response
from src.cm_gateway.auth.dependencies import get_current_user
from src.cm_gateway.user.models import User
from src.cm_gateway.user.schemas import (
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
    UserInfo,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="User registration",
)
async def register(
    request: Request,
    body: RegisterRequest,
    services: Annotated[Services, Depends(get_services)],
) -> ApiResponse:
    user = services.user_service.register(
        body.username, body.email, body.password, body.mobile_number
    )
    data = RegisterResponse(
        user_id=user.id,
        username=user.username,
        email=user.email,
        created_at=user.created_at.isoformat(),
    )
    resp = success_response(data.model_dump(), request)
    resp.message = "User registered successfully"
    return resp


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="User login",
)
async def login(
    request: Request,
    body: LoginRequest,
    services: Annotated[Services, Depends(get_services)],
) -> ApiResponse:
    user, access_token, refresh_token = services.user_service.login(
        body.username, body.password
    )
    data = LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="Bearer",
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        user=UserInfo.from_domain(user),
    )
    resp = success_response(data.model_dump(), request)
    resp.message = "Login successful"
    return resp


@router.post(
    "/refresh",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Refresh access token",
)
async def refresh_token(
    request: Request,
    body: RefreshRequest,
    services: Annotated[Services, Depends(get_services)],
) -> ApiResponse:
    data = RefreshResponse(
        access_token=services.user_service.refresh(body.refresh_token),
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
    )
    resp = success_response(data.model_dump(), request)
    resp.message = "Token refreshed"
    return resp


@router.get("/me", response_model=ApiResponse, summary="Current user profile")
async def me(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
) -> ApiResponse:
    data = ProfileResponse(
        **UserInfo.from_domain(current_user).model_dump(),
        points=services.points.get_balance(current_user.id),
    )
    return success_response(data.model_dump(), request)
