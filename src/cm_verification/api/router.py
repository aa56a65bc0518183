"""Verification REST API — mobile OTP and password reset.

The password-reset endpoints live under /auth but are served from here,
next to the engine that backs them.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.bootstrap import Services, get_services
from src.cm_common.response import ApiResponse, success_response
from src.cm_gateway.auth.dependencies import get_current_user
from src.cm_gateway.user.models import User
from src.cm_verification.application.schemas import (
    CompleteResetRequest,
    MessageResponse,
    PasswordResetRequest,
    SendOtpRequest,
    VerifyOtpRequest,
    VerifyResetOtpRequest,
)

router = APIRouter(tags=["verification"])

_RESET_REQUESTED = "If an account exists for that email, a reset code has been sent."


@router.post("/verification/send-otp")
async def send_otp(
    body: SendOtpRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    data = await services.mobile_verification.send_code(current_user.id, body.mobile_number)
    resp = success_response(data.model_dump(), request)
    resp.message = "Verification code sent" if data.delivered else "Verification code issued"
    return resp


@router.post("/verification/verify-otp")
async def verify_otp(
    body: VerifyOtpRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    data = await services.mobile_verification.verify_code(
        current_user.id, body.mobile_number, body.otp
    )
    resp = success_response(data.model_dump(), request)
    resp.message = "Mobile number verified"
    return resp


@router.post("/auth/request-password-reset")
async def request_password_reset(
    body: PasswordResetRequest,
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    await services.password_reset.request_reset(body.email)
    return success_response(MessageResponse(message=_RESET_REQUESTED).model_dump(), request)


@router.post("/auth/verify-reset-otp")
async def verify_reset_otp(
    body: VerifyResetOtpRequest,
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    data = await services.password_reset.verify_reset_code(body.email, body.otp)
    return success_response(data.model_dump(), request)


@router.post("/auth/reset-password")
async def reset_password(
    body: CompleteResetRequest,
    services: Annotated[Services, Depends(get_services)],
    request: Request,
) -> ApiResponse:
    await services.password_reset.complete_reset(body.email, body.reset_token, body.password)
    data = MessageResponse(message="Password has been reset. Please log in.")
    return success_response(data.model_dump(), request)
