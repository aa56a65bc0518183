"""Pydantic schemas for cm_verification API."""

from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.cm_gateway.user.schemas import check_password_complexity

OtpCode = Annotated[str, Field(min_length=4, max_length=10, pattern=r"^\d+$")]

# ---------------------------------------------------------------------------
# Mobile verification
# ---------------------------------------------------------------------------


class SendOtpRequest(BaseModel):
    mobile_number: str = Field(..., max_length=20)


class SendOtpResponse(BaseModel):
    mobile_number: str          # masked
    expires_in: int             # seconds
    delivered: bool
    dev_code: str | None = None  # only outside production with EXPOSE_DEV_CODES


class VerifyOtpRequest(BaseModel):
    mobile_number: str = Field(..., max_length=20)
    otp: OtpCode


class VerifyOtpResponse(BaseModel):
    mobile_number: str
    mobile_verified: bool
    ads_verified: int
    ads_failed: int


# ---------------------------------------------------------------------------
# Password reset
# ---------------------------------------------------------------------------


class PasswordResetRequest(BaseModel):
    email: EmailStr


class VerifyResetOtpRequest(BaseModel):
    email: EmailStr
    otp: OtpCode


class ResetTokenResponse(BaseModel):
    reset_token: str
    expires_in: int


class CompleteResetRequest(BaseModel):
    email: EmailStr
    reset_token: str = Field(..., min_length=16, max_length=128)
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        return check_password_complexity(v)


class MessageResponse(BaseModel):
    message: str
