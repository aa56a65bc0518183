"""Pydantic schemas for cm_ads API."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.cm_ads.domain.models import Ad


class CreateAdRequest(BaseModel):
    title: str = Field(..., min_length=3, max_length=120)
    location: str = Field(..., min_length=2, max_length=80)
    description: str = Field("", max_length=5000)


class AdItem(BaseModel):
    id: int
    user_id: str
    title: str
    location: str
    description: str
    is_active: bool
    is_verified: bool
    is_promoted: bool  # evaluated against the clock at response time
    promotion_id: int | None
    promotion_position: str | None
    promotion_expires_at: str | None
    created_at: str

    @classmethod
    def from_domain(cls, ad: Ad, now: datetime) -> "AdItem":
        return cls(
            id=ad.id,
            user_id=ad.user_id,
            title=ad.title,
            location=ad.location,
            description=ad.description,
            is_active=ad.is_active,
            is_verified=ad.is_verified,
            is_promoted=ad.has_live_promotion(now),
            promotion_id=ad.promotion_id,
            promotion_position=ad.promotion_position,
            promotion_expires_at=(
                ad.promotion_expires_at.isoformat() if ad.promotion_expires_at else None
            ),
            created_at=ad.created_at.isoformat(),
        )


class AdListResponse(BaseModel):
    items: list[AdItem]
