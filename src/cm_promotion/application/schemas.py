"""Pydantic schemas for cm_promotion API."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.cm_ads.application.schemas import AdItem
from src.cm_common.enums import PromotionPosition
from src.cm_promotion.domain.models import AdPromotion, PromotionPlan

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PromoteAdRequest(BaseModel):
    plan_id: int


class AdHocPromotionRequest(BaseModel):
    position: PromotionPosition
    duration_days: int = Field(..., ge=1, le=365)
    points: int = Field(..., gt=0)


class AttachPromotionRequest(BaseModel):
    ad_id: int


class CreatePlanRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    duration_days: int = Field(..., ge=1, le=365)
    position: PromotionPosition
    points_cost: int = Field(..., gt=0)
    description: str = Field("", max_length=500)
    is_active: bool = True
    sort_order: int = 0


class UpdatePlanRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    duration_days: int | None = Field(None, ge=1, le=365)
    position: PromotionPosition | None = None
    points_cost: int | None = Field(None, gt=0)
    description: str | None = Field(None, max_length=500)
    is_active: bool | None = None
    sort_order: int | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PlanItem(BaseModel):
    id: int
    name: str
    duration_days: int
    position: str
    points_cost: int
    description: str
    is_active: bool
    sort_order: int

    @classmethod
    def from_domain(cls, plan: PromotionPlan) -> "PlanItem":
        return cls(
            id=plan.id,
            name=plan.name,
            duration_days=plan.duration_days,
            position=plan.position,
            points_cost=plan.points_cost,
            description=plan.description,
            is_active=plan.is_active,
            sort_order=plan.sort_order,
        )


class PromotionItem(BaseModel):
    id: int
    user_id: str
    ad_id: int | None
    plan_id: int | None
    position: str
    starts_at: str
    expires_at: str
    points_spent: int
    transaction_id: int
    is_active: bool

    @classmethod
    def from_domain(cls, promotion: AdPromotion, now: datetime) -> "PromotionItem":
        return cls(
            id=promotion.id,
            user_id=promotion.user_id,
            ad_id=promotion.ad_id,
            plan_id=promotion.plan_id,
            position=promotion.position,
            starts_at=promotion.starts_at.isoformat(),
            expires_at=promotion.expires_at.isoformat(),
            points_spent=promotion.points_spent,
            transaction_id=promotion.transaction_id,
            is_active=promotion.is_active(now),
        )


class PurchaseResponse(BaseModel):
    promotion: PromotionItem
    ad: AdItem | None
    points: int  # balance after the purchase


class AttachResponse(BaseModel):
    promotion: PromotionItem
    ad: AdItem


class QuoteResponse(BaseModel):
    position: str
    duration_days: int
    points: int
