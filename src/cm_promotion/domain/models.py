"""Domain models for cm_promotion — pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PromotionPlan:
    id: int
    name: str
    duration_days: int
    position: str        # PromotionPosition value
    points_cost: int
    description: str = ""
    is_active: bool = True
    sort_order: int = 0


@dataclass
class AdPromotion:
    """A purchased promotion. Position, cost and expiry are snapshots taken at
    purchase time, so later plan edits never rewrite history."""

    id: int
    user_id: str
    position: str
    starts_at: datetime
    expires_at: datetime
    points_spent: int
    transaction_id: int
    ad_id: int | None = None      # None while banked (ad-hoc, not yet attached)
    plan_id: int | None = None    # None for ad-hoc promotions
    attached_at: datetime | None = None

    def is_active(self, now: datetime) -> bool:
        return now < self.expires_at
