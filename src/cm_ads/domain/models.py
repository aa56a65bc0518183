"""Ad record as seen by the promotion engine."""

from dataclasses import dataclass
from datetime import datetime

from src.cm_promotion.domain.ranking import is_promoted


@dataclass
class Ad:
    id: int
    user_id: str
    title: str
    location: str
    created_at: datetime
    description: str = ""
    is_active: bool = True
    is_verified: bool = False
    # Promotion mirror: written only by PromotionLifecycleService
    promotion_id: int | None = None
    promotion_position: str | None = None
    promotion_expires_at: datetime | None = None

    def has_live_promotion(self, now: datetime) -> bool:
        return is_promoted(self, now)
