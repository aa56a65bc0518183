"""Store Protocols for cm_promotion."""

from datetime import datetime
from typing import Protocol

from src.cm_promotion.domain.models import AdPromotion, PromotionPlan


class PlanCatalogProtocol(Protocol):
    def create(
        self,
        name: str,
        duration_days: int,
        position: str,
        points_cost: int,
        description: str = "",
        is_active: bool = True,
        sort_order: int = 0,
    ) -> PromotionPlan: ...

    def update(self, plan_id: int, **changes: object) -> PromotionPlan: ...

    def delete(self, plan_id: int) -> None: ...

    def get(self, plan_id: int) -> PromotionPlan | None: ...

    def list_all(self) -> list[PromotionPlan]: ...


class PromotionRepositoryProtocol(Protocol):
    def add(
        self,
        user_id: str,
        position: str,
        starts_at: datetime,
        expires_at: datetime,
        points_spent: int,
        transaction_id: int,
        ad_id: int | None = None,
        plan_id: int | None = None,
        attached_at: datetime | None = None,
    ) -> AdPromotion: ...

    def get(self, promotion_id: int) -> AdPromotion | None: ...

    def set_attached(
        self, promotion_id: int, ad_id: int, attached_at: datetime
    ) -> AdPromotion: ...

    def list_for_user(self, user_id: str) -> list[AdPromotion]: ...

    def references_plan(self, plan_id: int) -> bool: ...
