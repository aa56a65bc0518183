"""In-memory plan catalog and promotion records."""

import itertools
from dataclasses import replace
from datetime import datetime

from src.cm_common.errors import PlanNotFoundError, PromotionNotFoundError
from src.cm_promotion.domain.models import AdPromotion, PromotionPlan


class InMemoryPlanCatalog:
    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._plans: dict[int, PromotionPlan] = {}

    def create(
        self,
        name: str,
        duration_days: int,
        position: str,
        points_cost: int,
        description: str = "",
        is_active: bool = True,
        sort_order: int = 0,
    ) -> PromotionPlan:
        plan = PromotionPlan(
            id=next(self._ids),
            name=name,
            duration_days=duration_days,
            position=position,
            points_cost=points_cost,
            description=description,
            is_active=is_active,
            sort_order=sort_order,
        )
        self._plans[plan.id] = plan
        return replace(plan)

    def update(self, plan_id: int, **changes: object) -> PromotionPlan:
        plan = self._plans.get(plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)
        updated = replace(plan, **changes)  # type: ignore[arg-type]
        self._plans[plan_id] = updated
        return replace(updated)

    def delete(self, plan_id: int) -> None:
        if self._plans.pop(plan_id, None) is None:
            raise PlanNotFoundError(plan_id)

    def get(self, plan_id: int) -> PromotionPlan | None:
        plan = self._plans.get(plan_id)
        return replace(plan) if plan else None

    def list_all(self) -> list[PromotionPlan]:
        return [
            replace(p)
            for p in sorted(self._plans.values(), key=lambda p: (p.sort_order, p.id))
        ]


class InMemoryPromotionRepository:
    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._promotions: dict[int, AdPromotion] = {}

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
    ) -> AdPromotion:
        promotion = AdPromotion(
            id=next(self._ids),
            user_id=user_id,
            position=position,
            starts_at=starts_at,
            expires_at=expires_at,
            points_spent=points_spent,
            transaction_id=transaction_id,
            ad_id=ad_id,
            plan_id=plan_id,
            attached_at=attached_at,
        )
        self._promotions[promotion.id] = promotion
        return replace(promotion)

    def get(self, promotion_id: int) -> AdPromotion | None:
        promotion = self._promotions.get(promotion_id)
        return replace(promotion) if promotion else None

    def set_attached(
        self, promotion_id: int, ad_id: int, attached_at: datetime
    ) -> AdPromotion:
        promotion = self._promotions.get(promotion_id)
        if promotion is None:
            raise PromotionNotFoundError(promotion_id)
        updated = replace(promotion, ad_id=ad_id, attached_at=attached_at)
        self._promotions[promotion_id] = updated
        return replace(updated)

    def list_for_user(self, user_id: str) -> list[AdPromotion]:
        """Newest first."""
        return [
            replace(p)
            for p in sorted(self._promotions.values(), key=lambda p: p.id, reverse=True)
            if p.user_id == user_id
        ]

    def references_plan(self, plan_id: int) -> bool:
        return any(p.plan_id == plan_id for p in self._promotions.values())
