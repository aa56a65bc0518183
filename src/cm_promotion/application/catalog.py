"""PlanCatalogService — admin-managed list of purchasable promotion plans."""

import logging

from src.cm_common.enums import PromotionPosition
from src.cm_common.errors import PlanNotFoundError
from src.cm_promotion.domain.models import PromotionPlan
from src.cm_promotion.domain.pricing import quote_points
from src.cm_promotion.domain.repository import (
    PlanCatalogProtocol,
    PromotionRepositoryProtocol,
)

logger = logging.getLogger(__name__)

# (position, duration_days) seeded at startup, priced from the quote table
_DEFAULT_PLANS: list[tuple[PromotionPosition, int]] = [
    (PromotionPosition.RANK1, 1),
    (PromotionPosition.RANK1, 7),
    (PromotionPosition.TOP10, 3),
    (PromotionPosition.TOP10, 7),
    (PromotionPosition.TOP10, 30),
]

_POSITION_LABELS = {
    PromotionPosition.RANK1: "Top Position",
    PromotionPosition.TOP10: "Top 10",
}


class PlanCatalogService:
    def __init__(
        self,
        catalog: PlanCatalogProtocol,
        promotions: PromotionRepositoryProtocol,
    ) -> None:
        self._catalog = catalog
        self._promotions = promotions

    def create(
        self,
        name: str,
        duration_days: int,
        position: PromotionPosition,
        points_cost: int,
        description: str = "",
        is_active: bool = True,
        sort_order: int = 0,
    ) -> PromotionPlan:
        plan = self._catalog.create(
            name=name,
            duration_days=duration_days,
            position=PromotionPosition(position).value,
            points_cost=points_cost,
            description=description,
            is_active=is_active,
            sort_order=sort_order,
        )
        logger.info("Created promotion plan id=%d name=%r", plan.id, plan.name)
        return plan

    def update(self, plan_id: int, **changes: object) -> PromotionPlan:
        """Edit a plan. Past promotions keep their purchase-time snapshot."""
        if "position" in changes and changes["position"] is not None:
            changes["position"] = PromotionPosition(changes["position"]).value
        plan = self._catalog.update(plan_id, **changes)
        logger.info("Updated promotion plan id=%d fields=%s", plan_id, sorted(changes))
        return plan

    def delete(self, plan_id: int) -> PromotionPlan | None:
        """Remove a plan, or retire it when historical promotions reference it.

        Returns the retired plan, or None when it was removed outright.
        """
        self.get(plan_id)
        if self._promotions.references_plan(plan_id):
            logger.info("Retiring referenced promotion plan id=%d", plan_id)
            return self._catalog.update(plan_id, is_active=False)
        self._catalog.delete(plan_id)
        logger.info("Deleted promotion plan id=%d", plan_id)
        return None

    def get(self, plan_id: int) -> PromotionPlan:
        plan = self._catalog.get(plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)
        return plan

    def get_active(self, plan_id: int) -> PromotionPlan:
        """Resolve a plan for purchase; inactive plans are not purchasable."""
        plan = self.get(plan_id)
        if not plan.is_active:
            raise PlanNotFoundError(plan_id)
        return plan

    def list_active(self) -> list[PromotionPlan]:
        return [p for p in self._catalog.list_all() if p.is_active]

    def list_all(self) -> list[PromotionPlan]:
        return self._catalog.list_all()

    def seed_defaults(self) -> list[PromotionPlan]:
        """Populate an empty catalog with the standard plans."""
        if self._catalog.list_all():
            return []
        seeded = []
        for order, (position, days) in enumerate(_DEFAULT_PLANS):
            label = _POSITION_LABELS[position]
            unit = "day" if days == 1 else "days"
            seeded.append(
                self.create(
                    name=f"{label} - {days} {unit}",
                    duration_days=days,
                    position=position,
                    points_cost=quote_points(position, days),
                    description=f"Show your ad in the {label} slot for {days} {unit}.",
                    sort_order=order,
                )
            )
        return seeded
