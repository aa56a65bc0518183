"""PromotionLifecycleService — purchase, attach, detach.

This is the only writer of an ad's promotion mirror fields
(promotion_id / promotion_position / promotion_expires_at).

Locking: each operation on an ad holds that ad's lock for its whole
check-debit-mirror sequence; the account lock is taken inside
PointsService.spend. Locks are always acquired ad → account, never the
reverse.
"""

import logging
from datetime import timedelta

from src.cm_ads.domain.models import Ad
from src.cm_ads.infrastructure.memory_store import InMemoryAdRepository
from src.cm_common.datetime_utils import Clock, utc_now
from src.cm_common.enums import PromotionPosition
from src.cm_common.errors import (
    AccountNotFoundError,
    AdAlreadyPromotedError,
    AdNotFoundError,
    ForbiddenError,
    NotOwnerError,
    PromotionAlreadyAttachedError,
    PromotionExpiredError,
    PromotionNotFoundError,
    UnderpricedPromotionError,
    VerificationRequiredError,
)
from src.cm_common.locks import KeyedLocks
from src.cm_gateway.user.repository import InMemoryUserRepository
from src.cm_points.application.service import PointsService
from src.cm_promotion.application.catalog import PlanCatalogService
from src.cm_promotion.domain.models import AdPromotion
from src.cm_promotion.domain.pricing import quote_points
from src.cm_promotion.domain.repository import PromotionRepositoryProtocol

logger = logging.getLogger(__name__)


class PromotionLifecycleService:
    def __init__(
        self,
        points: PointsService,
        catalog: PlanCatalogService,
        promotions: PromotionRepositoryProtocol,
        ads: InMemoryAdRepository,
        users: InMemoryUserRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._points = points
        self._catalog = catalog
        self._promotions = promotions
        self._ads = ads
        self._users = users
        self._clock = clock
        self._ad_locks = KeyedLocks()

    # ------------------------------------------------------------------
    # Purchase
    # ------------------------------------------------------------------

    async def purchase(
        self, user_id: str, ad_id: int, plan_id: int
    ) -> tuple[AdPromotion, Ad]:
        """Buy a catalog plan for one of the caller's ads and attach it immediately."""
        async with self._ad_locks.get(str(ad_id)):
            ad = self._require_owned_ad(user_id, ad_id)
            self._require_verified(user_id)
            plan = self._catalog.get_active(plan_id)

            now = self._clock()
            if ad.has_live_promotion(now):
                raise AdAlreadyPromotedError(ad_id)
            expires_at = now + timedelta(days=plan.duration_days)

            tx = await self._points.spend(
                user_id,
                plan.points_cost,
                f"Promotion '{plan.name}' for ad #{ad_id}",
            )
            promotion = self._promotions.add(
                user_id=user_id,
                position=plan.position,
                starts_at=now,
                expires_at=expires_at,
                points_spent=plan.points_cost,
                transaction_id=tx.id,
                ad_id=ad_id,
                plan_id=plan.id,
                attached_at=now,
            )
            ad = self._write_mirror(ad_id, promotion)

        logger.info(
            "Promotion purchased: user=%s ad=%d plan=%d promotion=%d expires=%s",
            user_id, ad_id, plan.id, promotion.id, expires_at.isoformat(),
        )
        return promotion, ad

    async def purchase_ad_hoc(
        self,
        user_id: str,
        position: PromotionPosition,
        duration_days: int,
        points: int,
    ) -> AdPromotion:
        """Buy a custom promotion without an ad; attach it later with attach()."""
        self._require_verified(user_id)
        position = PromotionPosition(position)
        quoted = quote_points(position, duration_days)
        if points < quoted:
            raise UnderpricedPromotionError(offered=points, quoted=quoted)

        now = self._clock()
        tx = await self._points.spend(
            user_id,
            points,
            f"{position.value} promotion for {duration_days} days",
        )
        promotion = self._promotions.add(
            user_id=user_id,
            position=position.value,
            starts_at=now,
            expires_at=now + timedelta(days=duration_days),
            points_spent=points,
            transaction_id=tx.id,
        )
        logger.info(
            "Ad-hoc promotion purchased: user=%s promotion=%d position=%s days=%d",
            user_id, promotion.id, position.value, duration_days,
        )
        return promotion

    # ------------------------------------------------------------------
    # Attach / detach
    # ------------------------------------------------------------------

    async def attach(
        self, user_id: str, promotion_id: int, ad_id: int
    ) -> tuple[AdPromotion, Ad]:
        """Apply a banked promotion to one of the caller's ads."""
        async with self._ad_locks.get(str(ad_id)):
            promotion = self._promotions.get(promotion_id)
            if promotion is None:
                raise PromotionNotFoundError(promotion_id)
            if promotion.user_id != user_id:
                raise NotOwnerError(promotion_id)
            if promotion.ad_id is not None:
                raise PromotionAlreadyAttachedError(promotion_id, promotion.ad_id)

            ad = self._require_owned_ad(user_id, ad_id)
            now = self._clock()
            if not promotion.is_active(now):
                raise PromotionExpiredError(promotion_id)
            if ad.has_live_promotion(now):
                raise AdAlreadyPromotedError(ad_id)

            promotion = self._promotions.set_attached(promotion_id, ad_id, now)
            ad = self._write_mirror(ad_id, promotion)

        logger.info("Promotion attached: promotion=%d ad=%d", promotion_id, ad_id)
        return promotion, ad

    async def detach(self, user_id: str, ad_id: int) -> Ad:
        """Clear the ad's mirror fields. The promotion record is kept as history."""
        async with self._ad_locks.get(str(ad_id)):
            ad = self._require_owned_ad(user_id, ad_id)
            if ad.promotion_id is None:
                return ad
            cleared = self._ads.set_promotion_mirror(ad_id, None, None, None)

        logger.info("Promotion detached: promotion=%d ad=%d", ad.promotion_id, ad_id)
        return cleared

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_promotions(self, user_id: str) -> list[AdPromotion]:
        return self._promotions.list_for_user(user_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _write_mirror(self, ad_id: int, promotion: AdPromotion) -> Ad:
        return self._ads.set_promotion_mirror(
            ad_id, promotion.id, promotion.position, promotion.expires_at
        )

    def _require_owned_ad(self, user_id: str, ad_id: int) -> Ad:
        ad = self._ads.get(ad_id)
        if ad is None:
            raise AdNotFoundError(ad_id)
        if ad.user_id != user_id:
            raise ForbiddenError(f"Ad {ad_id} belongs to another account")
        return ad

    def _require_verified(self, user_id: str) -> None:
        user = self._users.get(user_id)
        if user is None:
            raise AccountNotFoundError(user_id)
        if not user.mobile_verified:
            raise VerificationRequiredError()
