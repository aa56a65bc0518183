"""AdService — posting and listing classified ads."""

import logging

from src.cm_ads.domain.models import Ad
from src.cm_ads.infrastructure.memory_store import InMemoryAdRepository
from src.cm_common.datetime_utils import Clock, utc_now
from src.cm_common.errors import AccountNotFoundError, AdNotFoundError
from src.cm_gateway.user.repository import InMemoryUserRepository
from src.cm_promotion.domain.ranking import rank_ads

logger = logging.getLogger(__name__)


class AdService:
    def __init__(
        self,
        ads: InMemoryAdRepository,
        users: InMemoryUserRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._ads = ads
        self._users = users
        self._clock = clock

    def create(self, user_id: str, title: str, location: str, description: str = "") -> Ad:
        """Post an ad. It starts verified when the owner's mobile number already is."""
        user = self._users.get(user_id)
        if user is None:
            raise AccountNotFoundError(user_id)
        ad = self._ads.create(
            user_id=user_id,
            title=title,
            location=location,
            description=description,
            is_verified=user.mobile_verified,
        )
        logger.info("Ad created: ad=%d user=%s verified=%s", ad.id, user_id, ad.is_verified)
        return ad

    def get(self, ad_id: int) -> Ad:
        ad = self._ads.get(ad_id)
        if ad is None:
            raise AdNotFoundError(ad_id)
        return ad

    def list_mine(self, user_id: str) -> list[Ad]:
        return sorted(self._ads.list_by_owner(user_id), key=lambda a: a.created_at, reverse=True)

    def list_location(self, location: str) -> list[Ad]:
        return rank_ads(self._ads.list_by_location(location), self._clock())
