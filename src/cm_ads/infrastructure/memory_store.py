"""In-memory ad records.

Reads return copies, so the only way to change an ad's verification flag or
promotion mirror is through the mutators below.
"""

import itertools
from dataclasses import replace
from datetime import datetime

from src.cm_ads.domain.models import Ad
from src.cm_common.datetime_utils import Clock, utc_now
from src.cm_common.errors import AdNotFoundError


class InMemoryAdRepository:
    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._ids = itertools.count(1)
        self._ads: dict[int, Ad] = {}

    def create(
        self,
        user_id: str,
        title: str,
        location: str,
        description: str = "",
        is_verified: bool = False,
    ) -> Ad:
        ad = Ad(
            id=next(self._ids),
            user_id=user_id,
            title=title,
            location=location,
            description=description,
            is_verified=is_verified,
            created_at=self._clock(),
        )
        self._ads[ad.id] = ad
        return replace(ad)

    def get(self, ad_id: int) -> Ad | None:
        ad = self._ads.get(ad_id)
        return replace(ad) if ad else None

    def list_by_location(self, location: str) -> list[Ad]:
        location = location.lower()
        return [
            replace(ad)
            for ad in self._ads.values()
            if ad.is_active and ad.location.lower() == location
        ]

    def list_by_owner(self, user_id: str) -> list[Ad]:
        return [replace(ad) for ad in self._ads.values() if ad.user_id == user_id]

    def set_verified(self, ad_id: int) -> Ad:
        return self._update(ad_id, is_verified=True)

    def set_promotion_mirror(
        self,
        ad_id: int,
        promotion_id: int | None,
        position: str | None,
        expires_at: datetime | None,
    ) -> Ad:
        return self._update(
            ad_id,
            promotion_id=promotion_id,
            promotion_position=position,
            promotion_expires_at=expires_at,
        )

    def _update(self, ad_id: int, **changes: object) -> Ad:
        ad = self._ads.get(ad_id)
        if ad is None:
            raise AdNotFoundError(ad_id)
        updated = replace(ad, **changes)  # type: ignore[arg-type]
        self._ads[ad_id] = updated
        return replace(updated)
