"""Ranking policy for ad listings.

Order (highest first):
  1. live promotion (promotion_id set and promotion_expires_at > now)
  2. among live promotions, tier: rank1 before top10
  3. created_at, newest first

Expiry is evaluated here on every call. A stale mirror (expired promotion still
recorded on the ad) ranks exactly like an unpromoted ad.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol, TypeVar

from src.cm_common.enums import PromotionPosition

_TIER_ORDER = {p.value: i for i, p in enumerate(PromotionPosition)}


class Rankable(Protocol):
    @property
    def created_at(self) -> datetime: ...

    @property
    def promotion_id(self) -> int | None: ...

    @property
    def promotion_position(self) -> str | None: ...

    @property
    def promotion_expires_at(self) -> datetime | None: ...


T = TypeVar("T", bound=Rankable)


def is_promoted(ad: Rankable, now: datetime) -> bool:
    return (
        ad.promotion_id is not None
        and ad.promotion_expires_at is not None
        and ad.promotion_expires_at > now
    )


def rank_ads(ads: Iterable[T], now: datetime) -> list[T]:
    def key(ad: T) -> tuple[int, int, float]:
        newest_first = -ad.created_at.timestamp()
        if not is_promoted(ad, now):
            return (1, 0, newest_first)
        tier = _TIER_ORDER.get(ad.promotion_position or "", len(_TIER_ORDER))
        return (0, tier, newest_first)

    return sorted(ads, key=key)
