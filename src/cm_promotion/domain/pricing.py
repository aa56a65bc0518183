"""Promotion price quotes.

price = per-day base points for the tier * days, minus a duration discount,
rounded half-up. Integer arithmetic only.
"""

from src.cm_common.enums import PromotionPosition

DAILY_POINTS: dict[PromotionPosition, int] = {
    PromotionPosition.RANK1: 300,
    PromotionPosition.TOP10: 200,
}

# duration_days -> discount percent
DURATION_DISCOUNT_PCT: dict[int, int] = {
    3: 10,
    7: 20,
    15: 30,
    30: 50,
}


def quote_points(position: PromotionPosition | str, duration_days: int) -> int:
    """Quote the point cost of promoting an ad at `position` for `duration_days`.

    >>> quote_points("rank1", 7)
    1680
    """
    if duration_days < 1:
        raise ValueError(f"duration_days must be >= 1, got {duration_days}")
    base = DAILY_POINTS[PromotionPosition(position)] * duration_days
    discount_pct = DURATION_DISCOUNT_PCT.get(duration_days, 0)
    return (base * (100 - discount_pct) + 50) // 100
