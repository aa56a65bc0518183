"""Unit tests for promotion price quotes."""

import pytest

from src.cm_common.enums import PromotionPosition
from src.cm_promotion.domain.pricing import quote_points


@pytest.mark.parametrize(
    ("position", "days", "expected"),
    [
        (PromotionPosition.RANK1, 1, 300),
        (PromotionPosition.RANK1, 7, 1680),     # 2100 - 20%
        (PromotionPosition.TOP10, 3, 540),      # 600 - 10%
        (PromotionPosition.TOP10, 7, 1120),
        (PromotionPosition.TOP10, 15, 2100),    # 3000 - 30%
        (PromotionPosition.TOP10, 30, 3000),    # 6000 - 50%
        (PromotionPosition.TOP10, 2, 400),      # no discount tier
    ],
)
def test_quote_table(position: PromotionPosition, days: int, expected: int) -> None:
    assert quote_points(position, days) == expected


def test_accepts_raw_position_value() -> None:
    assert quote_points("rank1", 7) == quote_points(PromotionPosition.RANK1, 7)


def test_rank1_costs_more_than_top10() -> None:
    assert quote_points("rank1", 7) > quote_points("top10", 7)


def test_zero_days_rejected() -> None:
    with pytest.raises(ValueError):
        quote_points("top10", 0)


def test_unknown_position_rejected() -> None:
    with pytest.raises(ValueError):
        quote_points("featured", 3)
