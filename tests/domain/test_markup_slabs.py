"""
🧪 test_markup_slabs.py — валідація та вибір слебів маркапу.
"""

from decimal import Decimal

import pytest

from travel_pricing.domain.rules.entities import MarkupSlabRule
from travel_pricing.domain.rules.slabs import select_slab, validate_slabs
from travel_pricing.errors import InvalidSlabConfiguration


def _slab(lo, hi, pct, fixed=None):
    return MarkupSlabRule(min_amount=lo, max_amount=hi, additional_percentage=pct, fixed_amount=fixed)


SLABS = (
    _slab(1000, 5000, 8),
    _slab(0, 1000, 12),
    _slab(5000, None, 5),
)


def test_validate_sorts_unordered_input():
    ordered = validate_slabs(SLABS)
    assert [s.min_amount for s in ordered] == [Decimal("0"), Decimal("1000"), Decimal("5000")]


@pytest.mark.parametrize(
    "amount, expected_pct",
    [
        ("0", "12"),
        ("999.99", "12"),
        ("1000", "8"),          # 🎯 Верхня межа належить наступному слебу
        ("4999.99", "8"),
        ("5000", "5"),
        ("1000000", "5"),
    ],
)
def test_select_slab_half_open_ranges(amount, expected_pct):
    slab = select_slab(Decimal(amount), validate_slabs(SLABS))
    assert slab is not None
    assert slab.additional_percentage == Decimal(expected_pct)


def test_last_slab_is_unbounded_even_with_max():
    ordered = validate_slabs([_slab(0, 100, 10), _slab(100, 200, 7)])
    assert select_slab(Decimal("250"), ordered).additional_percentage == Decimal("7")


def test_amount_below_first_slab_has_no_match():
    ordered = validate_slabs([_slab(100, 200, 10), _slab(200, None, 7)])
    assert select_slab(Decimal("50"), ordered) is None


def test_empty_slab_list():
    assert validate_slabs([]) == ()
    assert select_slab(Decimal("10"), ()) is None


@pytest.mark.parametrize(
    "slabs",
    [
        [_slab(0, 1000, 10), _slab(900, None, 5)],             # 🔀 перетин
        [_slab(0, 1000, 10), _slab(1200, None, 5)],            # 🕳️ розрив
        [_slab(0, None, 10), _slab(1000, None, 5)],            # ♾️ безмежний не останній
        [_slab(500, 500, 10)],                                 # 📏 порожній діапазон
        [_slab(-10, 100, 10)],                                 # ➖ відʼємний початок
    ],
)
def test_invalid_slabs_raise(slabs):
    with pytest.raises(InvalidSlabConfiguration) as exc_info:
        validate_slabs(slabs, country_code="TH", rule_id="th-enhanced")
    assert exc_info.value.kind == "invalid_slab_configuration"
    assert exc_info.value.to_log_extra()["rule_id"] == "th-enhanced"
