# 🪜 travel_pricing/domain/rules/slabs.py
"""
🪜 Валідація та вибір слебів маркапу.

🔹 Вхідний список слебів може бути несортованим — сортуємо за `min_amount`.
🔹 Діапазони напіввідкриті [min, max): межа належить наступному слебу.
🔹 Перетин або розрив між сусідами → `InvalidSlabConfiguration`.
🔹 Останній слеб не має верхньої межі (max_amount ігнорується).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from travel_pricing.domain.rules.entities import MarkupSlabRule
from travel_pricing.errors import InvalidSlabConfiguration
from travel_pricing.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.rules.slabs")


def validate_slabs(
    slabs: Iterable[MarkupSlabRule],
    *,
    country_code: Optional[str] = None,
    rule_id: Optional[str] = None,
) -> Tuple[MarkupSlabRule, ...]:
    """Повертає слеби, відсортовані за `min_amount`, або піднімає InvalidSlabConfiguration."""
    ordered = tuple(sorted(slabs, key=lambda slab: slab.min_amount))

    def _fail(message: str) -> InvalidSlabConfiguration:
        logger.error("❌ Invalid slabs | country=%s rule=%s %s", country_code, rule_id, message)
        return InvalidSlabConfiguration(message, country_code=country_code, rule_id=rule_id)

    for index, slab in enumerate(ordered):
        is_last = index == len(ordered) - 1
        if slab.min_amount < 0:
            raise _fail(f"slab #{index} starts below zero ({slab.min_amount})")
        if slab.max_amount is None:
            if not is_last:
                raise _fail(f"unbounded slab #{index} overlaps slab starting at {ordered[index + 1].min_amount}")
            continue
        if slab.max_amount <= slab.min_amount:
            raise _fail(f"slab #{index} has empty range [{slab.min_amount}, {slab.max_amount})")
        if is_last:
            continue
        next_min = ordered[index + 1].min_amount
        if slab.max_amount > next_min:
            raise _fail(f"slab #{index} [{slab.min_amount}, {slab.max_amount}) overlaps next slab at {next_min}")
        if slab.max_amount < next_min:
            raise _fail(f"gap between {slab.max_amount} and {next_min}")
    return ordered


def select_slab(amount: Decimal, ordered_slabs: Tuple[MarkupSlabRule, ...]) -> Optional[MarkupSlabRule]:
    """Перший слеб, що містить суму; None — якщо сума нижча за перший слеб (або слебів немає)."""
    last_index = len(ordered_slabs) - 1
    for index, slab in enumerate(ordered_slabs):
        if amount < slab.min_amount:
            continue
        if index == last_index or slab.max_amount is None or amount < slab.max_amount:
            return slab
    return None
