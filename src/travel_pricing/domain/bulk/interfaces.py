# 🧰 travel_pricing/domain/bulk/interfaces.py
"""
🧩 interfaces.py — Команди та результати масових операцій над правилами маркапу.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, unique
from typing import Optional, Tuple

from travel_pricing.domain.currency.rounding import to_decimal
from travel_pricing.domain.rules.entities import MarkupType
from travel_pricing.errors import CountryOperationError


@unique
class BulkOperationType(str, Enum):
    """🧰 set — перезапис (ідемпотентно), adjust — зміна поточного (накопичується), copy — реплікація."""
    SET = "set"
    ADJUST = "adjust"
    COPY = "copy"


@dataclass(frozen=True)
class BulkPricingOperation:
    """
    🧰 Разова команда для адмінки: створити → застосувати → забути.

    adjustment_type для `set` — тип маркапу, що записується;
    для `adjust` — percentage (множимо) або fixed (додаємо).
    `copy` бере зразок з `source_country` або з регіонального шаблону `template_id`.
    """
    operation: BulkOperationType
    target_countries: Tuple[str, ...]
    adjustment_value: Optional[Decimal] = None
    adjustment_type: MarkupType = MarkupType.PERCENTAGE
    source_country: Optional[str] = None
    template_id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "operation", BulkOperationType(self.operation))
        object.__setattr__(self, "adjustment_type", MarkupType(self.adjustment_type))
        object.__setattr__(
            self, "target_countries", tuple(str(c).strip().upper() for c in self.target_countries)
        )
        if self.adjustment_value is not None:
            object.__setattr__(self, "adjustment_value", to_decimal(self.adjustment_value))
        if self.source_country:
            object.__setattr__(self, "source_country", self.source_country.strip().upper())


@dataclass(frozen=True)
class CountryRuleUpdate:
    """✅ Що змінилося для однієї країни."""
    country_code: str
    rule_id: str
    previous_markup: Optional[Decimal]
    new_markup: Decimal
    markup_type: MarkupType
    created: bool = False
    enhanced_rule_id: Optional[str] = None
    enhanced_deactivated: bool = False                       # 📴 Розширене правило вимкнено, діє правило країни


@dataclass(frozen=True)
class BulkOperationResult:
    """📋 Результат пакета: успішні оновлення та помилки по країнах."""
    operation: BulkOperationType
    updated: Tuple[CountryRuleUpdate, ...] = ()
    errors: Tuple[CountryOperationError, ...] = ()

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def updated_countries(self) -> Tuple[str, ...]:
        return tuple(u.country_code for u in self.updated)
