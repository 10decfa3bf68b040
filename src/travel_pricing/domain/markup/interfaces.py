# 📈 travel_pricing/domain/markup/interfaces.py
"""
🧩 interfaces.py — DTO резолвера маркапу.

🔹 `MarkupResolution` — ефективний маркап (відсоток + фіксована частина) з auditable id правила.
🔹 `ResolutionOutcome` — дискримінований результат: `ok=True, value` або `ok=False, kind`.
🔹 `MarkupSource` — ланка ланцюжка, що спрацювала.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, unique
from typing import Optional

# 🧩 Внутрішні модулі проєкту
from travel_pricing.domain.rules.entities import MarkupType
from travel_pricing.errors import PricingError


@unique
class MarkupSource(str, Enum):
    """🔗 Ланка ланцюжка резолюції."""
    ENHANCED_SLAB = "enhanced_slab"
    ENHANCED_BASE = "enhanced_base"
    COUNTRY = "country"
    REGIONAL = "regional"


@dataclass(frozen=True)
class MarkupResolution:
    """
    📈 Ефективний маркап для однієї суми.

    percentage — у процентних пунктах (10 → 10 %), fixed_amount — у валюті постачальника.
    """
    percentage: Decimal
    fixed_amount: Decimal
    applied_rule_id: str
    markup_type: MarkupType
    source: MarkupSource
    tier_multiplier: Decimal = Decimal("1")
    seasonal_adjustment: Decimal = Decimal("0")
    clamped: bool = False


@dataclass(frozen=True)
class ResolutionOutcome:
    """🔀 Результат `try_resolve_markup`: значення або стабільний код помилки."""
    ok: bool
    value: Optional[MarkupResolution] = None
    kind: Optional[str] = None
    error: Optional[PricingError] = None

    @classmethod
    def success(cls, value: MarkupResolution) -> "ResolutionOutcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: PricingError) -> "ResolutionOutcome":
        return cls(ok=False, kind=error.kind, error=error)

    def unwrap(self) -> MarkupResolution:
        """Повертає значення або піднімає збережену помилку."""
        if self.ok and self.value is not None:
            return self.value
        if self.error is not None:
            raise self.error
        raise PricingError(f"Markup resolution failed: {self.kind}")
