# 📦 travel_pricing/domain/pricing/interfaces.py
"""
🧩 interfaces.py — Контракти та DTO побудови цінової розбивки.

🔹 `LineItem` — позиція пропозиції (собівартість постачальника + країна + послуга).
🔹 `PartyComposition` — склад групи (дорослі / діти / немовлята).
🔹 `BreakdownOptions` — режим податку та розподілу на осіб.
🔹 `PricingBreakdown` — повний аудитний результат; `QuoteSummary` — агрегат кількох позицій.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum, unique
from typing import Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from travel_pricing.domain.currency.interfaces import ConversionResult, Money
from travel_pricing.domain.currency.rounding import to_decimal
from travel_pricing.domain.markup.interfaces import MarkupResolution
from travel_pricing.domain.tax.interfaces import TaxBreakdownItem, TaxCalculationResult


# ================================
# 📥 ВХІДНІ ДАНІ
# ================================
@dataclass(frozen=True)
class LineItem:
    """
    🧳 Позиція пропозиції: готель, трансфер, екскурсія, пакет.

    base_amount — сумарна собівартість у валюті постачальника. Якщо не задано,
    виводиться з `*_unit_cost` × склад групи.
    target — валюта або країна ціноутворення (за замовчуванням — `country_code`).
    """
    country_code: str
    service_type: str
    supplier_currency: str
    base_amount: Optional[Decimal] = None
    target: Optional[str] = None
    adult_unit_cost: Optional[Decimal] = None
    child_unit_cost: Optional[Decimal] = None
    infant_unit_cost: Optional[Decimal] = None
    as_of: Optional[date] = None
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "country_code", self.country_code.strip().upper())
        object.__setattr__(self, "supplier_currency", self.supplier_currency.strip().upper())
        for name in ("base_amount", "adult_unit_cost", "child_unit_cost", "infant_unit_cost"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, to_decimal(value))

    @property
    def has_unit_costs(self) -> bool:
        return self.adult_unit_cost is not None


@dataclass(frozen=True)
class PartyComposition:
    """👨‍👩‍👧 Склад групи."""
    adults: int = 1
    children: int = 0
    infants: int = 0

    @property
    def headcount(self) -> int:
        return self.adults + self.children + self.infants

    @property
    def paying_pax(self) -> int:
        """Дорослі + діти (немовлята не рахуються у фіксованому маркапі на особу)."""
        return self.adults + self.children


@dataclass(frozen=True)
class BreakdownOptions:
    """⚙️ Параметри побудови розбивки (None → значення з конфігурації білдера)."""
    is_inclusive: bool = False
    equal_cost_mode: bool = True
    fixed_markup_per_person: bool = False
    child_discount_percent: Optional[Decimal] = None
    infant_discount_percent: Optional[Decimal] = None


# ================================
# 📤 РЕЗУЛЬТАТИ
# ================================
@unique
class SplitMode(str, Enum):
    EQUAL_COST = "equal_cost"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class PerPersonBreakdown:
    """👤 Ціна на особу кожної категорії у валюті ціноутворення."""
    mode: SplitMode
    adults: int
    children: int
    infants: int
    adult_price: Decimal
    child_price: Decimal
    infant_price: Decimal
    total: Decimal                           # 🧮 Σ кількість × ціна на особу
    rounding_difference: Decimal             # ➗ final_price − total

    @property
    def weighted_total(self) -> Decimal:
        return self.total + self.rounding_difference


@dataclass(frozen=True)
class PricingBreakdown:
    """🧾 Усі проміжні суми розрахунку позиції (для аудиту та відображення)."""
    country_code: str
    service_type: str
    base_price: Decimal                      # 💵 Собівартість (валюта постачальника)
    supplier_currency: str
    markup: MarkupResolution
    markup_amount: Decimal                   # 📈 Валюта постачальника
    marked_up_amount: Decimal                # 📈 Валюта постачальника
    conversion: ConversionResult
    converted_amount: Decimal                # 💱 Валюта ціноутворення
    tax: TaxCalculationResult
    tax_amount: Decimal
    tds_amount: Decimal
    final_price: Decimal
    currency: str
    per_person: PerPersonBreakdown

    @property
    def applied_rule_id(self) -> str:
        return self.markup.applied_rule_id

    @property
    def per_person_price(self) -> Decimal:
        return self.per_person.adult_price

    @property
    def tax_breakdown(self) -> Tuple[TaxBreakdownItem, ...]:
        return self.tax.tax_breakdown

    @property
    def net_payable(self) -> Decimal:
        return self.tax.net_payable


@dataclass(frozen=True)
class QuoteSummary:
    """
    📊 Агрегат позицій однієї пропозиції в одній валюті.

    Собівартість і маркап лишаються у валютах постачальників: по одному `Money` на валюту.
    """
    currency: str
    line_count: int
    converted_total: Decimal
    tax_total: Decimal
    tds_total: Decimal
    final_total: Decimal
    net_payable: Decimal
    base_totals: Tuple[Money, ...] = field(default_factory=tuple)
    markup_totals: Tuple[Money, ...] = field(default_factory=tuple)
    applied_rule_ids: Tuple[str, ...] = field(default_factory=tuple)
