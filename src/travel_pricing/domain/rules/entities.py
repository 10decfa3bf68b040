# 🧱 travel_pricing/domain/rules/entities.py
"""
🧱 Записи конфігурації ціноутворення, які постачає сховище правил.

🔹 Усі записи — frozen dataclass-и: рушій працює зі «знімком» і нічого не мутує.
🔹 Числові поля приводяться до Decimal у `__post_init__` (int/float/str на вході).
🔹 Відсотки зберігаються у процентних пунктах: `7` означає 7 %.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum, unique
from typing import Any, Mapping, Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from travel_pricing.domain.currency.rounding import to_decimal
from travel_pricing.shared.utils.immutables import freeze


def _coerce(obj: Any, *names: str) -> None:
    """🔢 Приводить перелічені атрибути frozen-обʼєкта до Decimal (None лишається None)."""
    for name in names:
        value = getattr(obj, name)
        if value is not None:
            object.__setattr__(obj, name, to_decimal(value))


def _upper(obj: Any, *names: str) -> None:
    """🔠 Нормалізує коди країн/валют до верхнього регістру."""
    for name in names:
        value = getattr(obj, name)
        if value is not None:
            object.__setattr__(obj, name, str(value).strip().upper())


# ================================
# 🏷️ ПЕРЕРАХУВАННЯ
# ================================
@unique
class MarkupType(str, Enum):
    """Тип маркапу: відсоток від суми або фіксована надбавка."""
    PERCENTAGE = "percentage"
    FIXED = "fixed"


@unique
class PricingTier(str, Enum):
    """Рівень продукту (впливає на множник маркапу)."""
    BUDGET = "budget"
    STANDARD = "standard"
    PREMIUM = "premium"
    LUXURY = "luxury"


@unique
class TaxType(str, Enum):
    """Податковий режим країни."""
    GST = "GST"
    VAT = "VAT"
    SALES_TAX = "SALES_TAX"
    NONE = "NONE"


ALL_SERVICES = "all"                                             # 🌐 Ставка-фолбек для будь-якої послуги


# ================================
# 📅 СЕЗОННІСТЬ
# ================================
@dataclass(frozen=True)
class SeasonalAdjustment:
    """
    📅 Сезонне коригування маркапу (у процентних пунктах).

    recurring=True — вікно повторюється щороку (порівнюємо місяць/день, можливий
    перехід через Новий рік: 1 груд → 15 січ).
    """
    percentage: Decimal
    start: date
    end: date
    recurring: bool = True
    description: str = ""

    def __post_init__(self) -> None:
        _coerce(self, "percentage")

    def applies_on(self, as_of: date) -> bool:
        """✅ Чи потрапляє дата у сезонне вікно (межі включно)."""
        if not self.recurring:
            return self.start <= as_of <= self.end
        point = (as_of.month, as_of.day)
        start = (self.start.month, self.start.day)
        end = (self.end.month, self.end.day)
        if start <= end:
            return start <= point <= end
        return point >= start or point <= end                    # 🔄 Вікно через кінець року


# ================================
# 🌍 ПРАВИЛА КРАЇН
# ================================
@dataclass(frozen=True)
class CountryInfo:
    """🌍 Запис каталогу країн (валюта за замовчуванням та регіон)."""
    code: str
    name: str
    currency: str
    currency_symbol: str = ""
    region: str = ""
    pricing_currency_override: Optional[str] = None              # 💱 Валюта ціноутворення замість базової

    def __post_init__(self) -> None:
        _upper(self, "code", "currency", "pricing_currency_override")


@dataclass(frozen=True)
class CountryPricingRule:
    """🌍 Базове правило маркапу країни (одне на країну)."""
    id: str
    country_code: str
    currency: str
    default_markup: Decimal
    markup_type: MarkupType = MarkupType.PERCENTAGE
    tier: PricingTier = PricingTier.STANDARD
    region: str = ""
    currency_symbol: str = ""
    country_name: str = ""
    conversion_margin: Optional[Decimal] = None                  # 💸 Перекриває глобальну маржу
    seasonal_adjustment: Optional[SeasonalAdjustment] = None
    pricing_currency_override: Optional[str] = None
    is_active: bool = True

    def __post_init__(self) -> None:
        _upper(self, "country_code", "currency", "pricing_currency_override")
        _coerce(self, "default_markup", "conversion_margin")
        object.__setattr__(self, "markup_type", MarkupType(self.markup_type))
        object.__setattr__(self, "tier", PricingTier(self.tier))


@dataclass(frozen=True)
class RegionalPricingTemplate:
    """🗺️ Шаблон регіону: спільний маркап для групи країн."""
    id: str
    name: str
    region: str
    default_markup: Decimal
    markup_type: MarkupType = MarkupType.PERCENTAGE
    countries: Tuple[str, ...] = ()
    description: str = ""
    is_active: bool = True

    def __post_init__(self) -> None:
        _coerce(self, "default_markup")
        object.__setattr__(self, "markup_type", MarkupType(self.markup_type))
        object.__setattr__(self, "countries", tuple(str(c).strip().upper() for c in self.countries))

    def covers(self, country_code: str) -> bool:
        return self.is_active and country_code.upper() in self.countries


@dataclass(frozen=True)
class MarkupSlabRule:
    """🪜 Слеб: відсоток маркапу для діапазону [min_amount, max_amount)."""
    min_amount: Decimal
    max_amount: Optional[Decimal]                                # None → без верхньої межі
    additional_percentage: Decimal
    fixed_amount: Optional[Decimal] = None

    def __post_init__(self) -> None:
        _coerce(self, "min_amount", "max_amount", "additional_percentage", "fixed_amount")


@dataclass(frozen=True)
class EnhancedMarkupRule:
    """📈 Розширене правило країни: слеби, множник рівня, сезон, межі маркапу."""
    id: str
    country_code: str
    base_markup_percentage: Decimal
    slab_markup_enabled: bool = False
    slab_rules: Tuple[MarkupSlabRule, ...] = ()
    tier_multiplier: Optional[Decimal] = None                    # None → множник за tier правила країни
    seasonal_adjustment: Optional[SeasonalAdjustment] = None
    minimum_markup: Optional[Decimal] = None
    maximum_markup: Optional[Decimal] = None
    is_active: bool = True

    def __post_init__(self) -> None:
        _upper(self, "country_code")
        _coerce(self, "base_markup_percentage", "tier_multiplier", "minimum_markup", "maximum_markup")
        object.__setattr__(self, "slab_rules", tuple(self.slab_rules))


# ================================
# 💱 НАЛАШТУВАННЯ КОНВЕРТАЦІЇ
# ================================
@dataclass(frozen=True)
class CurrencyConversionSettings:
    """💱 Процесні дефолти конвертації: fallback-курси та маржі за валютою."""
    base_currency: str = "USD"
    auto_update_rates: bool = False
    update_frequency: str = "daily"
    fallback_rates: Mapping[str, Decimal] = field(default_factory=dict)      # "USD_THB" або "THB" (від base)
    conversion_margins: Mapping[str, Decimal] = field(default_factory=dict)  # валюта → % маржі

    def __post_init__(self) -> None:
        _upper(self, "base_currency")
        object.__setattr__(
            self,
            "fallback_rates",
            freeze({str(k).upper(): to_decimal(v) for k, v in dict(self.fallback_rates).items()}),
        )
        object.__setattr__(
            self,
            "conversion_margins",
            freeze({str(k).upper(): to_decimal(v) for k, v in dict(self.conversion_margins).items()}),
        )


# ================================
# 🧾 ПОДАТКИ
# ================================
@dataclass(frozen=True)
class TaxRate:
    """🧾 Ставка податку для типу послуги."""
    id: str
    service_type: str
    rate: Decimal
    description: str = ""
    is_default: bool = False

    def __post_init__(self) -> None:
        _coerce(self, "rate")
        object.__setattr__(self, "service_type", str(self.service_type).strip().lower())


@dataclass(frozen=True)
class TaxExemption:
    """🚫 Звільнення від податку для типу послуги (опційно з періодом дії)."""
    id: str
    service_type: str
    description: str = ""
    is_active: bool = True
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "service_type", str(self.service_type).strip().lower())

    def matches(self, service_type: str, as_of: Optional[date] = None) -> bool:
        if not self.is_active:
            return False
        if self.service_type not in (service_type, ALL_SERVICES):
            return False
        if as_of is not None:
            if self.valid_from and as_of < self.valid_from:
                return False
            if self.valid_to and as_of > self.valid_to:
                return False
        return True


@dataclass(frozen=True)
class TDSConfiguration:
    """🏦 Утримання податку біля джерела (TDS) — не зменшує ціну клієнта."""
    is_applicable: bool
    rate: Decimal
    threshold: Decimal = Decimal("0")
    exemption_limit: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        _coerce(self, "rate", "threshold", "exemption_limit")


@dataclass(frozen=True)
class TaxConfiguration:
    """🧾 Податкова конфігурація країни."""
    country_code: str
    tax_type: TaxType
    tax_rates: Tuple[TaxRate, ...] = ()
    tds_configuration: Optional[TDSConfiguration] = None
    exemptions: Tuple[TaxExemption, ...] = ()

    def __post_init__(self) -> None:
        _upper(self, "country_code")
        object.__setattr__(self, "tax_type", TaxType(self.tax_type))
        object.__setattr__(self, "tax_rates", tuple(self.tax_rates))
        object.__setattr__(self, "exemptions", tuple(self.exemptions))
