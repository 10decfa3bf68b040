# 🧱 travel_pricing/domain/rules/__init__.py
"""
🧱 Пакет `domain.rules` — записи конфігурації та контракт сховища.

🔹 `entities.py` — CountryPricingRule, EnhancedMarkupRule, TaxConfiguration, ...
🔹 `interfaces.py` — IRuleStore.
🔹 `slabs.py` — validate_slabs / select_slab.
"""

from .entities import (
    ALL_SERVICES,
    CountryInfo,
    CountryPricingRule,
    CurrencyConversionSettings,
    EnhancedMarkupRule,
    MarkupSlabRule,
    MarkupType,
    PricingTier,
    RegionalPricingTemplate,
    SeasonalAdjustment,
    TaxConfiguration,
    TaxExemption,
    TaxRate,
    TaxType,
    TDSConfiguration,
)
from .interfaces import IRuleStore
from .slabs import select_slab, validate_slabs

__all__ = [
    "ALL_SERVICES",
    "CountryInfo",
    "CountryPricingRule",
    "CurrencyConversionSettings",
    "EnhancedMarkupRule",
    "IRuleStore",
    "MarkupSlabRule",
    "MarkupType",
    "PricingTier",
    "RegionalPricingTemplate",
    "SeasonalAdjustment",
    "TaxConfiguration",
    "TaxExemption",
    "TaxRate",
    "TaxType",
    "TDSConfiguration",
    "select_slab",
    "validate_slabs",
]
