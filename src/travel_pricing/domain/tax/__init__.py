# 🧾 travel_pricing/domain/tax/__init__.py
"""
🧾 Пакет `domain.tax` — податковий калькулятор (GST/VAT/SALES_TAX + TDS).
"""

from .interfaces import (
    TDS_ITEM_TYPE,
    ServiceTaxLine,
    ServiceTaxSummary,
    TaxBreakdownItem,
    TaxCalculationResult,
)
from .services import TaxCalculator

__all__ = [
    "TDS_ITEM_TYPE",
    "ServiceTaxLine",
    "ServiceTaxSummary",
    "TaxBreakdownItem",
    "TaxCalculationResult",
    "TaxCalculator",
]
