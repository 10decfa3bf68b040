# 🚨 travel_pricing/errors/__init__.py
"""
🚨 Пакет помилок рушія ціноутворення.

🔹 `pricing_errors.py` — PricingError та її нащадки, CountryOperationError.
"""

from .pricing_errors import (
    ConversionRateUnavailable,
    CountryOperationError,
    InvalidBulkOperation,
    InvalidPartyComposition,
    InvalidSlabConfiguration,
    InvalidTaxConfiguration,
    MarkupRuleNotFound,
    PricingError,
    TaxRateNotFound,
    UnknownCountryError,
)

__all__ = [
    "PricingError",
    "MarkupRuleNotFound",
    "InvalidSlabConfiguration",
    "ConversionRateUnavailable",
    "UnknownCountryError",
    "TaxRateNotFound",
    "InvalidTaxConfiguration",
    "InvalidPartyComposition",
    "InvalidBulkOperation",
    "CountryOperationError",
]
