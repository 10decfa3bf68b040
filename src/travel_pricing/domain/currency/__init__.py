# 💱 travel_pricing/domain/currency/__init__.py
"""
💱 Пакет `domain.currency` — контракти конвертації та утиліти округлення.

🔹 `interfaces.py` — Money, CurrencyCode, IRateProvider, ConversionResult.
🔹 `rounding.py` — to_decimal, quantize_money, q2, percent.
"""

from .interfaces import (
    ConversionResult,
    CurrencyCode,
    ICurrencyConverter,
    IRateProvider,
    Money,
    RateProviderError,
    RateSource,
)
from .rounding import (
    DEFAULT_ZERO_DECIMAL_CURRENCIES,
    currency_exponent,
    minor_unit,
    percent,
    q2,
    quantize_money,
    to_decimal,
)

__all__ = [
    "ConversionResult",
    "CurrencyCode",
    "ICurrencyConverter",
    "IRateProvider",
    "Money",
    "RateProviderError",
    "RateSource",
    "DEFAULT_ZERO_DECIMAL_CURRENCIES",
    "currency_exponent",
    "minor_unit",
    "percent",
    "q2",
    "quantize_money",
    "to_decimal",
]
