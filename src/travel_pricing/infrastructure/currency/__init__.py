# 💱 travel_pricing/infrastructure/currency/__init__.py
from .currency_converter import CurrencyConverter
from .rate_providers import StaticRateProvider

__all__ = ["CurrencyConverter", "StaticRateProvider"]
