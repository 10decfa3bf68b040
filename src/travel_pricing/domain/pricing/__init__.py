# 📦 travel_pricing/domain/pricing/__init__.py
"""
📦 Пакет `domain.pricing` — побудова цінової розбивки позиції та агрегація пропозиції.

🔹 `interfaces.py` — LineItem, PartyComposition, BreakdownOptions, PricingBreakdown, QuoteSummary.
🔹 `services.py` — PricingBreakdownBuilder, aggregate_breakdowns.
"""

from .interfaces import (
    BreakdownOptions,
    LineItem,
    PartyComposition,
    PerPersonBreakdown,
    PricingBreakdown,
    QuoteSummary,
    SplitMode,
)
from .services import PricingBreakdownBuilder, aggregate_breakdowns

__all__ = [
    "BreakdownOptions",
    "LineItem",
    "PartyComposition",
    "PerPersonBreakdown",
    "PricingBreakdown",
    "PricingBreakdownBuilder",
    "QuoteSummary",
    "SplitMode",
    "aggregate_breakdowns",
]
