# 🧰 travel_pricing/domain/bulk/__init__.py
"""
🧰 Пакет `domain.bulk` — масові set / adjust / copy операції над правилами країн.
"""

from .interfaces import (
    BulkOperationResult,
    BulkOperationType,
    BulkPricingOperation,
    CountryRuleUpdate,
)
from .services import BulkRuleOperator

__all__ = [
    "BulkOperationResult",
    "BulkOperationType",
    "BulkPricingOperation",
    "BulkRuleOperator",
    "CountryRuleUpdate",
]
