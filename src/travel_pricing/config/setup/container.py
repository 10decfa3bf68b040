# 📦 travel_pricing/config/setup/container.py
"""
📦 Контейнер залежностей рушія ціноутворення.

🔹 Створює сервіси в правильному порядку DI: сховище → резолвер / конвертер / калькулятор → білдер.
🔹 Переносить параметри з config.yaml (рівні, знижки, валюти без копійок) у конструктори.
🔹 Дає єдину точку доступу до компонентів для зовнішніх споживачів (quote-білдер, адмінка).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                           # 🧾 Базові засоби логування
from decimal import Decimal                                              # 🪙 Конвертація конфігурацій
from typing import TYPE_CHECKING, Any, Optional                          # 🧮 Допоміжні типи

# 🧩 Внутрішні модулі проєкту
from travel_pricing.domain.bulk.services import BulkRuleOperator         # 🧰 Масові операції
from travel_pricing.domain.currency.interfaces import IRateProvider      # 🌐 Контракт живих курсів
from travel_pricing.domain.currency.rounding import DEFAULT_ZERO_DECIMAL_CURRENCIES, to_decimal
from travel_pricing.domain.markup.resolver import MarkupResolver         # 📈 Резолвер маркапу
from travel_pricing.domain.pricing.services import (                     # 💵 Побудова розбивки
    DEFAULT_CHILD_DISCOUNT_PERCENT,
    DEFAULT_INFANT_DISCOUNT_PERCENT,
    PricingBreakdownBuilder,
)
from travel_pricing.domain.rules.interfaces import IRuleStore            # 🗄️ Контракт сховища
from travel_pricing.domain.tax.services import TaxCalculator             # 🧾 Податки
from travel_pricing.infrastructure.currency.currency_converter import CurrencyConverter  # 💱 Конвертер
from travel_pricing.infrastructure.rules.snapshot_loader import load_rule_store  # 📗 Знімок правил
from travel_pricing.shared.utils.logger import LOG_NAME, init_logging_from_config  # 🧾 Конфіг логування

if TYPE_CHECKING:
    from travel_pricing.config.config_service import ConfigService       # 🗂️ Тип під час перевірки

logger = logging.getLogger(f"{LOG_NAME}.container")                      # 🧾 Модульний логер контейнера


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _decimal_or_default(value: Any, default: Decimal) -> Decimal:
    """Повертає Decimal або запасне значення, якщо каст неможливий."""
    if value is None:
        return default
    try:
        return to_decimal(value)
    except ValueError:
        logger.warning(f"⚠️ Invalid numeric config value {value!r}, using {default}")
        return default


def bootstrap_logging() -> logging.Logger:
    """Зчитує конфіг логування і запускає кореневий логер."""
    from travel_pricing.config.config_service import ConfigService      # 🧭 Локальний імпорт для уникнення циклів

    node = ConfigService().get("logging", {}) or {}
    return init_logging_from_config(node)


# ================================
# 🏛️ КОНТЕЙНЕР ЗАЛЕЖНОСТЕЙ
# ================================
class Container:
    """Координує ініціалізацію сховища правил та розрахункових сервісів."""

    def __init__(
        self,
        config: "ConfigService",
        *,
        store: Optional[IRuleStore] = None,
        rate_provider: Optional[IRateProvider] = None,
    ) -> None:
        self.config = config                                              # ⚙️ Джерело конфігурацій DI
        logger.info("🚀 Building pricing container")
        self.zero_decimal_currencies = frozenset(
            str(c).upper()
            for c in (config.get("currency.zero_decimal_currencies") or DEFAULT_ZERO_DECIMAL_CURRENCIES)
        )
        self.store: IRuleStore = store or self._load_store()              # 🗄️ Знімок правил
        self.rate_provider = rate_provider                                # 🌐 Може бути None → лише fallback
        self._setup_domain_services()
        logger.info("✅ Pricing container ready")

    def _load_store(self) -> IRuleStore:
        defaults = {
            "base_currency": self.config.get("currency.base_currency"),
            "fallback_rates": self.config.get("currency.fallback_rates") or {},
            "conversion_margins": self.config.get("currency.conversion_margins") or {},
        }
        return load_rule_store(self.config.rules_path(), settings_defaults=defaults)

    def _setup_domain_services(self) -> None:
        self.markup_resolver = MarkupResolver(
            self.store,
            tier_multipliers=self.config.get("pricing.tier_multipliers") or {},
        )
        self.currency_converter = CurrencyConverter(
            self.store,
            self.rate_provider,
            zero_decimal_currencies=self.zero_decimal_currencies,
        )
        self.tax_calculator = TaxCalculator(self.store, zero_decimal_currencies=self.zero_decimal_currencies)
        self.breakdown_builder = PricingBreakdownBuilder(
            self.markup_resolver,
            self.currency_converter,
            self.tax_calculator,
            child_discount_percent=_decimal_or_default(
                self.config.get("pricing.child_discount_percent"), DEFAULT_CHILD_DISCOUNT_PERCENT
            ),
            infant_discount_percent=_decimal_or_default(
                self.config.get("pricing.infant_discount_percent"), DEFAULT_INFANT_DISCOUNT_PERCENT
            ),
            zero_decimal_currencies=self.zero_decimal_currencies,
        )
        self.bulk_operator = BulkRuleOperator(self.store)
