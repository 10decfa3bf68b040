# 🗄️ travel_pricing/domain/rules/interfaces.py
"""
🧩 interfaces.py — Контракт сховища правил ціноутворення.

Сховище — зовнішній постачальник записів. Рушій читає його на кожен
розрахунок і не кешує записи між викликами.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .entities import (
    CountryInfo,
    CountryPricingRule,
    CurrencyConversionSettings,
    EnhancedMarkupRule,
    RegionalPricingTemplate,
    TaxConfiguration,
)


class IRuleStore(ABC):
    """🗄️ Синхронне читання (і точковий запис для bulk-операцій) правил за кодом країни."""

    # ================================
    # 📖 ЧИТАННЯ
    # ================================
    @abstractmethod
    def get_country_rule(self, country_code: str) -> Optional[CountryPricingRule]:
        """Правило країни (зокрема неактивне) або None."""

    @abstractmethod
    def get_enhanced_markup_rule(self, country_code: str) -> Optional[EnhancedMarkupRule]:
        """Розширене правило країни (зокрема неактивне) або None; активним може бути лише одне."""

    @abstractmethod
    def get_regional_template(self, country_code: str) -> Optional[RegionalPricingTemplate]:
        """Активний регіональний шаблон, що містить країну, або None."""

    @abstractmethod
    def get_regional_template_by_id(self, template_id: str) -> Optional[RegionalPricingTemplate]:
        """Шаблон за ідентифікатором або None."""

    @abstractmethod
    def get_tax_configuration(self, country_code: str) -> Optional[TaxConfiguration]:
        """Податкова конфігурація країни або None."""

    @abstractmethod
    def get_conversion_settings(self) -> CurrencyConversionSettings:
        """Процесні налаштування конвертації."""

    @abstractmethod
    def get_country_info(self, country_code: str) -> Optional[CountryInfo]:
        """Запис каталогу країн або None."""

    # ================================
    # ✍️ ЗАПИС (bulk / адмінка)
    # ================================
    @abstractmethod
    def save_country_rule(self, rule: CountryPricingRule) -> None:
        """Створює або повністю перезаписує правило країни."""

    @abstractmethod
    def save_enhanced_markup_rule(self, rule: EnhancedMarkupRule) -> None:
        """Створює або повністю перезаписує розширене правило країни."""
