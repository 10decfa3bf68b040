# 🗄️ travel_pricing/infrastructure/rules/in_memory_store.py
"""
🗄️ InMemoryRuleStore — сховище правил у памʼяті з потокобезпечним записом.

🔹 Реалізує доменний контракт `IRuleStore`.
🔹 Записи — frozen dataclass-и: читач отримує незмінний знімок, запис замінює обʼєкт цілком.
🔹 Конкурентні записи в одну країну — last-write-wins (злиття не визначено).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging	# 🧾 Логування операцій
import threading	# 🔒 Lock для запису
from typing import Dict, Iterable, List, Optional	# 🧰 Типи сховища

# 🧩 Внутрішні модулі проєкту
from travel_pricing.domain.rules.entities import (
    CountryInfo,
    CountryPricingRule,
    CurrencyConversionSettings,
    EnhancedMarkupRule,
    RegionalPricingTemplate,
    TaxConfiguration,
)
from travel_pricing.domain.rules.interfaces import IRuleStore
from travel_pricing.shared.utils.logger import LOG_NAME	# 🏷️ Імʼя базового логера

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.infrastructure.rules")


def _key(country_code: str) -> str:
    return (country_code or "").strip().upper()


# ================================
# 🏛️ СХОВИЩЕ
# ================================
class InMemoryRuleStore(IRuleStore):
    """🗄️ Словники «код країни → запис» під одним замком на запис."""

    def __init__(
        self,
        *,
        countries: Iterable[CountryInfo] = (),
        country_rules: Iterable[CountryPricingRule] = (),
        enhanced_rules: Iterable[EnhancedMarkupRule] = (),
        regional_templates: Iterable[RegionalPricingTemplate] = (),
        tax_configurations: Iterable[TaxConfiguration] = (),
        conversion_settings: Optional[CurrencyConversionSettings] = None,
    ) -> None:
        self._lock = threading.Lock()	# 🔒 Серіалізує записи
        self._countries: Dict[str, CountryInfo] = {c.code: c for c in countries}
        self._country_rules: Dict[str, CountryPricingRule] = {}
        self._enhanced_rules: Dict[str, EnhancedMarkupRule] = {}
        self._templates: Dict[str, RegionalPricingTemplate] = {t.id: t for t in regional_templates}
        self._tax: Dict[str, TaxConfiguration] = {t.country_code: t for t in tax_configurations}
        self._settings = conversion_settings or CurrencyConversionSettings()

        for rule in country_rules:
            self.save_country_rule(rule)
        for enhanced in enhanced_rules:
            self.save_enhanced_markup_rule(enhanced)

        logger.info(
            f"🗄️ Rule store ready | countries={len(self._countries)} rules={len(self._country_rules)} "
            f"enhanced={len(self._enhanced_rules)} templates={len(self._templates)} tax={len(self._tax)}"
        )

    # ================================
    # 📖 ЧИТАННЯ
    # ================================
    def get_country_rule(self, country_code: str) -> Optional[CountryPricingRule]:
        return self._country_rules.get(_key(country_code))

    def get_enhanced_markup_rule(self, country_code: str) -> Optional[EnhancedMarkupRule]:
        return self._enhanced_rules.get(_key(country_code))

    def get_regional_template(self, country_code: str) -> Optional[RegionalPricingTemplate]:
        code = _key(country_code)
        return next((t for t in self._templates.values() if t.covers(code)), None)

    def get_regional_template_by_id(self, template_id: str) -> Optional[RegionalPricingTemplate]:
        return self._templates.get(template_id)

    def get_tax_configuration(self, country_code: str) -> Optional[TaxConfiguration]:
        return self._tax.get(_key(country_code))

    def get_conversion_settings(self) -> CurrencyConversionSettings:
        return self._settings

    def get_country_info(self, country_code: str) -> Optional[CountryInfo]:
        return self._countries.get(_key(country_code))

    def list_country_rules(self) -> List[CountryPricingRule]:
        """📋 Знімок усіх правил країн (для адмінки), відсортований за кодом."""
        return [self._country_rules[code] for code in sorted(self._country_rules)]

    # ================================
    # ✍️ ЗАПИС
    # ================================
    def save_country_rule(self, rule: CountryPricingRule) -> None:
        with self._lock:
            self._country_rules[rule.country_code] = rule
        logger.debug(f"💾 Country rule saved | country={rule.country_code} markup={rule.default_markup}")

    def save_enhanced_markup_rule(self, rule: EnhancedMarkupRule) -> None:
        # 🔁 Один запис на країну: новий замінює попередній, тож активним лишається максимум один
        with self._lock:
            self._enhanced_rules[rule.country_code] = rule
        logger.debug(f"💾 Enhanced rule saved | country={rule.country_code} base={rule.base_markup_percentage}")

    def save_regional_template(self, template: RegionalPricingTemplate) -> None:
        with self._lock:
            self._templates[template.id] = template

    def save_tax_configuration(self, config: TaxConfiguration) -> None:
        with self._lock:
            self._tax[config.country_code] = config

    def save_conversion_settings(self, settings: CurrencyConversionSettings) -> None:
        with self._lock:
            self._settings = settings
