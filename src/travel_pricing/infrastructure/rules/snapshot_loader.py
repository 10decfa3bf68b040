# 📗 travel_pricing/infrastructure/rules/snapshot_loader.py
"""
📗 Завантаження знімка правил з YAML (або вже розібраного словника).

🔹 Секції: countries, country_rules, enhanced_rules, regional_templates,
   tax_configurations, conversion_settings — усі опційні.
🔹 Дати приймаються як YAML-дати або ISO-рядки.
🔹 Дефолти конвертації з config.yaml (`currency.*`) доповнюють секцію conversion_settings.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import yaml	# 📦 YAML-парсинг

# 🔠 Системні імпорти
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

# 🧩 Внутрішні модулі проєкту
from travel_pricing.domain.rules.entities import (
    CountryInfo,
    CountryPricingRule,
    CurrencyConversionSettings,
    EnhancedMarkupRule,
    MarkupSlabRule,
    RegionalPricingTemplate,
    SeasonalAdjustment,
    TaxConfiguration,
    TaxExemption,
    TaxRate,
    TDSConfiguration,
)
from travel_pricing.shared.utils.logger import LOG_NAME

from .in_memory_store import InMemoryRuleStore

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.rules.loader")


# ================================
# 🧰 ПАРСЕРИ ЗАПИСІВ
# ================================
def _as_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def _seasonal(raw: Optional[Mapping[str, Any]]) -> Optional[SeasonalAdjustment]:
    if not raw:
        return None
    return SeasonalAdjustment(
        percentage=raw["percentage"],
        start=_as_date(raw["start"]),
        end=_as_date(raw["end"]),
        recurring=bool(raw.get("recurring", True)),
        description=raw.get("description", ""),
    )


def _country_rule(raw: Mapping[str, Any]) -> CountryPricingRule:
    data = dict(raw)
    data["seasonal_adjustment"] = _seasonal(data.get("seasonal_adjustment"))
    data.setdefault("id", f"{str(data['country_code']).lower()}-pricing")
    return CountryPricingRule(**data)


def _enhanced_rule(raw: Mapping[str, Any]) -> EnhancedMarkupRule:
    data = dict(raw)
    data["seasonal_adjustment"] = _seasonal(data.get("seasonal_adjustment"))
    data["slab_rules"] = tuple(MarkupSlabRule(**slab) for slab in data.get("slab_rules") or ())
    return EnhancedMarkupRule(**data)


def _template(raw: Mapping[str, Any]) -> RegionalPricingTemplate:
    data = dict(raw)
    data["countries"] = tuple(data.get("countries") or ())
    return RegionalPricingTemplate(**data)


def _tax_configuration(raw: Mapping[str, Any]) -> TaxConfiguration:
    tds_raw = raw.get("tds_configuration")
    exemptions = []
    for item in raw.get("exemptions") or ():
        data = dict(item)
        data["valid_from"] = _as_date(data.get("valid_from"))
        data["valid_to"] = _as_date(data.get("valid_to"))
        exemptions.append(TaxExemption(**data))
    return TaxConfiguration(
        country_code=raw["country_code"],
        tax_type=raw.get("tax_type", "NONE"),
        tax_rates=tuple(TaxRate(**rate) for rate in raw.get("tax_rates") or ()),
        tds_configuration=TDSConfiguration(**tds_raw) if tds_raw else None,
        exemptions=tuple(exemptions),
    )


def _conversion_settings(
    raw: Optional[Mapping[str, Any]],
    defaults: Optional[Mapping[str, Any]],
) -> CurrencyConversionSettings:
    merged: Dict[str, Any] = {}
    for source in (defaults or {}, raw or {}):
        for key in ("base_currency", "auto_update_rates", "update_frequency"):
            if source.get(key) is not None:
                merged[key] = source[key]
        for key in ("fallback_rates", "conversion_margins"):
            if source.get(key):
                merged.setdefault(key, {}).update(source[key])
    return CurrencyConversionSettings(**merged)


# ================================
# 📥 ПУБЛІЧНИЙ API
# ================================
def build_rule_store(
    data: Mapping[str, Any],
    *,
    settings_defaults: Optional[Mapping[str, Any]] = None,
) -> InMemoryRuleStore:
    """🏗️ Будує InMemoryRuleStore з розібраного знімка."""
    return InMemoryRuleStore(
        countries=[CountryInfo(**c) for c in data.get("countries") or ()],
        country_rules=[_country_rule(r) for r in data.get("country_rules") or ()],
        enhanced_rules=[_enhanced_rule(r) for r in data.get("enhanced_rules") or ()],
        regional_templates=[_template(t) for t in data.get("regional_templates") or ()],
        tax_configurations=[_tax_configuration(t) for t in data.get("tax_configurations") or ()],
        conversion_settings=_conversion_settings(data.get("conversion_settings"), settings_defaults),
    )


def load_rule_store(
    path: Union[str, Path],
    *,
    settings_defaults: Optional[Mapping[str, Any]] = None,
) -> InMemoryRuleStore:
    """
    📗 Читає YAML-знімок правил.

    Raises:
        FileNotFoundError: файл відсутній.
        yaml.YAMLError: файл не є валідним YAML.
        ValueError: запис має некоректне значення (число, дата, enum).
    """
    snapshot_path = Path(path)
    with open(snapshot_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    logger.info(f"📗 Rule snapshot loaded | file={snapshot_path.name}")
    return build_rule_store(data, settings_defaults=settings_defaults)
