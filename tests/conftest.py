# tests/conftest.py
import copy
import os
import sys
from pathlib import Path

import pytest

# 1) Гасимо автопідхоплення сторонніх плагінів
os.environ.setdefault("PYTEST_DISABLE_PLUGIN_AUTOLOAD", "1")

# 2) Додаємо src у sys.path, щоб працював імпорт "travel_pricing.…"
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from travel_pricing.config.config_service import ConfigService  # noqa: E402
from travel_pricing.domain.markup.resolver import MarkupResolver  # noqa: E402
from travel_pricing.domain.pricing.services import PricingBreakdownBuilder  # noqa: E402
from travel_pricing.domain.tax.services import TaxCalculator  # noqa: E402
from travel_pricing.infrastructure.currency.currency_converter import CurrencyConverter  # noqa: E402
from travel_pricing.infrastructure.rules.snapshot_loader import build_rule_store  # noqa: E402

# 🧪 Мінімальний знімок: Таїланд зі сценарію «$100 → 4201.89 THB» + кілька країн для fallback-ланок
BASE_SNAPSHOT = {
    "conversion_settings": {
        "base_currency": "USD",
        "fallback_rates": {"USD_THB": "35.0", "USD_INR": "83", "USD_JPY": "150", "EUR": "0.9"},
        "conversion_margins": {"INR": "1.5"},
    },
    "countries": [
        {"code": "TH", "name": "Thailand", "currency": "THB", "region": "Southeast Asia"},
        {"code": "IN", "name": "India", "currency": "INR", "region": "South Asia"},
        {"code": "SG", "name": "Singapore", "currency": "SGD", "region": "Southeast Asia"},
        {"code": "JP", "name": "Japan", "currency": "JPY", "region": "East Asia"},
        {"code": "GB", "name": "United Kingdom", "currency": "GBP", "region": "Europe"},
    ],
    "country_rules": [
        {
            "id": "th-pricing",
            "country_code": "TH",
            "currency": "THB",
            "default_markup": 15,
            "markup_type": "percentage",
            "tier": "standard",
            "conversion_margin": 2,
        },
        {
            "id": "in-pricing",
            "country_code": "IN",
            "currency": "INR",
            "default_markup": 12,
            "markup_type": "percentage",
            "tier": "standard",
        },
    ],
    "enhanced_rules": [
        {
            "id": "th-enhanced",
            "country_code": "TH",
            "base_markup_percentage": 10,
            "slab_markup_enabled": False,
            "tier_multiplier": "1.0",
        },
    ],
    "regional_templates": [
        {
            "id": "tpl-sea",
            "name": "Southeast Asia",
            "region": "Southeast Asia",
            "default_markup": 14,
            "countries": ["TH", "SG"],
        },
    ],
    "tax_configurations": [
        {
            "country_code": "TH",
            "tax_type": "VAT",
            "tax_rates": [{"id": "th-vat", "service_type": "all", "rate": 7, "is_default": True}],
        },
        {
            "country_code": "IN",
            "tax_type": "GST",
            "tax_rates": [
                {"id": "in-hotel", "service_type": "hotel", "rate": 12},
                {"id": "in-all", "service_type": "all", "rate": 18, "is_default": True},
            ],
            "tds_configuration": {"is_applicable": True, "rate": 5, "threshold": 10000, "exemption_limit": 0},
            "exemptions": [{"id": "in-medical", "service_type": "medical"}],
        },
        {"country_code": "JP", "tax_type": "NONE"},
    ],
}


@pytest.fixture
def snapshot():
    """Глибока копія знімка — тест може вільно його змінювати."""
    return copy.deepcopy(BASE_SNAPSHOT)


@pytest.fixture
def store(snapshot):
    return build_rule_store(snapshot)


@pytest.fixture
def resolver(store):
    return MarkupResolver(store)


@pytest.fixture
def converter(store):
    return CurrencyConverter(store)


@pytest.fixture
def tax_calculator(store):
    return TaxCalculator(store)


@pytest.fixture
def builder(resolver, converter, tax_calculator):
    return PricingBreakdownBuilder(resolver, converter, tax_calculator)


@pytest.fixture
def fresh_config(monkeypatch):
    """ConfigService без залишків попередніх тестів і без змінних середовища."""
    for var in ("TRAVEL_PRICING_RULES_FILE", "TRAVEL_PRICING_LOG_LEVEL", "TRAVEL_PRICING_BASE_CURRENCY"):
        monkeypatch.delenv(var, raising=False)
    ConfigService.reset()
    yield
    ConfigService.reset()
