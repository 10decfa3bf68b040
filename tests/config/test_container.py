"""
🧪 test_container.py — збірка компонентів з config.yaml та зразкового знімка правил.
"""

from datetime import date
from decimal import Decimal

import pytest

from travel_pricing.config import ConfigService, Container
from travel_pricing.config.setup.container import _decimal_or_default, bootstrap_logging
from travel_pricing.domain.bulk import BulkOperationType, BulkPricingOperation
from travel_pricing.domain.markup.interfaces import MarkupSource
from travel_pricing.domain.pricing import LineItem, PartyComposition
from travel_pricing.infrastructure.currency import StaticRateProvider
from travel_pricing.infrastructure.rules.snapshot_loader import build_rule_store
from travel_pricing.shared.utils.logger import LOG_NAME

OFF_SEASON = date(2025, 3, 1)


@pytest.fixture
def container(fresh_config):
    return Container(ConfigService())


def test_components_are_wired(container):
    assert container.breakdown_builder is not None
    assert container.bulk_operator is not None
    assert "JPY" in container.zero_decimal_currencies
    assert container.store.get_country_rule("TH").id == "th-pricing"
    assert container.markup_resolver.tier_multiplier("luxury") == Decimal("1.5")


def test_sample_snapshot_thailand_quote(container):
    item = LineItem(
        country_code="TH",
        service_type="hotel",
        supplier_currency="USD",
        base_amount=Decimal("100"),
        as_of=OFF_SEASON,
    )
    breakdown = container.breakdown_builder.build_breakdown(item, PartyComposition(adults=1))

    assert breakdown.conversion.rate == Decimal("35.70")
    assert breakdown.converted_amount == Decimal("3927.00")
    assert breakdown.tax_amount == Decimal("274.89")
    assert breakdown.final_price == Decimal("4201.89")


def test_sample_snapshot_japan_slab(container):
    result = container.markup_resolver.resolve_markup("JP", "tour", Decimal("3000"), OFF_SEASON)

    assert result.source is MarkupSource.ENHANCED_SLAB
    assert result.tier_multiplier == Decimal("1.5")               # 🎚️ luxury з правила країни
    assert result.percentage == Decimal("12")
    assert result.fixed_amount == Decimal("25")


def test_live_provider_overrides_fallback(fresh_config):
    container = Container(ConfigService(), rate_provider=StaticRateProvider({"USD_THB": "36"}))
    result = container.currency_converter.convert(Decimal("100"), "USD", "TH")
    assert result.rate == Decimal("36.72")


def test_injected_store_skips_snapshot_file(fresh_config, snapshot):
    store = build_rule_store(snapshot)
    container = Container(ConfigService(), store=store)
    assert container.store is store

    result = container.bulk_operator.apply_bulk(
        BulkPricingOperation(
            operation=BulkOperationType.SET,
            target_countries=("SG",),
            adjustment_value=Decimal("9"),
        )
    )
    assert result.updated_countries == ("SG",)
    assert store.get_country_rule("SG").default_markup == Decimal("9")


@pytest.mark.parametrize("value, expected", [(None, "25"), ("30", "30"), (12.5, "12.5"), ("abc", "25")])
def test_decimal_or_default(value, expected):
    assert _decimal_or_default(value, Decimal("25")) == Decimal(expected)


def test_bootstrap_logging_reads_logging_node(fresh_config, monkeypatch):
    monkeypatch.setenv("TRAVEL_PRICING_LOG_LEVEL", "WARNING")
    logger = bootstrap_logging()
    assert logger.name == LOG_NAME
    assert logger.handlers
