"""
🧪 test_tax_calculator.py — податки (VAT/GST), звільнення та утримання TDS.
"""

from datetime import date
from decimal import Decimal

import pytest

from travel_pricing.domain.rules.entities import TaxType
from travel_pricing.domain.tax import TDS_ITEM_TYPE, TaxCalculator
from travel_pricing.errors import InvalidTaxConfiguration, TaxRateNotFound
from travel_pricing.infrastructure.rules.snapshot_loader import build_rule_store


def _calculator(snapshot):
    return TaxCalculator(build_rule_store(snapshot))


def _tax_config(snapshot, code):
    return next(c for c in snapshot["tax_configurations"] if c["country_code"] == code)


def test_exclusive_vat(tax_calculator):
    result = tax_calculator.compute_tax(Decimal("3927.00"), "TH", "hotel", False, currency="THB")
    assert result.tax_amount == Decimal("274.89")
    assert result.total_amount == Decimal("4201.89")
    assert result.base_amount == Decimal("3927.00")
    assert result.tax_type is TaxType.VAT
    assert [item.type for item in result.tax_breakdown] == ["VAT"]
    assert result.tds_amount == Decimal("0")


@pytest.mark.parametrize("amount", ["107.00", "4201.89", "0.01", "999.99", "12345.67"])
def test_inclusive_roundtrip(tax_calculator, amount):
    result = tax_calculator.compute_tax(Decimal(amount), "TH", "hotel", True, currency="THB")
    assert result.total_amount == Decimal(amount)
    assert abs(result.base_amount + result.tax_amount - Decimal(amount)) <= Decimal("0.01")


def test_inclusive_backs_out_tax(tax_calculator):
    result = tax_calculator.compute_tax(Decimal("107.00"), "TH", "hotel", True, currency="THB")
    assert result.base_amount == Decimal("100.00")
    assert result.tax_amount == Decimal("7.00")


@pytest.mark.parametrize("code", ["JP", "GB"])
def test_no_tax_regime_or_missing_config(tax_calculator, code):
    result = tax_calculator.compute_tax(Decimal("500"), code, "hotel", False)
    assert result.tax_amount == Decimal("0")
    assert result.total_amount == Decimal("500")
    assert result.tax_breakdown == ()
    assert result.tax_type is TaxType.NONE


@pytest.mark.parametrize(
    "service, rate",
    [
        ("hotel", "12"),        # 🎯 точний збіг
        ("transport", "18"),    # ⭐ ставка is_default
    ],
)
def test_rate_resolution_order(tax_calculator, service, rate):
    result = tax_calculator.compute_tax(Decimal("1000"), "IN", service, False, currency="INR")
    assert result.tax_rate == Decimal(rate)


def test_all_rate_used_when_no_default(snapshot):
    _tax_config(snapshot, "IN")["tax_rates"] = [
        {"id": "in-hotel", "service_type": "hotel", "rate": 12},
        {"id": "in-all", "service_type": "all", "rate": 18},
    ]
    result = _calculator(snapshot).compute_tax(Decimal("1000"), "IN", "sightseeing", False)
    assert result.applied_rate_id == "in-all"


def test_missing_rate_raises(snapshot):
    _tax_config(snapshot, "IN")["tax_rates"] = [{"id": "in-hotel", "service_type": "hotel", "rate": 12}]
    with pytest.raises(TaxRateNotFound) as exc_info:
        _calculator(snapshot).compute_tax(Decimal("1000"), "IN", "transport", False)
    assert exc_info.value.service_type == "transport"
    assert exc_info.value.country_code == "IN"


def test_duplicate_defaults_rejected(snapshot):
    _tax_config(snapshot, "TH")["tax_rates"].append(
        {"id": "th-vat-2", "service_type": "all", "rate": 10, "is_default": True}
    )
    with pytest.raises(InvalidTaxConfiguration):
        _calculator(snapshot).compute_tax(Decimal("100"), "TH", "hotel", False)


def test_exemption_zeroes_tax(tax_calculator):
    result = tax_calculator.compute_tax(Decimal("20000"), "IN", "medical", False, currency="INR")
    assert result.exempt is True
    assert result.exemption_id == "in-medical"
    assert result.tax_amount == Decimal("0")
    assert result.total_amount == Decimal("20000")
    # 🏦 TDS рахується незалежно від звільнення
    assert [item.type for item in result.tax_breakdown] == [TDS_ITEM_TYPE]


def test_exemption_outside_validity_window(snapshot):
    _tax_config(snapshot, "IN")["exemptions"] = [
        {"id": "in-medical", "service_type": "medical", "valid_from": "2025-01-01", "valid_to": "2025-12-31"}
    ]
    calculator = _calculator(snapshot)
    inside = calculator.compute_tax(Decimal("100"), "IN", "medical", False, as_of=date(2025, 6, 1))
    outside = calculator.compute_tax(Decimal("100"), "IN", "medical", False, as_of=date(2026, 6, 1))
    assert inside.exempt is True
    assert outside.exempt is False
    assert outside.tax_amount == Decimal("18.00")


def test_inactive_exemption_ignored(snapshot):
    _tax_config(snapshot, "IN")["exemptions"][0]["is_active"] = False
    assert _calculator(snapshot).compute_tax(Decimal("100"), "IN", "medical", False).exempt is False


def test_tds_reported_but_not_subtracted(tax_calculator):
    result = tax_calculator.compute_tax(Decimal("20000"), "IN", "hotel", False, currency="INR")
    assert result.tax_amount == Decimal("2400.00")
    assert result.total_amount == Decimal("22400.00")
    assert result.tds_amount == Decimal("1000.00")
    assert result.net_payable == Decimal("21400.00")
    assert [item.type for item in result.tax_breakdown] == ["GST", TDS_ITEM_TYPE]


@pytest.mark.parametrize("amount", ["10000", "5000"])
def test_tds_not_applied_at_or_below_threshold(tax_calculator, amount):
    result = tax_calculator.compute_tax(Decimal(amount), "IN", "hotel", False, currency="INR")
    assert result.tds_amount == Decimal("0")
    assert len(result.tax_breakdown) == 1


def test_tds_respects_exemption_limit(snapshot):
    _tax_config(snapshot, "IN")["tds_configuration"].update(threshold=0, exemption_limit=50000)
    result = _calculator(snapshot).compute_tax(Decimal("20000"), "IN", "hotel", False)
    assert result.tds_amount == Decimal("0")


def test_tds_not_applicable(snapshot):
    _tax_config(snapshot, "IN")["tds_configuration"]["is_applicable"] = False
    assert _calculator(snapshot).compute_tax(Decimal("20000"), "IN", "hotel", False).tds_amount == Decimal("0")


def test_zero_decimal_currency_rounding(snapshot):
    _tax_config(snapshot, "TH")["tax_rates"][0]["rate"] = "7.5"
    result = _calculator(snapshot).compute_tax(Decimal("1001"), "TH", "hotel", False, currency="JPY")
    assert result.tax_amount == Decimal("75")


def test_multi_service_taxes_with_single_tds(tax_calculator):
    summary = tax_calculator.compute_service_taxes(
        [("hotel", Decimal("6000")), ("transport", Decimal("6000"))], "IN", False, currency="INR"
    )
    assert [line.result.tax_amount for line in summary.lines] == [Decimal("720.00"), Decimal("1080.00")]
    assert all(line.result.tds_amount == Decimal("0") for line in summary.lines)
    assert summary.base_amount == Decimal("12000")
    assert summary.tax_amount == Decimal("1800.00")
    assert summary.total_amount == Decimal("13800.00")
    # 🏦 Окремо кожна база нижча за поріг, разом вища
    assert summary.tds_amount == Decimal("600.00")
    assert summary.net_payable == Decimal("13200.00")
    assert [item.type for item in summary.tax_breakdown] == ["GST", "GST", TDS_ITEM_TYPE]
