"""
🧪 test_pricing_errors.py — коди помилок та payload для logger.extra.
"""

import pytest

from travel_pricing.errors import (
    ConversionRateUnavailable,
    CountryOperationError,
    InvalidBulkOperation,
    InvalidPartyComposition,
    InvalidSlabConfiguration,
    InvalidTaxConfiguration,
    MarkupRuleNotFound,
    PricingError,
    TaxRateNotFound,
    UnknownCountryError,
)


@pytest.mark.parametrize(
    "error, kind",
    [
        (MarkupRuleNotFound("TH"), "markup_rule_not_found"),
        (ConversionRateUnavailable("USD", "THB"), "conversion_rate_unavailable"),
        (UnknownCountryError("ZZ"), "unknown_country"),
        (TaxRateNotFound("IN", "hotel"), "tax_rate_not_found"),
        (InvalidSlabConfiguration("gap"), "invalid_slab_configuration"),
        (InvalidTaxConfiguration("dup"), "invalid_tax_configuration"),
        (InvalidPartyComposition("empty"), "invalid_party_composition"),
        (InvalidBulkOperation("no source"), "invalid_bulk_operation"),
    ],
)
def test_every_error_is_a_pricing_error_with_stable_kind(error, kind):
    assert isinstance(error, PricingError)
    assert error.kind == kind
    assert error.to_log_extra()["error_code"] == kind


def test_log_extra_carries_context():
    assert TaxRateNotFound("IN", "hotel").to_log_extra() == {
        "error_code": "tax_rate_not_found",
        "country_code": "IN",
        "service_type": "hotel",
    }
    assert "country_code" not in InvalidTaxConfiguration("dup").to_log_extra()


def test_country_operation_error_from_pricing_error():
    error = CountryOperationError.from_exception("ZZ", UnknownCountryError("ZZ"))
    assert error.country_code == "ZZ"
    assert error.kind == "unknown_country"
    assert "ZZ" in error.cause


def test_country_operation_error_from_plain_exception():
    error = CountryOperationError.from_exception("TH", ValueError("bad value"))
    assert error.kind == "country_operation_error"
    assert error.cause == "bad value"
