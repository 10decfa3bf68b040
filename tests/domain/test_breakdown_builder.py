"""
🧪 test_breakdown_builder.py — повний конвеєр: маркап → конвертація → податок → розподіл на осіб.

Перевіряє:
- Еталонний сценарій $100 → 4201.89 THB
- Узгодженість equal-cost та explicit режимів
- Прокидання помилок компонентів без «тихих» дефолтів
- Агрегацію позицій пропозиції
"""

from datetime import date
from decimal import Decimal

import pytest

from travel_pricing.domain.currency.interfaces import CurrencyCode, Money
from travel_pricing.domain.markup import MarkupResolver
from travel_pricing.domain.markup.interfaces import MarkupSource
from travel_pricing.domain.pricing import (
    BreakdownOptions,
    LineItem,
    PartyComposition,
    PricingBreakdownBuilder,
    SplitMode,
    aggregate_breakdowns,
)
from travel_pricing.domain.tax import TaxCalculator
from travel_pricing.errors import ConversionRateUnavailable, InvalidPartyComposition, MarkupRuleNotFound
from travel_pricing.infrastructure.currency import CurrencyConverter
from travel_pricing.infrastructure.rules.snapshot_loader import build_rule_store

AS_OF = date(2025, 3, 1)


def _item(country="TH", base="100", **kwargs):
    return LineItem(
        country_code=country,
        service_type=kwargs.pop("service_type", "hotel"),
        supplier_currency=kwargs.pop("supplier_currency", "USD"),
        base_amount=Decimal(base) if base is not None else None,
        as_of=AS_OF,
        **kwargs,
    )


def test_reference_scenario_thailand(builder):
    breakdown = builder.build_breakdown(_item(), PartyComposition(adults=1))

    assert breakdown.base_price == Decimal("100")
    assert breakdown.markup.percentage == Decimal("10")
    assert breakdown.markup.source is MarkupSource.ENHANCED_BASE
    assert breakdown.applied_rule_id == "th-enhanced"
    assert breakdown.marked_up_amount == Decimal("110.00")
    assert breakdown.markup_amount == Decimal("10.00")
    assert breakdown.conversion.rate == Decimal("35.70")
    assert breakdown.converted_amount == Decimal("3927.00")
    assert breakdown.tax_amount == Decimal("274.89")
    assert breakdown.tds_amount == Decimal("0")
    assert breakdown.final_price == Decimal("4201.89")
    assert breakdown.currency == "THB"
    assert breakdown.per_person_price == Decimal("4201.89")
    assert breakdown.per_person.rounding_difference == Decimal("0")
    assert [item.type for item in breakdown.tax_breakdown] == ["VAT"]


def test_equal_cost_split_with_child_and_infant(builder):
    party = PartyComposition(adults=2, children=1, infants=1)
    per_person = builder.build_breakdown(_item(), party).per_person

    assert per_person.mode is SplitMode.EQUAL_COST
    assert per_person.adult_price == Decimal("1527.96")
    assert per_person.child_price == Decimal("1145.97")
    assert per_person.infant_price == Decimal("0.00")
    assert per_person.total == Decimal("4201.89")
    assert per_person.rounding_difference == Decimal("0")


def test_equal_cost_records_rounding_difference(builder):
    breakdown = builder.build_breakdown(_item(), PartyComposition(adults=6))
    assert breakdown.per_person.adult_price == Decimal("700.32")
    assert breakdown.per_person.total == Decimal("4201.92")
    assert breakdown.per_person.rounding_difference == Decimal("-0.03")
    assert breakdown.per_person.weighted_total == breakdown.final_price


def test_child_discount_override(builder):
    options = BreakdownOptions(child_discount_percent=Decimal("50"))
    per_person = builder.build_breakdown(_item(), PartyComposition(adults=2, children=1), options).per_person
    assert per_person.adult_price == Decimal("1680.76")
    assert per_person.child_price == Decimal("840.38")


def test_explicit_unit_prices(builder):
    item = _item(base=None, adult_unit_cost=Decimal("40"), child_unit_cost=Decimal("20"))
    party = PartyComposition(adults=2, children=1)
    breakdown = builder.build_breakdown(item, party, BreakdownOptions(equal_cost_mode=False))

    assert breakdown.base_price == Decimal("100")
    assert breakdown.final_price == Decimal("4201.89")
    assert breakdown.per_person.mode is SplitMode.EXPLICIT
    assert breakdown.per_person.adult_price == Decimal("1680.76")
    assert breakdown.per_person.child_price == Decimal("840.38")
    assert breakdown.per_person.rounding_difference == Decimal("-0.01")


def test_split_modes_agree_on_total(builder):
    party = PartyComposition(adults=2, children=1)
    item = _item(adult_unit_cost=Decimal("40"), child_unit_cost=Decimal("20"))
    equal = builder.build_breakdown(item, party, BreakdownOptions(equal_cost_mode=True))
    explicit = builder.build_breakdown(item, party, BreakdownOptions(equal_cost_mode=False))

    assert equal.final_price == explicit.final_price
    tolerance = Decimal("0.01") * party.headcount
    assert abs(equal.per_person.total - explicit.per_person.total) <= tolerance


def test_inclusive_tax_keeps_converted_amount_as_total(builder):
    breakdown = builder.build_breakdown(_item(), PartyComposition(), BreakdownOptions(is_inclusive=True))
    assert breakdown.final_price == Decimal("3927.00")
    assert breakdown.tax.base_amount == Decimal("3670.09")
    assert breakdown.tax_amount == Decimal("256.91")


def test_fixed_markup_per_person(snapshot):
    snapshot["country_rules"][1].update(markup_type="fixed", default_markup=25)
    store = build_rule_store(snapshot)
    builder = PricingBreakdownBuilder(MarkupResolver(store), CurrencyConverter(store), TaxCalculator(store))
    party = PartyComposition(adults=2, children=1, infants=1)

    per_booking = builder.build_breakdown(_item("IN"), party)
    per_person = builder.build_breakdown(_item("IN"), party, BreakdownOptions(fixed_markup_per_person=True))

    assert per_booking.markup_amount == Decimal("25.00")
    assert per_person.markup_amount == Decimal("75.00")
    assert per_person.marked_up_amount == Decimal("175.00")


# ================================
# 🚨 ПОМИЛКИ
# ================================
def test_missing_markup_rule_propagates(builder):
    with pytest.raises(MarkupRuleNotFound):
        builder.build_breakdown(_item("GB"), PartyComposition())


def test_missing_rate_propagates(builder):
    # 🗺️ SG має маркап із шаблону, але курсу USD→SGD немає
    with pytest.raises(ConversionRateUnavailable):
        builder.build_breakdown(_item("SG"), PartyComposition())


@pytest.mark.parametrize(
    "party",
    [
        PartyComposition(adults=-1),
        PartyComposition(adults=0, children=0, infants=0),
        PartyComposition(adults=0, infants=2),      # 👶 лише безкоштовні немовлята
    ],
)
def test_invalid_party(builder, party):
    with pytest.raises(InvalidPartyComposition):
        builder.build_breakdown(_item(), party)


def test_explicit_mode_requires_unit_costs(builder):
    with pytest.raises(InvalidPartyComposition):
        builder.build_breakdown(_item(), PartyComposition(), BreakdownOptions(equal_cost_mode=False))


def test_explicit_mode_requires_child_cost_for_children(builder):
    item = _item(base=None, adult_unit_cost=Decimal("40"))
    with pytest.raises(InvalidPartyComposition):
        builder.build_breakdown(item, PartyComposition(adults=1, children=1), BreakdownOptions(equal_cost_mode=False))


def test_base_amount_must_match_unit_costs(builder):
    item = _item(base="150", adult_unit_cost=Decimal("40"))
    with pytest.raises(InvalidPartyComposition):
        builder.build_breakdown(item, PartyComposition(adults=2))


# ================================
# 📊 АГРЕГАЦІЯ
# ================================
def test_aggregate_quote(builder):
    first = builder.build_breakdown(_item(), PartyComposition())
    second = builder.build_breakdown(_item(service_type="transport"), PartyComposition())
    summary = aggregate_breakdowns([first, second])

    assert summary.currency == "THB"
    assert summary.line_count == 2
    assert summary.converted_total == Decimal("7854.00")
    assert summary.tax_total == Decimal("549.78")
    assert summary.final_total == Decimal("8403.78")
    assert summary.net_payable == Decimal("8403.78")
    assert summary.applied_rule_ids == ("th-enhanced", "th-enhanced")
    assert summary.base_totals == (Money(amount=Decimal("200"), currency=CurrencyCode("USD")),)
    assert summary.markup_totals == (Money(amount=Decimal("20.00"), currency=CurrencyCode("USD")),)


def test_aggregate_keeps_supplier_totals_per_currency(builder):
    usd_line = builder.build_breakdown(_item(), PartyComposition())
    eur_line = builder.build_breakdown(_item(base="50", supplier_currency="EUR"), PartyComposition())
    summary = aggregate_breakdowns([usd_line, eur_line])

    assert summary.currency == "THB"
    assert {m.currency: m.amount for m in summary.base_totals} == {"USD": Decimal("100"), "EUR": Decimal("50")}
    assert {m.currency: m.amount for m in summary.markup_totals} == {"USD": Decimal("10.00"), "EUR": Decimal("5.00")}


def test_aggregate_rejects_mixed_currencies(builder):
    thailand = builder.build_breakdown(_item(), PartyComposition())
    india = builder.build_breakdown(_item("IN"), PartyComposition())
    with pytest.raises(ValueError):
        aggregate_breakdowns([thailand, india])


def test_aggregate_rejects_empty():
    with pytest.raises(ValueError):
        aggregate_breakdowns([])
