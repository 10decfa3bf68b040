# 📦 travel_pricing/domain/pricing/services.py
"""
📦 Побудова аудитної цінової розбивки для однієї позиції пропозиції.

🔹 Порядок кроків фіксований: маркап (на собівартість) → конвертація → податок
   (на сконвертовану суму з маркапом) → розподіл на осіб.
🔹 Будь-яка помилка резолвера / конвертера / калькулятора летить до викликача без змін.
🔹 Обидва режими розподілу сходяться до одного підсумку; різниця округлення
   фіксується явно у `rounding_difference`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                # 🪵 Логування кроків розрахунку
from decimal import Decimal                                   # 💵 Точні гроші (без float)
from typing import AbstractSet, Dict, Iterable, List, Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from travel_pricing.domain.currency.interfaces import CurrencyCode, ICurrencyConverter, Money
from travel_pricing.domain.currency.rounding import (
    DEFAULT_ZERO_DECIMAL_CURRENCIES,
    HUNDRED,
    ONE,
    ZERO,
    minor_unit,
    quantize_money,
    to_decimal,
)
from travel_pricing.domain.markup.resolver import MarkupResolver, apply_markup
from travel_pricing.domain.tax.services import TaxCalculator
from travel_pricing.errors import InvalidPartyComposition
from travel_pricing.shared.utils.logger import LOG_NAME       # 🏷️ Базове імʼя логера

from .interfaces import (
    BreakdownOptions,
    LineItem,
    PartyComposition,
    PerPersonBreakdown,
    PricingBreakdown,
    QuoteSummary,
    SplitMode,
)

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing")      # 🧾 Іменований логер сервісу

DEFAULT_CHILD_DISCOUNT_PERCENT = Decimal("25")
DEFAULT_INFANT_DISCOUNT_PERCENT = Decimal("100")


# ================================
# 🏛️ ГОЛОВНИЙ ДОМЕННИЙ СЕРВІС
# ================================
class PricingBreakdownBuilder:
    """💸 Оркеструє резолвер маркапу, конвертер та податковий калькулятор."""

    def __init__(
        self,
        resolver: MarkupResolver,
        converter: ICurrencyConverter,
        tax_calculator: TaxCalculator,
        *,
        child_discount_percent: Decimal = DEFAULT_CHILD_DISCOUNT_PERCENT,
        infant_discount_percent: Decimal = DEFAULT_INFANT_DISCOUNT_PERCENT,
        zero_decimal_currencies: Optional[AbstractSet[str]] = None,
    ) -> None:
        """
        ⚙️ Привʼязує білдер до трьох розрахункових компонентів.

        Args:
            resolver: Резолвер ефективного маркапу.
            converter: Конвертер валют з маржею.
            tax_calculator: Калькулятор податків і TDS.
            child_discount_percent: Знижка дитини від ціни дорослого (equal-cost режим).
            infant_discount_percent: Знижка немовляти (100 → безкоштовно).
        """
        self._resolver = resolver
        self._converter = converter
        self._tax = tax_calculator
        self._child_discount = to_decimal(child_discount_percent)
        self._infant_discount = to_decimal(infant_discount_percent)
        self._zero_decimal = frozenset(
            c.upper() for c in (zero_decimal_currencies or DEFAULT_ZERO_DECIMAL_CURRENCIES)
        )

    # ================================
    # 🔢 ПУБЛІЧНИЙ API РОЗРАХУНКУ
    # ================================
    def build_breakdown(
        self,
        line_item: LineItem,
        party: PartyComposition,
        options: Optional[BreakdownOptions] = None,
    ) -> PricingBreakdown:
        """
        🚀 Рахує повну розбивку ціни позиції.

        Raises:
            InvalidPartyComposition: негативні кількості, нуль платних одиниць,
                або explicit-режим без цін на особу.
            MarkupRuleNotFound, InvalidSlabConfiguration, ConversionRateUnavailable,
            UnknownCountryError, TaxRateNotFound, InvalidTaxConfiguration: без змін від компонентів.
        """
        opts = options or BreakdownOptions()
        self._validate_party(party, line_item.country_code)
        base_amount = self._base_amount(line_item, party)
        supplier_ccy = line_item.supplier_currency

        logger.info(
            f"💸 Breakdown started | country={line_item.country_code} service={line_item.service_type} "
            f"base={base_amount} {supplier_ccy} party={party.adults}/{party.children}/{party.infants} "
            f"inclusive={opts.is_inclusive} equal_cost={opts.equal_cost_mode}"
        )

        # --- 📈 Крок 1: маркап на собівартість ---
        markup = self._resolver.resolve_markup(
            line_item.country_code, line_item.service_type, base_amount, line_item.as_of
        )
        fixed_units = party.paying_pax if opts.fixed_markup_per_person else 1
        marked_up = quantize_money(
            apply_markup(base_amount, markup, fixed_units=fixed_units), supplier_ccy, self._zero_decimal
        )
        markup_amount = marked_up - base_amount
        logger.info(
            f"📈 Markup applied | rule={markup.applied_rule_id} pct={markup.percentage}% "
            f"fixed={markup.fixed_amount}×{fixed_units} → {marked_up} {supplier_ccy}"
        )

        # --- 💱 Крок 2: конвертація ---
        conversion = self._converter.convert(
            marked_up,
            supplier_ccy,
            line_item.target or line_item.country_code,
            country_code=line_item.country_code,
        )
        currency = str(conversion.to_currency)

        # --- 🧾 Крок 3: податок ---
        tax = self._tax.compute_tax(
            conversion.converted_amount,
            line_item.country_code,
            line_item.service_type,
            opts.is_inclusive,
            currency=currency,
            as_of=line_item.as_of,
        )
        final_price = tax.total_amount

        # --- 👤 Крок 4: розподіл на осіб ---
        if opts.equal_cost_mode:
            per_person = self._split_equal_cost(final_price, party, opts, currency, line_item.country_code)
        else:
            per_person = self._split_explicit(final_price, party, line_item, currency)

        logger.info(
            f"✅ Breakdown ready | final={final_price} {currency} tax={tax.tax_amount} tds={tax.tds_amount} "
            f"adult={per_person.adult_price} child={per_person.child_price} infant={per_person.infant_price} "
            f"rounding_diff={per_person.rounding_difference}"
        )
        return PricingBreakdown(
            country_code=line_item.country_code,
            service_type=line_item.service_type,
            base_price=base_amount,
            supplier_currency=supplier_ccy,
            markup=markup,
            markup_amount=markup_amount,
            marked_up_amount=marked_up,
            conversion=conversion,
            converted_amount=conversion.converted_amount,
            tax=tax,
            tax_amount=tax.tax_amount,
            tds_amount=tax.tds_amount,
            final_price=final_price,
            currency=currency,
            per_person=per_person,
        )

    # ================================
    # 🧰 ВАЛІДАЦІЯ ТА БАЗА
    # ================================
    @staticmethod
    def _validate_party(party: PartyComposition, country_code: str) -> None:
        if min(party.adults, party.children, party.infants) < 0:
            raise InvalidPartyComposition(
                f"Negative party counts: adults={party.adults} children={party.children} infants={party.infants}",
                country_code=country_code,
            )
        if party.headcount == 0:
            raise InvalidPartyComposition("Party has no travellers", country_code=country_code)

    def _unit_costs(self, line_item: LineItem, party: PartyComposition) -> Tuple[Decimal, Decimal, Decimal]:
        """👤 Собівартість на особу (дорослий, дитина, немовля) для explicit-режиму."""
        if not line_item.has_unit_costs:
            raise InvalidPartyComposition(
                "Explicit split requires per-person unit costs", country_code=line_item.country_code
            )
        child = line_item.child_unit_cost
        infant = line_item.infant_unit_cost
        if child is None and party.children > 0:
            raise InvalidPartyComposition("Missing child unit cost", country_code=line_item.country_code)
        if infant is None and party.infants > 0:
            raise InvalidPartyComposition("Missing infant unit cost", country_code=line_item.country_code)
        return line_item.adult_unit_cost, child or ZERO, infant or ZERO

    def _base_amount(self, line_item: LineItem, party: PartyComposition) -> Decimal:
        if not line_item.has_unit_costs:
            if line_item.base_amount is None:
                raise InvalidPartyComposition(
                    "Line item has neither base amount nor unit costs", country_code=line_item.country_code
                )
            return line_item.base_amount

        adult, child, infant = self._unit_costs(line_item, party)
        units_total = adult * party.adults + child * party.children + infant * party.infants
        if line_item.base_amount is not None:
            tolerance = minor_unit(line_item.supplier_currency, self._zero_decimal)
            if abs(line_item.base_amount - units_total) > tolerance:
                raise InvalidPartyComposition(
                    f"Base amount {line_item.base_amount} disagrees with unit costs total {units_total}",
                    country_code=line_item.country_code,
                )
            return line_item.base_amount
        return units_total

    # ================================
    # 👤 РОЗПОДІЛ НА ОСІБ
    # ================================
    def _split_equal_cost(
        self,
        final_price: Decimal,
        party: PartyComposition,
        opts: BreakdownOptions,
        currency: str,
        country_code: str,
    ) -> PerPersonBreakdown:
        child_discount = self._child_discount if opts.child_discount_percent is None else to_decimal(opts.child_discount_percent)
        infant_discount = self._infant_discount if opts.infant_discount_percent is None else to_decimal(opts.infant_discount_percent)
        child_share = ONE - child_discount / HUNDRED
        infant_share = ONE - infant_discount / HUNDRED

        weighted_units = party.adults + party.children * child_share + party.infants * infant_share
        if weighted_units <= ZERO:
            raise InvalidPartyComposition(
                f"Party has no paying units (weighted={weighted_units})", country_code=country_code
            )

        unit_price = final_price / weighted_units
        return self._per_person(
            SplitMode.EQUAL_COST,
            final_price,
            party,
            currency,
            unit_price,
            unit_price * child_share,
            unit_price * infant_share,
        )

    def _split_explicit(
        self,
        final_price: Decimal,
        party: PartyComposition,
        line_item: LineItem,
        currency: str,
    ) -> PerPersonBreakdown:
        adult, child, infant = self._unit_costs(line_item, party)
        units_total = adult * party.adults + child * party.children + infant * party.infants
        if units_total <= ZERO:
            raise InvalidPartyComposition(
                "Unit costs sum to zero for the party", country_code=line_item.country_code
            )
        factor = final_price / units_total                        # 🔁 Собівартість → фінальна ціна
        return self._per_person(
            SplitMode.EXPLICIT,
            final_price,
            party,
            currency,
            adult * factor,
            child * factor,
            infant * factor,
        )

    def _per_person(
        self,
        mode: SplitMode,
        final_price: Decimal,
        party: PartyComposition,
        currency: str,
        adult_raw: Decimal,
        child_raw: Decimal,
        infant_raw: Decimal,
    ) -> PerPersonBreakdown:
        adult_price = quantize_money(adult_raw, currency, self._zero_decimal)
        child_price = quantize_money(child_raw, currency, self._zero_decimal)
        infant_price = quantize_money(infant_raw, currency, self._zero_decimal)
        total = adult_price * party.adults + child_price * party.children + infant_price * party.infants
        return PerPersonBreakdown(
            mode=mode,
            adults=party.adults,
            children=party.children,
            infants=party.infants,
            adult_price=adult_price,
            child_price=child_price,
            infant_price=infant_price,
            total=total,
            rounding_difference=final_price - total,
        )


# ================================
# 📊 АГРЕГАЦІЯ ПРОПОЗИЦІЇ
# ================================
def aggregate_breakdowns(breakdowns: Iterable[PricingBreakdown]) -> QuoteSummary:
    """
    📊 Сумує позиції пропозиції в одній валюті.

    Raises:
        ValueError: порожній список або позиції у різних валютах.
    """
    items: List[PricingBreakdown] = list(breakdowns)
    if not items:
        raise ValueError("Cannot aggregate an empty list of breakdowns")
    currencies = {item.currency for item in items}
    if len(currencies) > 1:
        raise ValueError(f"Cannot aggregate breakdowns in different currencies: {sorted(currencies)}")

    # 🧺 Собівартість і маркап сумуються окремо по кожній валюті постачальника
    base_by_ccy: Dict[str, Decimal] = {}
    markup_by_ccy: Dict[str, Decimal] = {}
    for item in items:
        ccy = item.supplier_currency
        base_by_ccy[ccy] = base_by_ccy.get(ccy, ZERO) + item.base_price
        markup_by_ccy[ccy] = markup_by_ccy.get(ccy, ZERO) + item.markup_amount

    summary = QuoteSummary(
        currency=items[0].currency,
        line_count=len(items),
        converted_total=sum((i.converted_amount for i in items), ZERO),
        tax_total=sum((i.tax_amount for i in items), ZERO),
        tds_total=sum((i.tds_amount for i in items), ZERO),
        final_total=sum((i.final_price for i in items), ZERO),
        net_payable=sum((i.net_payable for i in items), ZERO),
        base_totals=tuple(Money(amount=v, currency=CurrencyCode(k)) for k, v in base_by_ccy.items()),
        markup_totals=tuple(Money(amount=v, currency=CurrencyCode(k)) for k, v in markup_by_ccy.items()),
        applied_rule_ids=tuple(i.applied_rule_id for i in items),
    )
    logger.info(f"📊 Quote aggregated | lines={summary.line_count} total={summary.final_total} {summary.currency}")
    return summary
