# 🧾 travel_pricing/domain/tax/services.py
"""
🧾 Податковий калькулятор: GST / VAT / SALES_TAX та утримання TDS.

🔹 Ставка: точний збіг `service_type` → ставка `is_default` → ставка "all" → `TaxRateNotFound`.
🔹 Активне звільнення для послуги обнуляє основний податок (TDS рахується незалежно).
🔹 Inclusive: база = сума / (1 + r), податок = сума − база. Exclusive: податок = сума × r.
🔹 TDS — утримання з виплати: не зменшує `total_amount`, лише `net_payable`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                    # 🪵 Логування кроків розрахунку
from datetime import date                                         # 📅 Дата для перевірки звільнень
from decimal import Decimal                                       # 💵 Точні гроші
from typing import AbstractSet, Iterable, List, Optional, Tuple   # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from travel_pricing.domain.currency.rounding import (
    DEFAULT_ZERO_DECIMAL_CURRENCIES,
    HUNDRED,
    ONE,
    ZERO,
    q2,
    quantize_money,
    to_decimal,
)
from travel_pricing.domain.rules.entities import (
    ALL_SERVICES,
    TaxConfiguration,
    TaxExemption,
    TaxRate,
    TaxType,
)
from travel_pricing.domain.rules.interfaces import IRuleStore
from travel_pricing.errors import InvalidTaxConfiguration, TaxRateNotFound
from travel_pricing.shared.utils.logger import LOG_NAME

from .interfaces import (
    TDS_ITEM_TYPE,
    ServiceTaxLine,
    ServiceTaxSummary,
    TaxBreakdownItem,
    TaxCalculationResult,
)

logger = logging.getLogger(f"{LOG_NAME}.domain.tax")             # 🧾 Іменований логер калькулятора


class TaxCalculator:
    """🧾 Розраховує податок і TDS для суми у валюті ціноутворення."""

    def __init__(
        self,
        store: IRuleStore,
        *,
        zero_decimal_currencies: Optional[AbstractSet[str]] = None,
    ) -> None:
        self._store = store                                                        # 🗄️ Джерело конфігурацій
        self._zero_decimal = frozenset(
            c.upper() for c in (zero_decimal_currencies or DEFAULT_ZERO_DECIMAL_CURRENCIES)
        )

    # ================================
    # 🔢 ПУБЛІЧНИЙ API
    # ================================
    def compute_tax(
        self,
        amount: Decimal,
        country_code: str,
        service_type: str,
        is_inclusive: bool,
        *,
        currency: Optional[str] = None,
        as_of: Optional[date] = None,
    ) -> TaxCalculationResult:
        """
        🧾 Розраховує податок для однієї суми.

        Args:
            amount: Сума (з податком при `is_inclusive=True`, без — інакше).
            country_code: Країна, чия податкова конфігурація застосовується.
            service_type: Тип послуги (hotel, transport, ...).
            is_inclusive: Чи містить сума податок.
            currency: Валюта суми (визначає точність округлення), за замовчуванням 2 знаки.
            as_of: Дата для перевірки періодів дії звільнень.

        Raises:
            TaxRateNotFound: податок увімкнено, але ставка не знайдена.
            InvalidTaxConfiguration: кілька `is_default` ставок для однієї послуги.
        """
        code = (country_code or "").strip().upper()
        service = (service_type or "").strip().lower()
        config = self._store.get_tax_configuration(code)
        result = self._compute(to_decimal(amount), code, service, is_inclusive, config, currency, as_of, with_tds=True)
        logger.info(
            f"🧾 Tax computed | country={code} service={service} inclusive={is_inclusive} "
            f"base={result.base_amount} tax={result.tax_amount} rate={result.tax_rate}% "
            f"tds={result.tds_amount} total={result.total_amount} exempt={result.exempt}"
        )
        return result

    def compute_service_taxes(
        self,
        lines: Iterable[Tuple[str, Decimal]],
        country_code: str,
        is_inclusive: bool,
        *,
        currency: Optional[str] = None,
        as_of: Optional[date] = None,
    ) -> ServiceTaxSummary:
        """📊 Податки для кількох послуг однієї країни; TDS — один раз на сумарну базу."""
        code = (country_code or "").strip().upper()
        config = self._store.get_tax_configuration(code)

        service_lines: List[ServiceTaxLine] = []
        for service_type, amount in lines:
            service = (service_type or "").strip().lower()
            line_result = self._compute(
                to_decimal(amount), code, service, is_inclusive, config, currency, as_of, with_tds=False
            )
            service_lines.append(ServiceTaxLine(service_type=service, result=line_result))

        base_total = sum((line.result.base_amount for line in service_lines), ZERO)
        tax_total = sum((line.result.tax_amount for line in service_lines), ZERO)
        grand_total = sum((line.result.total_amount for line in service_lines), ZERO)
        tds_item = self._tds(base_total, config, currency)
        tds_amount = tds_item.amount if tds_item else ZERO

        breakdown: List[TaxBreakdownItem] = [
            item for line in service_lines for item in line.result.tax_breakdown
        ]
        if tds_item is not None:
            breakdown.append(tds_item)

        logger.info(
            f"📊 Multi-service tax | country={code} lines={len(service_lines)} base={base_total} "
            f"tax={tax_total} tds={tds_amount} total={grand_total}"
        )
        return ServiceTaxSummary(
            lines=tuple(service_lines),
            base_amount=base_total,
            tax_amount=tax_total,
            total_amount=grand_total,
            tds_amount=tds_amount,
            net_payable=grand_total - tds_amount,
            tax_breakdown=tuple(breakdown),
            currency=currency,
        )

    # ================================
    # 🧮 ОБЧИСЛЕННЯ
    # ================================
    def _round(self, amount: Decimal, currency: Optional[str]) -> Decimal:
        if currency:
            return quantize_money(amount, currency, self._zero_decimal)
        return q2(amount)

    def _compute(
        self,
        amount: Decimal,
        country_code: str,
        service_type: str,
        is_inclusive: bool,
        config: Optional[TaxConfiguration],
        currency: Optional[str],
        as_of: Optional[date],
        *,
        with_tds: bool,
    ) -> TaxCalculationResult:
        if config is None or config.tax_type is TaxType.NONE:
            logger.debug(f"🚫 No tax regime | country={country_code}")
            return TaxCalculationResult(
                base_amount=amount,
                tax_amount=ZERO,
                total_amount=amount,
                tds_amount=ZERO,
                net_payable=amount,
                tax_rate=ZERO,
                tax_type=TaxType.NONE,
                is_inclusive=is_inclusive,
                currency=currency,
            )

        tax_rate = self._resolve_rate(config, service_type)
        exemption = self._find_exemption(config, service_type, as_of)
        rate = ZERO if exemption is not None else tax_rate.rate

        # --- 🧮 Основний податок ---
        if is_inclusive:
            base_amount = self._round(amount / (ONE + rate / HUNDRED), currency)
            tax_amount = amount - base_amount
            total_amount = amount
        else:
            base_amount = amount
            tax_amount = self._round(amount * rate / HUNDRED, currency)
            total_amount = amount + tax_amount

        breakdown: List[TaxBreakdownItem] = []
        if exemption is None:
            breakdown.append(
                TaxBreakdownItem(
                    type=config.tax_type.value,
                    rate=rate,
                    amount=tax_amount,
                    description=tax_rate.description or f"{config.tax_type.value} {rate}%",
                )
            )
        else:
            logger.info(f"🚫 Tax exemption applied | country={country_code} service={service_type} id={exemption.id}")

        # --- 🏦 TDS ---
        tds_item = self._tds(base_amount, config, currency) if with_tds else None
        tds_amount = tds_item.amount if tds_item else ZERO
        if tds_item is not None:
            breakdown.append(tds_item)

        return TaxCalculationResult(
            base_amount=base_amount,
            tax_amount=tax_amount,
            total_amount=total_amount,
            tds_amount=tds_amount,
            net_payable=total_amount - tds_amount,
            tax_rate=rate,
            tax_type=config.tax_type,
            is_inclusive=is_inclusive,
            tax_breakdown=tuple(breakdown),
            applied_rate_id=tax_rate.id,
            exempt=exemption is not None,
            exemption_id=exemption.id if exemption else None,
            currency=currency,
        )

    def _tds(
        self,
        base_amount: Decimal,
        config: Optional[TaxConfiguration],
        currency: Optional[str],
    ) -> Optional[TaxBreakdownItem]:
        """🏦 Компонент TDS або None, якщо утримання не застосовується."""
        tds = config.tds_configuration if config is not None else None
        if tds is None or not tds.is_applicable:
            return None
        if base_amount <= tds.threshold or base_amount <= tds.exemption_limit:
            logger.debug(
                f"🏦 TDS below limits | base={base_amount} threshold={tds.threshold} "
                f"exemption_limit={tds.exemption_limit}"
            )
            return None
        amount = self._round(base_amount * tds.rate / HUNDRED, currency)
        return TaxBreakdownItem(
            type=TDS_ITEM_TYPE,
            rate=tds.rate,
            amount=amount,
            description=f"TDS {tds.rate}% (withheld from payout)",
        )

    # ================================
    # 🔍 ВИБІР СТАВКИ ТА ЗВІЛЬНЕНЬ
    # ================================
    @staticmethod
    def _resolve_rate(config: TaxConfiguration, service_type: str) -> TaxRate:
        seen_defaults = set()
        for rate in config.tax_rates:
            if not rate.is_default:
                continue
            if rate.service_type in seen_defaults:
                logger.error(
                    f"❌ Duplicate default tax rate | country={config.country_code} service={rate.service_type}"
                )
                raise InvalidTaxConfiguration(
                    f"More than one default tax rate for service '{rate.service_type}'",
                    country_code=config.country_code,
                )
            seen_defaults.add(rate.service_type)

        exact = [r for r in config.tax_rates if r.service_type == service_type]
        if exact:
            return next((r for r in exact if r.is_default), exact[0])

        default = next((r for r in config.tax_rates if r.is_default), None)
        if default is not None:
            return default

        catch_all = next((r for r in config.tax_rates if r.service_type == ALL_SERVICES), None)
        if catch_all is not None:
            return catch_all

        logger.error(f"❌ Tax rate not found | country={config.country_code} service={service_type}")
        raise TaxRateNotFound(config.country_code, service_type)

    @staticmethod
    def _find_exemption(
        config: TaxConfiguration,
        service_type: str,
        as_of: Optional[date],
    ) -> Optional[TaxExemption]:
        return next((e for e in config.exemptions if e.matches(service_type, as_of)), None)
