# 🧾 travel_pricing/domain/tax/interfaces.py
"""
🧩 interfaces.py — DTO податкового калькулятора.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from travel_pricing.domain.rules.entities import TaxType

TDS_ITEM_TYPE = "TDS"


@dataclass(frozen=True)
class TaxBreakdownItem:
    """🧾 Один компонент податку: основний податок або TDS."""
    type: str
    rate: Decimal
    amount: Decimal
    description: str = ""


@dataclass(frozen=True)
class TaxCalculationResult:
    """
    🧾 Результат розрахунку податку для однієї суми.

    total_amount — сума до сплати клієнтом (TDS її не зменшує);
    net_payable — total_amount − tds_amount, для звітності про виплату.
    """
    base_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    tds_amount: Decimal
    net_payable: Decimal
    tax_rate: Decimal
    tax_type: TaxType
    is_inclusive: bool
    tax_breakdown: Tuple[TaxBreakdownItem, ...] = ()
    applied_rate_id: Optional[str] = None
    exempt: bool = False
    exemption_id: Optional[str] = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class ServiceTaxLine:
    """🧾 Податок однієї послуги у складі мультисервісного розрахунку."""
    service_type: str
    result: TaxCalculationResult


@dataclass(frozen=True)
class ServiceTaxSummary:
    """📊 Агрегат податків кількох послуг; TDS рахується один раз на сумарну базу."""
    lines: Tuple[ServiceTaxLine, ...]
    base_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    tds_amount: Decimal
    net_payable: Decimal
    tax_breakdown: Tuple[TaxBreakdownItem, ...] = ()
    currency: Optional[str] = None
