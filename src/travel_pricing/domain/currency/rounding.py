# ➗ travel_pricing/domain/currency/rounding.py
"""
➗ Утиліти Decimal-округлення для грошових сум.

🔹 `to_decimal` — безпечне приведення (через str, без артефактів float).
🔹 `quantize_money` — ROUND_HALF_UP до мінорних одиниць валюти (JPY та ін. → 0 знаків).
🔹 `q2` / `percent` — короткі хелпери для проміжних розрахунків.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import AbstractSet, Optional

# ================================
# 📏 ВАЛЮТИ БЕЗ ДРОБОВИХ ОДИНИЦЬ
# ================================
DEFAULT_ZERO_DECIMAL_CURRENCIES: frozenset = frozenset(
    {
        "JPY", "KRW", "VND", "CLP", "ISK", "UGX", "XAF", "XOF",
        "PYG", "KMF", "RWF", "GNF", "DJF", "VUV", "XPF", "BIF",
    }
)

HUNDRED = Decimal("100")
ZERO = Decimal("0")
ONE = Decimal("1")


def to_decimal(value: object) -> Decimal:
    """🧮 Приводить значення до Decimal через рядкове представлення."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Невалідне числове значення: {value!r}")
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, AttributeError, ValueError) as exc:
        raise ValueError(f"Невалідне числове значення: {value!r}") from exc


def currency_exponent(currency: str, zero_decimal: Optional[AbstractSet[str]] = None) -> int:
    """🔢 Кількість десяткових знаків валюти (2 або 0)."""
    table = DEFAULT_ZERO_DECIMAL_CURRENCIES if zero_decimal is None else zero_decimal
    return 0 if (currency or "").upper() in table else 2


def minor_unit(currency: str, zero_decimal: Optional[AbstractSet[str]] = None) -> Decimal:
    """📐 Квант валюти: 0.01 або 1."""
    return Decimal(1).scaleb(-currency_exponent(currency, zero_decimal))


def quantize_money(amount: Decimal, currency: str, zero_decimal: Optional[AbstractSet[str]] = None) -> Decimal:
    """💵 Округлює суму до мінорних одиниць валюти (half-up)."""
    return to_decimal(amount).quantize(minor_unit(currency, zero_decimal), rounding=ROUND_HALF_UP)


def q2(amount: object) -> Decimal:
    """🔁 Округлення до 2 знаків (half-up) для валюто-незалежних проміжних сум."""
    return to_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def percent(amount: Decimal, pct: Decimal) -> Decimal:
    """📊 pct відсотків від amount (без округлення)."""
    return to_decimal(amount) * to_decimal(pct) / HUNDRED
