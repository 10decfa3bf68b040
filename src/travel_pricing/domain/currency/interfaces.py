# 💱 travel_pricing/domain/currency/interfaces.py
"""
🧩 interfaces.py — Контракти домену валют.

🔹 `Money` — сума + код валюти (Decimal).
🔹 `IRateProvider` — зовнішнє джерело «живих» курсів (може бути недоступним).
🔹 `ConversionResult` — аудитний результат конвертації з маржею.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, unique
from typing import NewType, Optional

CurrencyCode = NewType("CurrencyCode", str)


# ================================
# 🏛️ СТРУКТУРИ ДАНИХ (DTO)
# ================================
@dataclass(frozen=True)
class Money:
    """💵 Грошова сума у конкретній валюті."""
    amount: Decimal
    currency: CurrencyCode


@unique
class RateSource(str, Enum):
    """🏷️ Звідки взято базовий курс."""
    IDENTITY = "identity"      # 🔁 Валюти збігаються
    LIVE = "live"              # 🌐 Провайдер курсів
    FALLBACK = "fallback"      # 🛟 CurrencyConversionSettings.fallback_rates


@dataclass(frozen=True)
class ConversionResult:
    """💱 Результат конвертації: сума, ефективний курс і застосована маржа."""
    converted_amount: Decimal
    rate: Decimal                      # 📈 Ефективний курс (з маржею)
    base_rate: Decimal                 # 📉 Ринковий курс до маржі
    margin_applied: Decimal            # 💸 Маржа у відсотках (2 → 2 %)
    from_currency: CurrencyCode
    to_currency: CurrencyCode
    source: RateSource


# ================================
# 🌐 ПРОВАЙДЕР КУРСІВ
# ================================
class RateProviderError(Exception):
    """🌐 Провайдер не зміг віддати курс (мережа, формат, ліміти)."""


class IRateProvider(ABC):
    """
    🌐 Контракт зовнішнього джерела курсів.
    Повертає курс `1 from = rate to` або None, якщо пари немає.
    Таймаут (TimeoutError) і RateProviderError трактуються як «курс недоступний».
    """

    @abstractmethod
    def get_rate(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        """Повертає ринковий курс пари або None."""


# ================================
# 💱 КОНВЕРТЕР
# ================================
class ICurrencyConverter(ABC):
    """💱 Контракт конвертера, яким користується білдер розбивки."""

    @abstractmethod
    def convert(
        self,
        amount: Decimal,
        from_currency: str,
        to_currency_or_country: str,
        *,
        country_code: Optional[str] = None,
    ) -> ConversionResult:
        """Конвертує суму з маржею; піднімає помилку, якщо курсу немає."""
