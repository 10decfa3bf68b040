# 🚨 travel_pricing/errors/pricing_errors.py
"""
🚨 Ієрархія помилок рушія ціноутворення.

🔹 Кожна помилка має стабільний код `kind` та метод `to_log_extra()` для logger.extra.
🔹 Грошові помилки ніколи не замінюються «тихими» дефолтами — вони летять до викликача.
🔹 `CountryOperationError` — не виняток, а значення: збирається у результат bulk-операції.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging														# 🧾 Логування створення помилок
from dataclasses import dataclass									# 🧱 Value-object для bulk-помилок
from typing import Dict, Optional									# 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from travel_pricing.shared.utils.logger import LOG_NAME				# 🏷️ Базове імʼя логера


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors")					# 🧾 Локальний логер


# ================================
# 🧠 БАЗОВА ПОМИЛКА
# ================================
class PricingError(Exception):
    """🧠 Базова помилка конфігурації/розрахунку ціни."""

    kind: str = "pricing_error"										# 🏷️ Стабільний код помилки

    def __init__(self, message: str, *, country_code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message										# 🗒️ Людське пояснення
        self.country_code = country_code							# 🌍 Країна, де стався збій

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Формує словник для logger.extra."""
        extra: Dict[str, object] = {"error_code": self.kind}
        if self.country_code:
            extra["country_code"] = self.country_code
        return extra


# ================================
# 📈 МАРКАП
# ================================
class MarkupRuleNotFound(PricingError):
    """📈 Для країни немає жодного правила маркапу (enhanced / country / regional)."""

    kind = "markup_rule_not_found"

    def __init__(self, country_code: str) -> None:
        super().__init__(f"No markup rule configured for country '{country_code}'", country_code=country_code)


class InvalidSlabConfiguration(PricingError):
    """🪜 Слеби перетинаються, мають розриви або некоректні межі."""

    kind = "invalid_slab_configuration"

    def __init__(self, message: str, *, country_code: Optional[str] = None, rule_id: Optional[str] = None) -> None:
        super().__init__(message, country_code=country_code)
        self.rule_id = rule_id										# 🆔 Правило з битими слебами

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.rule_id:
            extra["rule_id"] = self.rule_id
        return extra


# ================================
# 💱 ВАЛЮТА
# ================================
class ConversionRateUnavailable(PricingError):
    """💱 Немає ні живого курсу, ні fallback-курсу для пари валют."""

    kind = "conversion_rate_unavailable"

    def __init__(self, from_currency: str, to_currency: str) -> None:
        super().__init__(f"No conversion rate available for {from_currency} → {to_currency}")
        self.from_currency = from_currency
        self.to_currency = to_currency

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra.update({"from_currency": self.from_currency, "to_currency": self.to_currency})
        return extra


class UnknownCountryError(PricingError):
    """🌍 Код країни відсутній у каталозі та в правилах."""

    kind = "unknown_country"

    def __init__(self, country_code: str) -> None:
        super().__init__(f"Unknown country code '{country_code}'", country_code=country_code)


# ================================
# 🧾 ПОДАТКИ
# ================================
class TaxRateNotFound(PricingError):
    """🧾 Податок увімкнено, але для послуги немає ні точної, ні дефолтної, ні 'all' ставки."""

    kind = "tax_rate_not_found"

    def __init__(self, country_code: str, service_type: str) -> None:
        super().__init__(
            f"No tax rate for service '{service_type}' in country '{country_code}'",
            country_code=country_code,
        )
        self.service_type = service_type

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["service_type"] = self.service_type
        return extra


class InvalidTaxConfiguration(PricingError):
    """🧾 Порушено інваріант конфігурації податків (кілька isDefault для однієї послуги)."""

    kind = "invalid_tax_configuration"


# ================================
# 👨‍👩‍👧 СКЛАД ГРУПИ / BULK
# ================================
class InvalidPartyComposition(PricingError):
    """👨‍👩‍👧 Негативні кількості або нуль платних одиниць у групі."""

    kind = "invalid_party_composition"


class InvalidBulkOperation(PricingError):
    """🧰 Некоректна bulk-команда (наприклад, copy без джерела)."""

    kind = "invalid_bulk_operation"


@dataclass(frozen=True)
class CountryOperationError:
    """❌ Збій bulk-операції для однієї країни (не перериває решту пакета)."""

    country_code: str												# 🌍 Країна, що не оброблена
    cause: str														# 🗒️ Пояснення
    kind: str = "country_operation_error"							# 🏷️ Код причини

    @classmethod
    def from_exception(cls, country_code: str, exc: Exception) -> "CountryOperationError":
        """🔁 Перетворює виняток на запис помилки з кодом причини."""
        kind = getattr(exc, "kind", None) or "country_operation_error"
        logger.warning(
            "⚠️ Bulk target failed | country=%s kind=%s cause=%s",
            country_code,
            kind,
            exc,
        )
        return cls(country_code=country_code, cause=str(exc), kind=kind)
