# 💱 travel_pricing/infrastructure/currency/currency_converter.py
"""
💱 Конвертер валют з маржею, fallback-курсами та валютними оверрайдами країн.

🔹 Ціль — код валюти (3 літери) або код країни (2 літери): для країни беремо
   `pricing_currency_override`, інакше її базову валюту.
🔹 Курс: живий провайдер → fallback-курси налаштувань → `ConversionRateUnavailable`.
   Таймаут або помилка провайдера трактується як «курс недоступний».
🔹 Маржа: правило країни → `conversion_margins[to]` → 0; ефективний курс = base × (1 + m/100).
🔹 Результат округлюється half-up до мінорних одиниць цільової валюти.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging															# 🧾 Логування всіх операцій
from concurrent.futures import TimeoutError as FutureTimeoutError		# ⏱️ Таймаут пулу потоків провайдера
from decimal import Decimal												# 💰 Точна арифметика
from typing import AbstractSet, Optional, Tuple							# 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from travel_pricing.domain.currency.interfaces import (					# 🔗 Контракти домену
    ConversionResult,
    CurrencyCode,
    ICurrencyConverter,
    IRateProvider,
    RateProviderError,
    RateSource,
)
from travel_pricing.domain.currency.rounding import (
    DEFAULT_ZERO_DECIMAL_CURRENCIES,
    HUNDRED,
    ONE,
    ZERO,
    quantize_money,
    to_decimal,
)
from travel_pricing.domain.rules.entities import CurrencyConversionSettings
from travel_pricing.domain.rules.interfaces import IRuleStore
from travel_pricing.errors import ConversionRateUnavailable, UnknownCountryError
from travel_pricing.shared.utils.logger import LOG_NAME					# 🏷️ Єдине імʼя логера

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.infrastructure.currency")		# 🧾 Модульний логер

def _is_country_code(code: str) -> bool:
    return len(code) == 2 and code.isalpha()

# ================================
# 💱 КОНВЕРТЕР
# ================================
class CurrencyConverter(ICurrencyConverter):
    """
    💱 Синхронний конвертер поверх сховища правил та (опційного) провайдера курсів.

    - Внутрішньо працює **лише** з Decimal.
    - Налаштування конвертації читаються зі сховища на кожен виклик.
    """

    def __init__(
        self,
        store: IRuleStore,
        rate_provider: Optional[IRateProvider] = None,
        *,
        zero_decimal_currencies: Optional[AbstractSet[str]] = None,
    ) -> None:
        self._store = store												# 🗄️ Правила та налаштування
        self._provider = rate_provider									# 🌐 Живі курси (може бути None)
        self._zero_decimal = frozenset(
            c.upper() for c in (zero_decimal_currencies or DEFAULT_ZERO_DECIMAL_CURRENCIES)
        )																# 📏 Валюти без копійок

    # ================================
    # 🎯 ЦІЛЬОВА ВАЛЮТА
    # ================================
    def resolve_target_currency(self, currency_or_country: str) -> Tuple[str, Optional[str]]:
        """
        🎯 Повертає (валюта, країна) для цілі конвертації.

        Raises:
            UnknownCountryError: двобуквений код відсутній і в каталозі, і в правилах.
        """
        code = (currency_or_country or "").strip().upper()
        if not _is_country_code(code):
            return code, None

        rule = self._store.get_country_rule(code)
        info = self._store.get_country_info(code)
        if rule is not None and rule.pricing_currency_override:
            return rule.pricing_currency_override, code
        if info is not None and info.pricing_currency_override:
            return info.pricing_currency_override, code
        if rule is not None:
            return rule.currency, code
        if info is not None:
            return info.currency, code
        logger.error(f"❌ Unknown target country | code={code}")
        raise UnknownCountryError(code)

    # ================================
    # 💵 ПУБЛІЧНИЙ API
    # ================================
    def convert(
        self,
        amount: Decimal,
        from_currency: str,
        to_currency_or_country: str,
        *,
        country_code: Optional[str] = None,
    ) -> ConversionResult:
        """
        💱 Конвертує суму з валюти постачальника у валюту ціноутворення.

        Args:
            amount: Сума у `from_currency`.
            from_currency: Валюта постачальника.
            to_currency_or_country: Код валюти або країни призначення.
            country_code: Країна, чия маржа застосовується (якщо ціль — валюта).

        Raises:
            ConversionRateUnavailable: немає ні живого, ні fallback-курсу.
            UnknownCountryError: невідомий код країни призначення.
        """
        amount_dec = to_decimal(amount)
        from_ccy = (from_currency or "").strip().upper()
        to_ccy, target_country = self.resolve_target_currency(to_currency_or_country)
        margin_country = (country_code or target_country or "").upper() or None

        if from_ccy == to_ccy:
            logger.debug(f"🔁 Identity conversion | {amount_dec} {from_ccy}")
            return ConversionResult(
                converted_amount=amount_dec,
                rate=ONE,
                base_rate=ONE,
                margin_applied=ZERO,
                from_currency=CurrencyCode(from_ccy),
                to_currency=CurrencyCode(to_ccy),
                source=RateSource.IDENTITY,
            )

        settings = self._store.get_conversion_settings()
        base_rate, source = self._base_rate(from_ccy, to_ccy, settings)
        margin = self._margin(to_ccy, margin_country, settings)
        effective_rate = base_rate * (ONE + margin / HUNDRED)
        converted = quantize_money(amount_dec * effective_rate, to_ccy, self._zero_decimal)

        logger.info(
            f"💱 Converted | {amount_dec} {from_ccy} → {converted} {to_ccy} "
            f"base_rate={base_rate} margin={margin}% rate={effective_rate} source={source.value}"
        )
        return ConversionResult(
            converted_amount=converted,
            rate=effective_rate,
            base_rate=base_rate,
            margin_applied=margin,
            from_currency=CurrencyCode(from_ccy),
            to_currency=CurrencyCode(to_ccy),
            source=source,
        )

    # ================================
    # 📈 КУРСИ ТА МАРЖА
    # ================================
    def _base_rate(
        self,
        from_ccy: str,
        to_ccy: str,
        settings: CurrencyConversionSettings,
    ) -> Tuple[Decimal, RateSource]:
        live = self._live_rate(from_ccy, to_ccy)
        if live is not None:
            return live, RateSource.LIVE

        fallback = self._fallback_rate(from_ccy, to_ccy, settings)
        if fallback is not None:
            logger.warning(f"🛟 Using fallback rate | {from_ccy}→{to_ccy} rate={fallback}")
            return fallback, RateSource.FALLBACK

        logger.error(f"❌ Conversion rate unavailable | {from_ccy}→{to_ccy}")
        raise ConversionRateUnavailable(from_ccy, to_ccy)

    def _live_rate(self, from_ccy: str, to_ccy: str) -> Optional[Decimal]:
        if self._provider is None:
            return None
        try:
            rate = self._provider.get_rate(from_ccy, to_ccy)
        except (TimeoutError, FutureTimeoutError, OSError, RateProviderError) as exc:
            # 🌐 socket.timeout та мережеві збої є нащадками OSError
            logger.warning(f"⏱️ Rate provider unavailable | {from_ccy}→{to_ccy} error={exc!r}")
            return None
        if rate is None:
            return None
        rate_dec = to_decimal(rate)
        if rate_dec <= ZERO:
            logger.warning(f"⚠️ Rate provider returned non-positive rate | {from_ccy}→{to_ccy} rate={rate_dec}")
            return None
        return rate_dec

    @staticmethod
    def _fallback_rate(from_ccy: str, to_ccy: str, settings: CurrencyConversionSettings) -> Optional[Decimal]:
        """
        🛟 Шукає курс у `fallback_rates`.

        Ключі: "FROM_TO" (пряма пара) або "CCY" (курс від базової валюти налаштувань).
        """
        rates = settings.fallback_rates
        base = settings.base_currency

        direct = rates.get(f"{from_ccy}_{to_ccy}")
        if direct:
            return direct

        def from_base(ccy: str) -> Optional[Decimal]:
            if ccy == base:
                return ONE
            return rates.get(ccy) or rates.get(f"{base}_{ccy}")

        to_rate = from_base(to_ccy)
        from_rate = from_base(from_ccy)
        if to_rate and from_rate:
            return to_rate / from_rate									# 🔀 Крос-курс через базову валюту
        return None

    def _margin(
        self,
        to_ccy: str,
        country_code: Optional[str],
        settings: CurrencyConversionSettings,
    ) -> Decimal:
        if country_code:
            rule = self._store.get_country_rule(country_code)
            if rule is not None and rule.conversion_margin is not None:
                return rule.conversion_margin
        return settings.conversion_margins.get(to_ccy, ZERO)
