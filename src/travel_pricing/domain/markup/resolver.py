# 📈 travel_pricing/domain/markup/resolver.py
"""
📈 Резолвер маркапу — явний ланцюжок відповідальності.

🔹 Порядок ланок: EnhancedMarkupRule → CountryPricingRule → RegionalPricingTemplate.
🔹 Перша ланка, що повернула результат, перемагає; якщо жодна — `MarkupRuleNotFound`.
🔹 Записи читаються зі сховища на кожен виклик — резолвер не кешує правила.
🔹 `try_resolve_markup` повертає `ResolutionOutcome`, `resolve_markup` — піднімає помилку.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                    # 🪵 Логування кроків резолюції
from dataclasses import dataclass                                 # 🧱 Контекст запиту
from datetime import date                                         # 📅 Дата для сезонних вікон
from decimal import Decimal                                       # 💵 Точні відсотки
from typing import Callable, Mapping, Optional, Sequence          # 🧰 Типізація ланцюжка

# 🧩 Внутрішні модулі проєкту
from travel_pricing.domain.currency.rounding import HUNDRED, ONE, ZERO, to_decimal
from travel_pricing.domain.rules.entities import (
    CountryPricingRule,
    EnhancedMarkupRule,
    MarkupType,
    PricingTier,
    SeasonalAdjustment,
)
from travel_pricing.domain.rules.interfaces import IRuleStore
from travel_pricing.domain.rules.slabs import select_slab, validate_slabs
from travel_pricing.errors import MarkupRuleNotFound, PricingError
from travel_pricing.shared.utils.logger import LOG_NAME

from .interfaces import MarkupResolution, MarkupSource, ResolutionOutcome

logger = logging.getLogger(f"{LOG_NAME}.domain.markup")          # 🧾 Іменований логер резолвера

# 🎚️ Множники рівнів продукту (перекриваються `pricing.tier_multipliers` з config.yaml)
DEFAULT_TIER_MULTIPLIERS: Mapping[PricingTier, Decimal] = {
    PricingTier.BUDGET: Decimal("0.8"),
    PricingTier.STANDARD: Decimal("1.0"),
    PricingTier.PREMIUM: Decimal("1.2"),
    PricingTier.LUXURY: Decimal("1.5"),
}


@dataclass(frozen=True)
class _ResolutionRequest:
    """🧭 Параметри одного запиту резолюції."""
    country_code: str
    service_type: str
    amount: Decimal
    as_of: date


_Handler = Callable[[_ResolutionRequest], Optional[MarkupResolution]]


def apply_markup(amount: Decimal, resolution: MarkupResolution, *, fixed_units: int = 1) -> Decimal:
    """
    ➕ Застосовує маркап до суми постачальника (без округлення).

    Відсоток множить суму, фіксована частина додається (`fixed_units` разів — для
    режиму «фіксований маркап на особу»).
    """
    base = to_decimal(amount)
    marked_up = base * (ONE + resolution.percentage / HUNDRED)
    return marked_up + resolution.fixed_amount * Decimal(fixed_units)


def _seasonal_points(adjustment: Optional[SeasonalAdjustment], as_of: date) -> Decimal:
    """📅 Процентні пункти сезонного коригування або 0, якщо дата поза вікном."""
    if adjustment is None or not adjustment.applies_on(as_of):
        return ZERO
    return adjustment.percentage


# ================================
# 🏛️ РЕЗОЛВЕР
# ================================
class MarkupResolver:
    """🔗 Визначає єдиний ефективний маркап для країни, послуги, суми та дати."""

    def __init__(
        self,
        store: IRuleStore,
        tier_multipliers: Optional[Mapping[str, object]] = None,
    ) -> None:
        self._store = store                                                       # 🗄️ Джерело правил
        table = dict(DEFAULT_TIER_MULTIPLIERS)
        for tier, value in (tier_multipliers or {}).items():
            table[PricingTier(tier)] = to_decimal(value)
        self._tiers: Mapping[PricingTier, Decimal] = table                         # 🎚️ Множники рівнів
        self._chain: Sequence[_Handler] = (
            self._from_enhanced_rule,
            self._from_country_rule,
            self._from_regional_template,
        )

    # ================================
    # 🔢 ПУБЛІЧНИЙ API
    # ================================
    def resolve_markup(
        self,
        country_code: str,
        service_type: str,
        amount: Decimal,
        as_of_date: Optional[date] = None,
    ) -> MarkupResolution:
        """
        📈 Повертає ефективний маркап або піднімає помилку конфігурації.

        Raises:
            MarkupRuleNotFound: жодна ланка не має правила для країни.
            InvalidSlabConfiguration: слеби активного розширеного правила некоректні.
        """
        request = _ResolutionRequest(
            country_code=(country_code or "").strip().upper(),
            service_type=(service_type or "").strip().lower(),
            amount=to_decimal(amount),
            as_of=as_of_date or date.today(),
        )
        for handler in self._chain:
            resolution = handler(request)
            if resolution is not None:
                logger.info(
                    f"📈 Markup resolved | country={request.country_code} service={request.service_type} "
                    f"amount={request.amount} source={resolution.source.value} rule={resolution.applied_rule_id} "
                    f"percentage={resolution.percentage} fixed={resolution.fixed_amount}"
                )
                return resolution

        logger.error(f"❌ No markup rule | country={request.country_code} service={request.service_type}")
        raise MarkupRuleNotFound(request.country_code)

    def try_resolve_markup(
        self,
        country_code: str,
        service_type: str,
        amount: Decimal,
        as_of_date: Optional[date] = None,
    ) -> ResolutionOutcome:
        """🔀 Те саме, що `resolve_markup`, але помилки конфігурації повертаються як значення."""
        try:
            return ResolutionOutcome.success(self.resolve_markup(country_code, service_type, amount, as_of_date))
        except PricingError as exc:
            return ResolutionOutcome.failure(exc)

    def tier_multiplier(self, tier: PricingTier) -> Decimal:
        """🎚️ Множник для рівня продукту."""
        return self._tiers.get(PricingTier(tier), ONE)

    # ================================
    # 🔗 ЛАНКИ ЛАНЦЮЖКА
    # ================================
    def _from_enhanced_rule(self, request: _ResolutionRequest) -> Optional[MarkupResolution]:
        rule = self._store.get_enhanced_markup_rule(request.country_code)
        if rule is None or not rule.is_active:
            return None

        percentage = rule.base_markup_percentage
        fixed_amount = ZERO
        source = MarkupSource.ENHANCED_BASE

        # --- 🪜 Крок 1a: слеби ---
        if rule.slab_markup_enabled and rule.slab_rules:
            ordered = validate_slabs(rule.slab_rules, country_code=request.country_code, rule_id=rule.id)
            slab = select_slab(request.amount, ordered)
            if slab is not None:
                percentage = slab.additional_percentage
                fixed_amount = slab.fixed_amount or ZERO
                source = MarkupSource.ENHANCED_SLAB
            else:
                logger.debug(f"🪜 No slab matched | country={request.country_code} amount={request.amount}")

        # --- 🎚️ Крок 1c: множник рівня ---
        multiplier = self._enhanced_multiplier(rule)
        percentage = percentage * multiplier

        # --- 📅 Крок 1d: сезон ---
        seasonal = _seasonal_points(rule.seasonal_adjustment, request.as_of)
        percentage = percentage + seasonal

        # --- 📏 Крок 1e: межі ---
        clamped_percentage = percentage
        if rule.minimum_markup is not None and clamped_percentage < rule.minimum_markup:
            clamped_percentage = rule.minimum_markup
        if rule.maximum_markup is not None and clamped_percentage > rule.maximum_markup:
            clamped_percentage = rule.maximum_markup
        if clamped_percentage != percentage:
            logger.info(
                f"📏 Markup clamped | country={request.country_code} raw={percentage} "
                f"min={rule.minimum_markup} max={rule.maximum_markup} → {clamped_percentage}"
            )

        return MarkupResolution(
            percentage=clamped_percentage,
            fixed_amount=fixed_amount,
            applied_rule_id=rule.id,
            markup_type=MarkupType.PERCENTAGE,
            source=source,
            tier_multiplier=multiplier,
            seasonal_adjustment=seasonal,
            clamped=clamped_percentage != percentage,
        )

    def _enhanced_multiplier(self, rule: EnhancedMarkupRule) -> Decimal:
        """Явний множник правила, інакше — множник рівня правила країни."""
        if rule.tier_multiplier is not None:
            return rule.tier_multiplier
        country_rule = self._store.get_country_rule(rule.country_code)
        if country_rule is None or not country_rule.is_active:
            return ONE
        return self.tier_multiplier(country_rule.tier)

    def _from_country_rule(self, request: _ResolutionRequest) -> Optional[MarkupResolution]:
        rule = self._store.get_country_rule(request.country_code)
        if rule is None or not rule.is_active:
            return None
        return self._country_resolution(rule, request.as_of)

    def _country_resolution(self, rule: CountryPricingRule, as_of: date) -> MarkupResolution:
        # 🎚️ Рівень і сезон масштабують маркап країни (і відсоток, і фіксовану суму)
        multiplier = self.tier_multiplier(rule.tier)
        seasonal = _seasonal_points(rule.seasonal_adjustment, as_of)
        markup = rule.default_markup * multiplier * (ONE + seasonal / HUNDRED)
        is_fixed = rule.markup_type is MarkupType.FIXED
        return MarkupResolution(
            percentage=ZERO if is_fixed else markup,
            fixed_amount=markup if is_fixed else ZERO,
            applied_rule_id=rule.id,
            markup_type=rule.markup_type,
            source=MarkupSource.COUNTRY,
            tier_multiplier=multiplier,
            seasonal_adjustment=seasonal,
        )

    def _from_regional_template(self, request: _ResolutionRequest) -> Optional[MarkupResolution]:
        template = self._store.get_regional_template(request.country_code)
        if template is None or not template.covers(request.country_code):
            return None
        is_fixed = template.markup_type is MarkupType.FIXED
        return MarkupResolution(
            percentage=ZERO if is_fixed else template.default_markup,
            fixed_amount=template.default_markup if is_fixed else ZERO,
            applied_rule_id=template.id,
            markup_type=template.markup_type,
            source=MarkupSource.REGIONAL,
        )
