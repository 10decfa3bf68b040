# 🧰 travel_pricing/domain/bulk/services.py
"""
🧰 Масові операції над правилами маркапу країн (set / adjust / copy).

🔹 Кожна країна обробляється незалежно: помилка однієї потрапляє в `errors`
   і не зупиняє решту пакета.
🔹 `set` та `copy` ідемпотентні; `adjust` застосовується до поточного значення,
   тому повторний виклик накопичує зміну (+5 % двічі → ×1.05²).
🔹 Фіксований `set` та `copy` без розширеного правила у зразка вимикають
   розширене правило цілі, інакше воно перекривало б нове правило країни.
🔹 Оператор залежить лише від сховища правил.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                    # 🪵 Логування пакетів
from dataclasses import replace                                   # 🔁 Оновлення frozen-записів
from decimal import Decimal                                       # 💵 Точні значення маркапу
from typing import Iterable, List, Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from travel_pricing.domain.currency.rounding import HUNDRED, ONE, ZERO
from travel_pricing.domain.rules.entities import (
    CountryPricingRule,
    EnhancedMarkupRule,
    MarkupType,
    PricingTier,
    RegionalPricingTemplate,
)
from travel_pricing.domain.rules.interfaces import IRuleStore
from travel_pricing.errors import (
    CountryOperationError,
    InvalidBulkOperation,
    MarkupRuleNotFound,
    PricingError,
    UnknownCountryError,
)
from travel_pricing.shared.utils.logger import LOG_NAME

from .interfaces import (
    BulkOperationResult,
    BulkOperationType,
    BulkPricingOperation,
    CountryRuleUpdate,
)

logger = logging.getLogger(f"{LOG_NAME}.domain.bulk")


class BulkRuleOperator:
    """🧰 Застосовує `BulkPricingOperation` до списку країн."""

    def __init__(self, store: IRuleStore) -> None:
        self._store = store

    # ================================
    # 🔢 ПУБЛІЧНИЙ API
    # ================================
    def apply_bulk(self, op: BulkPricingOperation) -> BulkOperationResult:
        """
        🧰 Виконує команду для кожної цільової країни.

        `adjust` не ідемпотентний: повтор тієї ж команди накопичує зміну.

        Raises:
            InvalidBulkOperation: команда некоректна в цілому (немає значення або джерела copy).
        """
        logger.info(
            f"🧰 Bulk operation started | op={op.operation.value} targets={len(op.target_countries)} "
            f"value={op.adjustment_value} type={op.adjustment_type.value} "
            f"source={op.source_country or op.template_id}"
        )

        if op.operation is BulkOperationType.COPY:
            seed_rule, seed_enhanced = self._copy_seed(op)
            return self._run(op.operation, op.target_countries, lambda code: self._copy_to(code, seed_rule, seed_enhanced))

        if op.adjustment_value is None:
            raise InvalidBulkOperation(f"'{op.operation.value}' requires adjustment_value")
        value = op.adjustment_value

        if op.operation is BulkOperationType.SET:
            if value < ZERO:
                raise InvalidBulkOperation(f"Markup cannot be negative: {value}")
            return self._run(op.operation, op.target_countries, lambda code: self._set(code, value, op.adjustment_type))
        return self._run(op.operation, op.target_countries, lambda code: self._adjust(code, value, op.adjustment_type))

    def apply_regional_template(
        self,
        template_id: str,
        target_countries: Optional[Iterable[str]] = None,
    ) -> BulkOperationResult:
        """🗺️ Копіює маркап шаблону на країни (за замовчуванням — усі країни шаблону)."""
        template = self._store.get_regional_template_by_id(template_id)
        if template is None:
            raise InvalidBulkOperation(f"Unknown regional template '{template_id}'")
        targets = tuple(target_countries) if target_countries is not None else template.countries
        return self.apply_bulk(
            BulkPricingOperation(
                operation=BulkOperationType.COPY,
                target_countries=targets,
                template_id=template.id,
            )
        )

    # ================================
    # 🔁 ЦИКЛ ПО КРАЇНАХ
    # ================================
    def _run(self, operation: BulkOperationType, targets: Tuple[str, ...], action) -> BulkOperationResult:
        updated: List[CountryRuleUpdate] = []
        errors: List[CountryOperationError] = []
        for code in targets:
            try:
                updated.append(action(code))
            except (PricingError, ValueError) as exc:
                errors.append(CountryOperationError.from_exception(code, exc))

        logger.info(
            f"✅ Bulk operation finished | op={operation.value} updated={len(updated)} errors={len(errors)}"
        )
        return BulkOperationResult(operation=operation, updated=tuple(updated), errors=tuple(errors))

    # ================================
    # ✍️ SET
    # ================================
    def _set(self, code: str, value: Decimal, markup_type: MarkupType) -> CountryRuleUpdate:
        rule = self._store.get_country_rule(code)
        created = rule is None
        previous = None if rule is None else rule.default_markup
        base_rule = rule if rule is not None else self._new_rule(code)
        new_rule = replace(base_rule, default_markup=value, markup_type=markup_type)
        self._store.save_country_rule(new_rule)

        deactivated = False
        if markup_type is MarkupType.PERCENTAGE:
            enhanced_id = self._update_enhanced_base(code, lambda _: value)
        else:
            # 📴 Розширене правило лише відсоткове: інакше воно перекрило б фіксований маркап
            enhanced_id = self._deactivate_enhanced(code)
            deactivated = enhanced_id is not None
        return CountryRuleUpdate(
            country_code=code,
            rule_id=new_rule.id,
            previous_markup=previous,
            new_markup=value,
            markup_type=markup_type,
            created=created,
            enhanced_rule_id=enhanced_id,
            enhanced_deactivated=deactivated,
        )

    # ================================
    # ➕ ADJUST
    # ================================
    @staticmethod
    def _adjusted(current: Decimal, value: Decimal, adjustment_type: MarkupType) -> Decimal:
        if adjustment_type is MarkupType.PERCENTAGE:
            result = current * (ONE + value / HUNDRED)
        else:
            result = current + value
        return max(ZERO, result)                                  # 🧱 Маркап не буває відʼємним

    def _adjust(self, code: str, value: Decimal, adjustment_type: MarkupType) -> CountryRuleUpdate:
        rule = self._store.get_country_rule(code)
        if rule is None:
            if self._store.get_country_info(code) is None:
                raise UnknownCountryError(code)
            raise MarkupRuleNotFound(code)

        new_markup = self._adjusted(rule.default_markup, value, adjustment_type)
        self._store.save_country_rule(replace(rule, default_markup=new_markup))
        enhanced_id = self._update_enhanced_base(
            code, lambda current: self._adjusted(current, value, adjustment_type)
        )
        return CountryRuleUpdate(
            country_code=code,
            rule_id=rule.id,
            previous_markup=rule.default_markup,
            new_markup=new_markup,
            markup_type=rule.markup_type,
            enhanced_rule_id=enhanced_id,
        )

    # ================================
    # 📋 COPY
    # ================================
    def _copy_seed(self, op: BulkPricingOperation) -> Tuple[CountryPricingRule, Optional[EnhancedMarkupRule]]:
        """📋 Зразок для copy: правило країни-джерела або регіональний шаблон."""
        if op.source_country:
            source = self._store.get_country_rule(op.source_country)
            if source is None:
                raise InvalidBulkOperation(
                    f"Source country '{op.source_country}' has no pricing rule", country_code=op.source_country
                )
            return source, self._store.get_enhanced_markup_rule(op.source_country)

        if op.template_id:
            template = self._store.get_regional_template_by_id(op.template_id)
            if template is None:
                raise InvalidBulkOperation(f"Unknown regional template '{op.template_id}'")
            return self._rule_from_template(template), None

        raise InvalidBulkOperation("'copy' requires source_country or template_id")

    @staticmethod
    def _rule_from_template(template: RegionalPricingTemplate) -> CountryPricingRule:
        return CountryPricingRule(
            id=template.id,
            country_code="",
            currency="",
            default_markup=template.default_markup,
            markup_type=template.markup_type,
            tier=PricingTier.STANDARD,
            region=template.region,
        )

    def _copy_to(
        self,
        code: str,
        seed: CountryPricingRule,
        seed_enhanced: Optional[EnhancedMarkupRule],
    ) -> CountryRuleUpdate:
        target = self._store.get_country_rule(code)
        created = target is None
        previous = None if target is None else target.default_markup
        base_rule = target if target is not None else self._new_rule(code)
        new_rule = replace(
            base_rule,
            default_markup=seed.default_markup,
            markup_type=seed.markup_type,
            tier=seed.tier,
            seasonal_adjustment=seed.seasonal_adjustment if seed.country_code else base_rule.seasonal_adjustment,
        )
        self._store.save_country_rule(new_rule)

        deactivated = False
        if seed_enhanced is None:
            # 📴 У зразка немає розширеного правила: старе правило цілі більше не перекриває копію
            enhanced_id = self._deactivate_enhanced(code)
            deactivated = enhanced_id is not None
        elif seed_enhanced.country_code != code:
            existing = self._store.get_enhanced_markup_rule(code)
            enhanced_id = existing.id if existing is not None else f"{code.lower()}-enhanced"
            self._store.save_enhanced_markup_rule(replace(seed_enhanced, id=enhanced_id, country_code=code))
        else:
            enhanced_id = seed_enhanced.id

        return CountryRuleUpdate(
            country_code=code,
            rule_id=new_rule.id,
            previous_markup=previous,
            new_markup=new_rule.default_markup,
            markup_type=new_rule.markup_type,
            created=created,
            enhanced_rule_id=enhanced_id,
            enhanced_deactivated=deactivated,
        )

    # ================================
    # 🧰 ДОПОМІЖНІ
    # ================================
    def _new_rule(self, code: str) -> CountryPricingRule:
        """🆕 Заготовка правила з каталогу країн (невідома країна → помилка)."""
        info = self._store.get_country_info(code)
        if info is None:
            raise UnknownCountryError(code)
        logger.info(f"🆕 Creating country rule | country={code} currency={info.currency}")
        return CountryPricingRule(
            id=f"{code.lower()}-pricing",
            country_code=code,
            currency=info.currency,
            default_markup=ZERO,
            tier=PricingTier.STANDARD,
            region=info.region,
            currency_symbol=info.currency_symbol,
            country_name=info.name,
            pricing_currency_override=info.pricing_currency_override,
        )

    def _update_enhanced_base(self, code: str, compute) -> Optional[str]:
        """📈 Синхронізує `base_markup_percentage` активного розширеного правила."""
        enhanced = self._store.get_enhanced_markup_rule(code)
        if enhanced is None or not enhanced.is_active:
            return None
        new_base = compute(enhanced.base_markup_percentage)
        self._store.save_enhanced_markup_rule(replace(enhanced, base_markup_percentage=new_base))
        return enhanced.id

    def _deactivate_enhanced(self, code: str) -> Optional[str]:
        """📴 Вимикає активне розширене правило країни; повертає його id або None."""
        enhanced = self._store.get_enhanced_markup_rule(code)
        if enhanced is None or not enhanced.is_active:
            return None
        self._store.save_enhanced_markup_rule(replace(enhanced, is_active=False))
        logger.info(f"📴 Enhanced rule deactivated | country={code} rule={enhanced.id}")
        return enhanced.id
