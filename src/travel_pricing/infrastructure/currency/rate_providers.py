# 🌐 travel_pricing/infrastructure/currency/rate_providers.py
"""
🌐 Прості реалізації `IRateProvider`.

Живий FX-провайдер — зовнішня інтеграція; тут лише знімок курсів у памʼяті,
який адмінка чи тести можуть оновлювати між розрахунками.
"""

from __future__ import annotations

import logging
import threading
from decimal import Decimal
from typing import Dict, Mapping, Optional, Union

from travel_pricing.domain.currency.interfaces import IRateProvider
from travel_pricing.domain.currency.rounding import to_decimal
from travel_pricing.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.currency.rates")


class StaticRateProvider(IRateProvider):
    """📋 Курси з мапи `{"USD_THB": 35.0}`; зворотна пара виводиться як 1/rate."""

    def __init__(self, rates: Optional[Mapping[str, Union[Decimal, int, float, str]]] = None) -> None:
        self._lock = threading.Lock()
        self._rates: Dict[str, Decimal] = {}
        self.update(rates or {})

    def update(self, rates: Mapping[str, Union[Decimal, int, float, str]]) -> None:
        """🔄 Додає або замінює курси пар."""
        normalized = {str(pair).strip().upper(): to_decimal(value) for pair, value in rates.items()}
        with self._lock:
            self._rates.update(normalized)
        logger.info(f"🔄 Static rates updated | pairs={len(normalized)}")

    def get_rate(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        from_ccy = from_currency.upper()
        to_ccy = to_currency.upper()
        with self._lock:
            direct = self._rates.get(f"{from_ccy}_{to_ccy}")
            inverse = self._rates.get(f"{to_ccy}_{from_ccy}")
        if direct:
            return direct
        if inverse:
            return Decimal(1) / inverse
        return None
