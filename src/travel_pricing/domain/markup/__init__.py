# 📈 travel_pricing/domain/markup/__init__.py
"""
📈 Пакет `domain.markup` — резолвер ефективного маркапу.
"""

from .interfaces import MarkupResolution, MarkupSource, ResolutionOutcome
from .resolver import DEFAULT_TIER_MULTIPLIERS, MarkupResolver, apply_markup

__all__ = [
    "DEFAULT_TIER_MULTIPLIERS",
    "MarkupResolution",
    "MarkupResolver",
    "MarkupSource",
    "ResolutionOutcome",
    "apply_markup",
]
