# 🗄️ travel_pricing/infrastructure/rules/__init__.py
"""
🗄️ Інфраструктура правил.

🔹 `InMemoryRuleStore` — реалізація IRuleStore у памʼяті.
🔹 `load_rule_store` / `build_rule_store` — знімок правил з YAML або словника.
"""

from __future__ import annotations

from .in_memory_store import InMemoryRuleStore
from .snapshot_loader import build_rule_store, load_rule_store

__all__ = ["InMemoryRuleStore", "build_rule_store", "load_rule_store"]
