# 🧊 travel_pricing/shared/utils/immutables.py
"""
🧊 Утиліти «заморожування» конфігураційних структур.

🔹 Записи правил (курси fallback, маржі, каталоги) віддаються рушію як незмінні знімки.
🔹 `freeze` рекурсивно перетворює dict → MappingProxyType, list → tuple, set → frozenset.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from collections.abc import Mapping                      # 🧰 Перевірки типів колекцій
from decimal import Decimal                              # 💵 Грошові значення лишаються як є
from enum import Enum                                    # 🏷️ Перерахування
from types import MappingProxyType                       # 🔒 Незмінна обгортка над dict
from typing import Any


# ================================
# ❄️ ЗАМОРОЖУВАЧ СТРУКТУР
# ================================
def freeze(obj: Any) -> Any:
    """Рекурсивно перетворює колекції на незмінні аналоги."""
    if obj is None or isinstance(obj, (str, bytes, int, float, bool, Decimal, Enum)):
        return obj                                       # 🧱 Скаляри повертаємо як є
    if isinstance(obj, Mapping):
        return MappingProxyType({key: freeze(value) for key, value in obj.items()})
    if isinstance(obj, (set, frozenset)):
        return frozenset(freeze(value) for value in obj)
    if isinstance(obj, (list, tuple)):
        return tuple(freeze(value) for value in obj)
    return obj                                           # ⚖️ Dataclass-и та інші обʼєкти не чіпаємо
