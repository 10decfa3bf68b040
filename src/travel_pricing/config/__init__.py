# ⚙️ travel_pricing/config/__init__.py
"""
⚙️ Пакет Config — централізована конфігурація та ініціалізація рушія.

Цей пакет відповідає за:
- Завантаження налаштувань (.env, config.yaml, знімок правил у config/yamls).
- Створення та звʼязування сервісів через DI-контейнер.
"""

# ================================
# 🧩 ПУБЛІЧНИЙ API ПАКЕТУ
# ================================
from typing import TYPE_CHECKING

from .config_service import ConfigService

if TYPE_CHECKING:  # лише для підказок типів, без виконання імпорту під час рантайму
    from .setup.container import Container

# ================================
# 📤 EXPORT
# ================================

__all__ = [
    "ConfigService",
    "Container",
]


def __getattr__(name: str):
    if name == "Container":
        from .setup.container import Container  # локальний імпорт → немає циклу

        return Container
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
