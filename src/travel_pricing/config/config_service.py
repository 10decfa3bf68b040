# ⚙️ travel_pricing/config/config_service.py
"""
⚙️ config_service.py — Сервіс доступу до статичної конфігурації рушія.

🔹 Клас `ConfigService`:
- Завантажує змінні з .env та дефолти з config.yaml.
- Надає єдиний метод .get() з крапковими ключами ('currency.base_currency').
- Працює як Singleton; `reset()` скидає екземпляр (для тестів).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Dict, Optional      # 🧩 Типізація

# 🧩 Внутрішні модулі проєкту
from travel_pricing.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"          # 📘 Дефолтні налаштування
DEFAULT_RULES_PATH = Path(__file__).parent / "yamls" / "rules.yaml"  # 📗 Зразковий знімок правил


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх статичних параметрів рушія.
    Працює як Singleton — конфігурація зчитується лише один раз.
    """

    _instance: Optional["ConfigService"] = None   # 🧩 Singleton-екземпляр
    _config: Dict[str, Any]                       # 📦 Обʼєднана конфігурація

    def __new__(cls, config_path: Optional[Path] = None):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._config = {}
            instance._load_all_configs(config_path or DEFAULT_CONFIG_PATH)
            cls._instance = instance
            logger.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """♻️ Скидає Singleton (наступний виклик перечитає файли)."""
        cls._instance = None

    def _load_all_configs(self, config_path: Path) -> None:
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        Пріоритет: config.yaml → .env (змінні середовища перекривають файл).
        """
        # --- 1. YAML-файл ---
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning(f"⚠️ Не вдалося завантажити {config_path.name}: {e}")

        # --- 2. .env змінні ---
        load_dotenv()
        env_vars = {
            "rules.file": os.getenv("TRAVEL_PRICING_RULES_FILE"),
            "logging.level": os.getenv("TRAVEL_PRICING_LOG_LEVEL"),
            "currency.base_currency": os.getenv("TRAVEL_PRICING_BASE_CURRENCY"),
        }
        overrides = {key: value for key, value in env_vars.items() if value}
        self._deep_update(self._config, self._unflatten_dict(overrides))

        logger.info("✅ Конфігурацію успішно завантажено (%s)", config_path.name)

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'pricing.tier_multipliers').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.
        """
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                logger.debug(f"❓ Ключ '{key}' не знайдено, повертаємо значення за замовчуванням")
                return default
        return value

    def rules_path(self) -> Path:
        """📗 Шлях до YAML-знімка правил (env → config → зразковий файл)."""
        configured = self.get("rules.file")
        return Path(configured) if configured else DEFAULT_RULES_PATH

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================
    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """🔁 'currency.base_currency' → {'currency': {'base_currency': ...}}"""
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split(".")
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """🔁 Рекурсивно обʼєднує два словники."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)
            else:
                source[key] = value
