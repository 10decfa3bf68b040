# 🧰 travel_pricing/shared/utils/__init__.py
"""🧰 Спільні утиліти: логування та незмінні структури."""

from .immutables import freeze
from .logger import LOG_NAME, JsonFormatter, get_logger, init_logging, init_logging_from_config

__all__ = [
    "LOG_NAME",
    "JsonFormatter",
    "freeze",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
]
