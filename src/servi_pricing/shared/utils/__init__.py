# 🧰 servi_pricing/shared/utils/__init__.py
"""🧰 Спільні утиліти: логування та незмінні структури."""

from .immutables import freeze, is_frozen_mapping, thaw
from .logger import LOG_NAME, get_logger, init_logging, init_logging_from_config

__all__ = [
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
    "freeze",
    "thaw",
    "is_frozen_mapping",
]
