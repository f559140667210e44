# 🚨 servi_pricing/errors/custom_errors.py
"""
🚨 Ієрархія помилок ціноутворення.

🔹 `InvalidInput` — недопустима ціна, сума чи розподіл візиту.
🔹 `InvalidConfiguration` — параметри формули, за яких розрахунок неможливий
    (наприклад, знаменник gross-up ≤ 0). Це окремий випадок `InvalidInput`,
    тому виклики, що ловлять `InvalidInput`, бачать і його.
🔹 `PricingInvariantError` — внутрішній збій звірки результату; окрема гілка, не `InvalidInput`.
🔹 Рушії лише кидають ці винятки; переклад у HTTP-відповіді робить викликач.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                          # 🧾 Діагностика створення помилок
from typing import Dict, Optional

# 🧩 Внутрішні модулі проєкту
from servi_pricing.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.errors")


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """⚠️ Стабільні коди для логів та відповідей викликача."""

    INVALID_INPUT = "invalid_input"                                     # 🔢 Погані вхідні суми
    INVALID_CONFIGURATION = "invalid_configuration"                     # ⚙️ Погані параметри формули
    INVARIANT_VIOLATION = "invariant_violation"                         # 🧮 Результат рушія не сходиться
    UNKNOWN = "unknown_error"


# ================================
# 🧠 БАЗОВА ПОМИЛКА
# ================================
class PricingError(Exception):
    """🧠 Базовий виняток рушія ціноутворення."""

    code: str = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, field: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message                                          # 🗒️ Людське повідомлення
        self.field = field                                              # 🏷️ Поле, що спричинило помилку
        self.details = details                                          # 🔎 Технічні деталі
        logger.debug("🚨 %s created", type(self).__name__, extra=self.to_log_extra())

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Словник для `logger.extra`."""
        extra: Dict[str, object] = {"error_code": self.code}
        if self.field:
            extra["field"] = self.field
        if self.details:
            extra["details"] = self.details
        return extra


class InvalidInput(PricingError, ValueError):
    """🔢 Вхідні суми не проходять перевірку."""

    code = ErrorCode.INVALID_INPUT


class InvalidConfiguration(InvalidInput):
    """⚙️ Конфігурація формули робить розрахунок неможливим."""

    code = ErrorCode.INVALID_CONFIGURATION


class PricingInvariantError(PricingError):
    """🧮 Внутрішній збій: частини результату не сходяться. Не є помилкою викликача."""

    code = ErrorCode.INVARIANT_VIOLATION


__all__ = [
    "ErrorCode",
    "PricingError",
    "InvalidInput",
    "InvalidConfiguration",
    "PricingInvariantError",
]
