# 💸 servi_pricing/domain/pricing/__init__.py
"""
💸 Пакет `domain.pricing` публікує DTO, конфіги та рушії ціноутворення.

🔹 `interfaces.py` — PricingInput, PricingComponents, PricingResult, IPricingService, IVisitPreauthService.
🔹 `config.py` — PricingConfig / VisitPreauthConfig з іменованими дефолтами.
🔹 `rounding.py` — Decimal-утиліти округлення до центів.
🔹 `services.py` — ковзний рушій `SlidingPricingService` і `compute_pricing`.
🔹 `preauth.py` — фіксований візит `VisitPreauthService` і `compute_visit_preauth_pricing`.
"""

from .config import (
    VISIT_PREAUTH_PROVIDER_PESOS,
    VISIT_PREAUTH_TOTAL_PESOS,
    PricingConfig,
    VisitPreauthConfig,
)
from .interfaces import (
    IPricingService,
    IVisitPreauthService,
    PricingComponents,
    PricingInput,
    PricingResult,
)
from .preauth import VisitPreauthService, compute_visit_preauth_pricing
from .rounding import ceil_cents, ceil_to_step, to_cents, to_decimal
from .services import SlidingPricingService, compute_pricing

__all__ = [
    # DTO / типи
    "PricingInput",
    "PricingComponents",
    "PricingResult",
    # Контракти
    "IPricingService",
    "IVisitPreauthService",
    # Конфіги
    "PricingConfig",
    "VisitPreauthConfig",
    "VISIT_PREAUTH_TOTAL_PESOS",
    "VISIT_PREAUTH_PROVIDER_PESOS",
    # Сервіси
    "SlidingPricingService",
    "VisitPreauthService",
    "compute_pricing",
    "compute_visit_preauth_pricing",
    # Утиліти
    "to_decimal",
    "to_cents",
    "ceil_cents",
    "ceil_to_step",
]
