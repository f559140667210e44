# 🏗️ servi_pricing/config/setup/__init__.py
"""🏗️ Збірка сервісів ціноутворення з конфігурації."""

from .container import (
    PricingContainer,
    build_pricing_config,
    build_processing_fee_rules,
    build_visit_preauth_config,
)

__all__ = [
    "PricingContainer",
    "build_pricing_config",
    "build_visit_preauth_config",
    "build_processing_fee_rules",
]
