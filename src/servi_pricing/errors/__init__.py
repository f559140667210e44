# 🚨 servi_pricing/errors/__init__.py
"""🚨 Публічні винятки рушія ціноутворення."""

from .custom_errors import (
    ErrorCode,
    InvalidConfiguration,
    InvalidInput,
    PricingError,
    PricingInvariantError,
)

__all__ = [
    "ErrorCode",
    "PricingError",
    "InvalidInput",
    "InvalidConfiguration",
    "PricingInvariantError",
]
