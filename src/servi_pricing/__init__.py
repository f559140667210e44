# 💸 servi_pricing/__init__.py
"""
💸 servi_pricing — детермінований рушій ціноутворення бронювань.

🔹 `compute_pricing` — ковзний booking fee, gross-up комісії процесора, ПДВ.
🔹 `compute_visit_preauth_pricing` — фіксований візит з розподілом залишку.
🔹 `resolve_processing_fee_rule` — правило комісії за метаданими картки.
"""

from servi_pricing.domain.pricing import (
    PricingConfig,
    PricingInput,
    PricingResult,
    VisitPreauthConfig,
    compute_pricing,
    compute_visit_preauth_pricing,
)
from servi_pricing.domain.processing_fees import (
    DEFAULT_PROCESSING_FEE_RULE_ID,
    resolve_processing_fee_rule,
    serialize_processing_fee_rules,
)
from servi_pricing.errors import InvalidConfiguration, InvalidInput, PricingError, PricingInvariantError

__version__ = "1.0.0"

__all__ = [
    "PricingConfig",
    "PricingInput",
    "PricingResult",
    "VisitPreauthConfig",
    "compute_pricing",
    "compute_visit_preauth_pricing",
    "DEFAULT_PROCESSING_FEE_RULE_ID",
    "resolve_processing_fee_rule",
    "serialize_processing_fee_rules",
    "PricingError",
    "InvalidInput",
    "InvalidConfiguration",
    "PricingInvariantError",
]
