# 💳 servi_pricing/domain/processing_fees/__init__.py
"""
💳 Пакет `domain.processing_fees`: правила комісії процесора та їх резолвер.
"""

from .interfaces import CardInfo, ProcessingFeeRule
from .resolver import (
    DEFAULT_PROCESSING_FEE_RULE_ID,
    ProcessingFeeResolver,
    resolve_processing_fee_rule,
    select_worst_case_rule,
    serialize_processing_fee_rules,
)
from .rules import PROCESSING_FEE_RULES

__all__ = [
    "CardInfo",
    "ProcessingFeeRule",
    "PROCESSING_FEE_RULES",
    "DEFAULT_PROCESSING_FEE_RULE_ID",
    "ProcessingFeeResolver",
    "resolve_processing_fee_rule",
    "select_worst_case_rule",
    "serialize_processing_fee_rules",
]
