# 📜 servi_pricing/domain/processing_fees/rules.py
"""
📜 Типова таблиця комісій Stripe MX за метаданими картки.

Значення відповідають публічним тарифам Stripe MX; за іншого договору з процесором
таблицю перевизначають у `processing_fees.rules` конфігурації.
Порядок важливий: перше збіжне правило перемагає, тому вузькі правила (дебет/кредит)
стоять перед загальним MX, а порожній catch-all — останнім.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Tuple

from .interfaces import ProcessingFeeRule

MX_DOMESTIC_PERCENT = Decimal("0.036")                          # 3.6%
MX_FIXED_FEE = Decimal("3")                                     # 💵 MXN
INTERNATIONAL_SURCHARGE = Decimal("0.005")                      # +0.5%
CURRENCY_CONVERSION_SURCHARGE = Decimal("0.02")                 # +2% за конвертацію валюти

PROCESSING_FEE_RULES: Tuple[ProcessingFeeRule, ...] = (
    ProcessingFeeRule(
        id="mx_domestic_debit",
        label="Tarjeta débito nacional (MX)",
        match={"country": "MX", "funding": "debit"},
        percent=MX_DOMESTIC_PERCENT,
        fixed=MX_FIXED_FEE,
    ),
    ProcessingFeeRule(
        id="mx_domestic_credit",
        label="Tarjeta crédito nacional (MX)",
        match={"country": "MX", "funding": "credit"},
        percent=MX_DOMESTIC_PERCENT,
        fixed=MX_FIXED_FEE,
    ),
    ProcessingFeeRule(
        id="mx_domestic",
        label="Tarjeta nacional (MX)",
        match={"country": "MX"},
        percent=MX_DOMESTIC_PERCENT,
        fixed=MX_FIXED_FEE,
    ),
    ProcessingFeeRule(
        id="mx_international_conversion",
        label="Tarjeta internacional (incluye conversión)",
        match={},
        percent=MX_DOMESTIC_PERCENT + INTERNATIONAL_SURCHARGE + CURRENCY_CONVERSION_SURCHARGE,
        fixed=MX_FIXED_FEE,
    ),
)
