"""
🧪 test_pricing_errors.py — ієрархія помилок ціноутворення

Перевіряє:
- Наслідування InvalidConfiguration → InvalidInput → ValueError
- Коди помилок і extra-поля для логів
- Що рушії кидають саме ці винятки
- Окрему внутрішню помилку для результату, що не сходиться
"""

import pytest

from servi_pricing import compute_pricing
from servi_pricing.domain.pricing import PricingResult
from servi_pricing.errors import (
    ErrorCode,
    InvalidConfiguration,
    InvalidInput,
    PricingError,
    PricingInvariantError,
)


def test_hierarchy():
    assert issubclass(InvalidInput, PricingError)
    assert issubclass(InvalidInput, ValueError)
    assert issubclass(InvalidConfiguration, InvalidInput)


def test_codes_and_log_extra():
    err = InvalidConfiguration("denominator <= 0", field="stripe_percent", details="den=-0.1")

    assert str(err) == "denominator <= 0"
    assert err.code == ErrorCode.INVALID_CONFIGURATION
    assert err.to_log_extra() == {
        "error_code": "invalid_configuration",
        "field": "stripe_percent",
        "details": "den=-0.1",
    }
    assert InvalidInput("bad").to_log_extra() == {"error_code": ErrorCode.INVALID_INPUT}


def test_invalid_price_carries_field_name():
    with pytest.raises(InvalidInput) as exc_info:
        compute_pricing("abc")

    assert exc_info.value.field == "provider_price_pesos"
    assert exc_info.value.code == ErrorCode.INVALID_INPUT


def test_engine_errors_are_catchable_as_value_error():
    with pytest.raises(ValueError):
        compute_pricing(-1)


def test_unreconciled_result_is_internal_error_not_input_error():
    components = compute_pricing(100).components

    with pytest.raises(PricingInvariantError) as exc_info:
        PricingResult(
            provider_amount_cents=10000,
            booking_fee_amount_cents=4000,
            processing_fee_amount_cents=1508,
            vat_amount_cents=882,
            total_amount_cents=16391,
            components=components,
        )

    assert not isinstance(exc_info.value, InvalidInput)
    assert exc_info.value.code == ErrorCode.INVARIANT_VIOLATION
    assert exc_info.value.field == "total_amount_cents"
