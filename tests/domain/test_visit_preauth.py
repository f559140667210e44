"""
🧪 test_visit_preauth.py — unit-тести для розподілу фіксованої суми візиту

Перевіряє:
- Типовий розподіл 140 / 90 песо
- Точну звірку частин для довільних сум
- Відхилення некоректних сум і розподілів
"""

from decimal import Decimal

import pytest

from servi_pricing.domain.pricing import (
    VisitPreauthConfig,
    VisitPreauthService,
    compute_visit_preauth_pricing,
)
from servi_pricing.errors import InvalidInput


def test_default_visit_split():
    result = compute_visit_preauth_pricing()

    assert result.provider_amount_cents == 9000
    assert result.processing_fee_amount_cents == 1154
    assert result.vat_amount_cents == 690
    assert result.booking_fee_amount_cents == 3156
    assert result.total_amount_cents == 14000


def test_explicit_140_90_matches_defaults():
    explicit = compute_visit_preauth_pricing(total_pesos=140, provider_pesos=90)

    assert explicit == compute_visit_preauth_pricing()
    parts = (
        explicit.provider_amount_cents,
        explicit.booking_fee_amount_cents,
        explicit.processing_fee_amount_cents,
        explicit.vat_amount_cents,
    )
    assert all(isinstance(p, int) and p >= 0 for p in parts)
    assert sum(parts) == 14000


@pytest.mark.parametrize(
    ("total", "provider"),
    [
        (20, 10),
        (99.99, 33.33),
        (140, 90),
        (150.5, 100.25),
        (333.33, 111.11),
        (1000, 700),
        ("2500.01", "1750"),
    ],
)
def test_parts_always_sum_to_total(total, provider):
    result = compute_visit_preauth_pricing(total, provider)
    parts = (
        result.provider_amount_cents,
        result.booking_fee_amount_cents,
        result.processing_fee_amount_cents,
        result.vat_amount_cents,
    )

    assert sum(parts) == result.total_amount_cents
    assert result.total_amount_cents == round(Decimal(str(total)) * 100)
    assert min(parts) >= 0


def test_components_mark_visit_preauth():
    components = compute_visit_preauth_pricing().components

    assert components.visit_preauth is True
    assert components.alpha_value is None
    assert components.visit_total_pesos == Decimal("140")
    assert components.visit_provider_pesos == Decimal("90")
    assert compute_visit_preauth_pricing().to_dict()["components"]["visitPreauth"] is True


def test_service_uses_configured_amounts():
    service = VisitPreauthService(VisitPreauthConfig(total_pesos=Decimal("200"), provider_pesos=Decimal("120")))
    result = service.compute()

    assert result.total_amount_cents == 20000
    assert result.provider_amount_cents == 12000


def test_rate_override_changes_processing_fee():
    result = compute_visit_preauth_pricing(stripe_percent=0.036)

    assert result.processing_fee_amount_cents == 804
    assert result.total_amount_cents == 14000


@pytest.mark.parametrize(
    ("total", "provider"),
    [
        (100, 150),
        (100, 100),
        (0, 50),
        (-10, 5),
        (100, 0),
        (100, -1),
    ],
)
def test_invalid_split_is_rejected(total, provider):
    with pytest.raises(InvalidInput):
        compute_visit_preauth_pricing(total_pesos=total, provider_pesos=provider)


def test_split_without_room_for_processing_fee_is_rejected():
    with pytest.raises(InvalidInput):
        compute_visit_preauth_pricing(total_pesos=140, provider_pesos=139.99)
