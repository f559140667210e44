"""
🧪 test_booking_quote_flow.py — інтеграційний сценарій котирування бронювання

Перевіряє:
- Котирування з карткою: тип комісії з резолвера, сума із закріпленим відсотком
- Payload для JSON-відповіді та запис бронювання
- Котирування фіксованого візиту
- Відхилення непідтримуваних оверрайдів
"""

import pytest

from servi_pricing import compute_pricing
from servi_pricing.infrastructure.adapters import BookingQuoteService
from servi_pricing.infrastructure.adapters.booking_quote_facade import VISIT_PREAUTH_FEE_TYPE
from servi_pricing.errors import InvalidInput


@pytest.fixture
def facade():
    return BookingQuoteService()


def test_quote_amount_does_not_depend_on_card(facade):
    debit = facade.quote(500, card={"funding": "debit", "country": "MX"})
    foreign = facade.quote(500, card={"funding": "credit", "country": "US"})
    unknown = facade.quote(500)

    assert debit.processing_fee_type == "mx_domestic_debit"
    assert foreign.processing_fee_type == "mx_international_conversion"
    assert unknown.processing_fee_type == "mx_international_conversion"
    assert debit.result == foreign.result == unknown.result == compute_pricing(500)


def test_quote_payload_for_json_response(facade):
    payload = facade.quote(100, card={"country": "MX"}).to_dict()

    assert payload["providerAmountCents"] == 10000
    assert payload["bookingFeeAmountCents"] == 4000
    assert payload["processingFeeAmountCents"] == 1508
    assert payload["vatAmountCents"] == 882
    assert payload["totalAmountCents"] == 16390
    assert payload["processingFeeType"] == "mx_domestic"
    assert payload["processingFeeRule"]["percent"] == 0.036
    assert payload["components"]["guardrailMaxPesos"] == 40.0


def test_booking_record_columns(facade):
    record = facade.quote(500, card={"funding": "debit", "country": "MX"}).to_booking_record()

    assert record["amount"] == record["pricing_total_amount"] == 65654
    assert record["provider_amount"] == 50000
    assert record["booking_fee_amount"] == 8500
    assert record["processing_fee_amount"] == 4994
    assert record["vat_amount"] == 2160
    assert record["vat_rate"] == 0.16
    assert record["stripe_percent_fee"] == 0.061
    assert record["stripe_fixed_fee"] == 300
    assert record["processing_fee_type"] == "mx_domestic_debit"
    assert 0.075 < record["alpha_value"] < 0.17


def test_visit_quote(facade):
    quote = facade.quote_visit()
    record = quote.to_booking_record()

    assert quote.processing_fee_type == VISIT_PREAUTH_FEE_TYPE
    assert quote.to_dict()["processingFeeRule"] is None
    assert record["amount"] == 14000
    assert record["alpha_value"] is None
    assert (
        record["provider_amount"]
        + record["booking_fee_amount"]
        + record["processing_fee_amount"]
        + record["vat_amount"]
    ) == 14000


def test_overrides_pass_through(facade):
    assert facade.quote(500, vat_rate=0).result.vat_amount_cents == 0


@pytest.mark.parametrize("overrides", [{"stripe_percent": 0.036}, {"discount": 10}])
def test_unsupported_overrides_are_rejected(facade, overrides):
    with pytest.raises(InvalidInput):
        facade.quote(500, **overrides)
