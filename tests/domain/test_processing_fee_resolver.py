"""
🧪 test_processing_fee_resolver.py — вибір правила комісії процесора

Перевіряє:
- Збіги за funding/country і пріоритет порядку таблиці
- Fallback на найдорожче правило для порожньої або невідомої картки
- Нормалізацію регістру та різні форми вхідних даних
- Серіалізацію таблиці та валідацію кастомних правил
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from servi_pricing.domain.processing_fees import (
    DEFAULT_PROCESSING_FEE_RULE_ID,
    PROCESSING_FEE_RULES,
    CardInfo,
    ProcessingFeeResolver,
    ProcessingFeeRule,
    resolve_processing_fee_rule,
    select_worst_case_rule,
    serialize_processing_fee_rules,
)
from servi_pricing.errors import InvalidConfiguration


def test_default_rule_is_international_conversion():
    assert DEFAULT_PROCESSING_FEE_RULE_ID == "mx_international_conversion"
    assert select_worst_case_rule(PROCESSING_FEE_RULES).percent == Decimal("0.061")


@pytest.mark.parametrize(
    ("card", "expected"),
    [
        ({"brand": "visa", "funding": "debit", "country": "MX"}, "mx_domestic_debit"),
        ({"brand": "mastercard", "funding": "credit", "country": "MX"}, "mx_domestic_credit"),
        ({"brand": "amex", "funding": "prepaid", "country": "MX"}, "mx_domestic"),
        ({"country": "MX"}, "mx_domestic"),
        ({"brand": "visa", "funding": "credit", "country": "US"}, "mx_international_conversion"),
        ({"funding": "debit"}, "mx_international_conversion"),
    ],
)
def test_first_matching_rule_wins(card, expected):
    assert resolve_processing_fee_rule(card).id == expected


@pytest.mark.parametrize("card", [None, {}, {"brand": "", "funding": "  ", "country": None}, CardInfo()])
def test_empty_card_resolves_to_worst_case(card):
    assert resolve_processing_fee_rule(card).id == DEFAULT_PROCESSING_FEE_RULE_ID


def test_matching_is_case_insensitive():
    rule = resolve_processing_fee_rule({"brand": "VISA", "funding": "Debit", "country": "mx"})

    assert rule.id == "mx_domestic_debit"


def test_accepts_payment_method_shapes():
    nested_dict = {"id": "pm_1", "card": {"funding": "credit", "country": "MX"}}
    nested_obj = SimpleNamespace(card=SimpleNamespace(brand="visa", funding="debit", country="MX"))
    flat_obj = SimpleNamespace(brand="visa", funding="credit", country="MX")

    assert resolve_processing_fee_rule(nested_dict).id == "mx_domestic_credit"
    assert resolve_processing_fee_rule(nested_obj).id == "mx_domestic_debit"
    assert resolve_processing_fee_rule(flat_obj).id == "mx_domestic_credit"


def test_wildcard_country_matches_any_country():
    resolver = ProcessingFeeResolver(
        [
            ProcessingFeeRule(id="any_debit", label="Debit", percent=Decimal("0.03"), fixed=Decimal("2"),
                              match={"funding": "debit", "country": "*"}),
            ProcessingFeeRule(id="other", label="Other", percent=Decimal("0.05"), fixed=Decimal("3")),
        ]
    )

    assert resolver.resolve({"funding": "debit", "country": "BR"}).id == "any_debit"
    assert resolver.resolve({"funding": "credit", "country": "BR"}).id == "other"


def test_unmatched_card_falls_back_to_worst_case_not_last_rule():
    resolver = ProcessingFeeResolver(
        [
            ProcessingFeeRule(id="expensive", label="E", percent=Decimal("0.05"), fixed=Decimal("4"),
                              match={"country": "US"}),
            ProcessingFeeRule(id="cheap", label="C", percent=Decimal("0.02"), fixed=Decimal("1"),
                              match={"country": "MX"}),
        ]
    )

    assert resolver.default_rule_id == "expensive"
    assert resolver.resolve({"country": "FR"}).id == "expensive"
    assert resolver.resolve(None).id == "expensive"


def test_worst_case_tie_keeps_first_rule():
    rules = [
        ProcessingFeeRule(id="first", label="A", percent=Decimal("0.04"), fixed=Decimal("2")),
        ProcessingFeeRule(id="second", label="B", percent=Decimal("0.03"), fixed=Decimal("3")),
    ]

    assert select_worst_case_rule(rules).id == "first"


def test_serialized_table_preserves_order_and_values():
    serialized = serialize_processing_fee_rules()

    assert [item["id"] for item in serialized] == [rule.id for rule in PROCESSING_FEE_RULES]
    assert serialized[0] == {
        "id": "mx_domestic_debit",
        "label": "Tarjeta débito nacional (MX)",
        "match": {"country": "MX", "funding": "debit"},
        "percent": 0.036,
        "fixed": 3.0,
    }
    assert serialized[-1]["match"] == {}
    assert serialized[-1]["percent"] == pytest.approx(0.061)


def test_serialized_table_is_a_copy():
    serialized = serialize_processing_fee_rules()
    serialized[0]["match"]["country"] = "US"

    assert resolve_processing_fee_rule({"funding": "debit", "country": "MX"}).id == "mx_domestic_debit"
    assert serialize_processing_fee_rules()[0]["match"]["country"] == "MX"


def test_rule_from_mapping_coerces_values():
    rule = ProcessingFeeRule.from_mapping({"id": "br", "percent": "0.045", "fixed": 2, "match": {"country": "BR"}})

    assert rule.label == "br"
    assert rule.percent == Decimal("0.045")
    assert rule.cost_score == Decimal("0.065")


@pytest.mark.parametrize(
    "data",
    [
        {"percent": 0.03},
        {"id": "x", "percent": "abc"},
        {"id": "x", "percent": -0.01},
        {"id": "x", "percent": 0.03, "match": {"issuer": "bbva"}},
    ],
)
def test_invalid_rule_definitions_are_rejected(data):
    with pytest.raises(InvalidConfiguration):
        ProcessingFeeRule.from_mapping(data)


def test_resolver_rejects_empty_and_duplicate_tables():
    with pytest.raises(InvalidConfiguration):
        ProcessingFeeResolver([])

    rule = PROCESSING_FEE_RULES[0]
    with pytest.raises(InvalidConfiguration):
        ProcessingFeeResolver([rule, rule])
