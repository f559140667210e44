from types import MappingProxyType
from decimal import Decimal
from enum import Enum, auto

from servi_pricing.shared.utils.immutables import freeze, is_frozen_mapping, thaw
from servi_pricing.domain.processing_fees import PROCESSING_FEE_RULES


class E(Enum):
    A = auto()


def test_freeze_scalars():
    assert freeze(None) is None
    assert freeze(1) == 1
    assert freeze(Decimal("0.061")) == Decimal("0.061")
    assert freeze(E.A) is E.A
    assert freeze("MX") == "MX"


def test_freeze_dict_nested():
    src = {"match": {"country": "MX", "brands": ["visa", "mc"]}, "tags": {"debit", "credit"}}
    frozen = freeze(src)
    assert isinstance(frozen, MappingProxyType)
    assert is_frozen_mapping(frozen)
    assert isinstance(frozen["match"], MappingProxyType)
    assert tuple == type(frozen["match"]["brands"])
    assert frozenset == type(frozen["tags"])


def test_freeze_immutability_enforced():
    frozen = freeze({"a": 1, "b": [2, 3]})
    try:
        frozen["a"] = 2  # type: ignore[index]
        assert False, "MappingProxyType must be immutable"
    except TypeError:
        pass
    try:
        frozen["b"][0] = 9  # type: ignore[index]
        assert False, "Nested tuple must be immutable"
    except TypeError:
        pass


def test_thaw_returns_plain_collections():
    frozen = freeze({"match": {"country": "MX"}, "ids": ("b", "a"), "set": {"y", "x"}})
    plain = thaw(frozen)
    assert plain == {"match": {"country": "MX"}, "ids": ["b", "a"], "set": ["x", "y"]}
    assert type(plain["match"]) is dict


def test_rule_match_is_frozen():
    rule = PROCESSING_FEE_RULES[0]
    assert is_frozen_mapping(rule.match)
    try:
        rule.match["country"] = "US"  # type: ignore[index]
        assert False, "Rule match must be immutable"
    except TypeError:
        pass
