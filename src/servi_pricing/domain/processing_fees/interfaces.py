# 💳 servi_pricing/domain/processing_fees/interfaces.py
"""
💳 DTO для вибору правила комісії процесора за метаданими картки.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field
from decimal import Decimal, localcontext
from typing import Any, Dict, Mapping, Optional

# 🧩 Внутрішні модулі проєкту
from servi_pricing.domain.pricing.rounding import HUNDRED, MONEY_CONTEXT, to_decimal
from servi_pricing.errors import InvalidConfiguration
from servi_pricing.shared.utils.immutables import freeze, thaw

WILDCARD = "*"
_MATCH_KEYS = ("brand", "funding", "country")


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


# ================================
# 🪪 МЕТАДАНІ КАРТКИ
# ================================
@dataclass(frozen=True, slots=True)
class CardInfo:
    """Метадані картки з платіжного методу; будь-яке поле може бути порожнім."""
    brand: str = ""
    funding: str = ""
    country: str = ""

    @classmethod
    def coerce(cls, card: Any = None) -> "CardInfo":
        """
        Приймає CardInfo, dict або обʼєкт платіжного методу (з атрибутом `card`
        або з атрибутами brand/funding/country). None → порожня картка.
        """
        if card is None:
            return cls()
        if isinstance(card, CardInfo):
            return card
        if isinstance(card, Mapping):
            nested = card.get("card")
            source: Any = nested if isinstance(nested, Mapping) else card
            return cls(
                brand=_text(source.get("brand")),
                funding=_text(source.get("funding")),
                country=_text(source.get("country")),
            )
        nested_obj = getattr(card, "card", None)
        if nested_obj is not None:
            return cls.coerce(nested_obj)
        return cls(
            brand=_text(getattr(card, "brand", None)),
            funding=_text(getattr(card, "funding", None)),
            country=_text(getattr(card, "country", None)),
        )

    def normalized(self) -> "CardInfo":
        """brand/funding у нижньому регістрі, country у верхньому."""
        return CardInfo(
            brand=_text(self.brand).lower(),
            funding=_text(self.funding).lower(),
            country=_text(self.country).upper(),
        )

    @property
    def is_empty(self) -> bool:
        return not (_text(self.brand) or _text(self.funding) or _text(self.country))


# ================================
# 📜 ПРАВИЛО КОМІСІЇ
# ================================
@dataclass(frozen=True, slots=True)
class ProcessingFeeRule:
    """
    Правило комісії процесора.

    `match` — умови лише по присутніх полях (кон'юнкція); відсутнє поле — будь-яке
    значення, `country: "*"` — явний wildcard. Порожній `match` підходить усім карткам.
    """
    id: str
    label: str
    percent: Decimal
    fixed: Decimal                                                  # 💵 Песо
    match: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        unknown = sorted(set(self.match) - set(_MATCH_KEYS))
        if unknown:
            raise InvalidConfiguration(
                f"Rule {self.id!r} has unsupported match keys: {', '.join(unknown)}",
                field="match",
            )
        percent = to_decimal(self.percent, field=f"{self.id}.percent", error=InvalidConfiguration)
        fixed = to_decimal(self.fixed, field=f"{self.id}.fixed", error=InvalidConfiguration)
        if percent < 0 or fixed < 0:
            raise InvalidConfiguration(f"Rule {self.id!r} cannot have negative fees", field="percent")
        object.__setattr__(self, "percent", percent)
        object.__setattr__(self, "fixed", fixed)
        object.__setattr__(self, "match", freeze({k: v for k, v in self.match.items() if _text(v)}))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProcessingFeeRule":
        """Будує правило з елемента `processing_fees.rules` конфігурації."""
        rule_id = _text(data.get("id"))
        if not rule_id:
            raise InvalidConfiguration("Processing fee rule requires an id", field="id")
        return cls(
            id=rule_id,
            label=_text(data.get("label")) or rule_id,
            percent=to_decimal(data.get("percent"), field=f"{rule_id}.percent", error=InvalidConfiguration),
            fixed=to_decimal(data.get("fixed", 0), field=f"{rule_id}.fixed", error=InvalidConfiguration),
            match=dict(data.get("match") or {}),
        )

    @property
    def cost_score(self) -> Decimal:
        """Зведена «ціна» правила: percent + fixed/100 (для вибору найгіршого випадку)."""
        with localcontext(MONEY_CONTEXT):
            return self.percent + self.fixed / HUNDRED

    def matches(self, card: CardInfo) -> bool:
        """Перевіряє правило проти вже нормалізованої картки."""
        brand = self.match.get("brand")
        if brand and _text(brand).lower() != card.brand:
            return False
        funding = self.match.get("funding")
        if funding and _text(funding).lower() != card.funding:
            return False
        country = self.match.get("country")
        if country:
            target = _text(country).upper()
            if target != WILDCARD and target != card.country:
                return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "match": thaw(self.match),
            "percent": float(self.percent),
            "fixed": float(self.fixed),
        }


def card_info_from(card: Optional[Any]) -> CardInfo:
    """Скорочення для `CardInfo.coerce(card).normalized()`."""
    return CardInfo.coerce(card).normalized()
