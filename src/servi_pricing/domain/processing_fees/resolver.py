# 🧭 servi_pricing/domain/processing_fees/resolver.py
"""
🧭 Вибір правила комісії процесора за метаданими картки.

🔹 Перше збіжне правило в порядку таблиці перемагає.
🔹 Без метаданих картки (або без збігу) повертається найдорожче правило таблиці:
    на момент котирування тип картки ще невідомий, і платформа не має недорахувати.
🔹 Найдорожче правило виводиться з таблиці один раз при створенні резолвера,
    тож зміна таблиці автоматично змінює fallback.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

# 🧩 Внутрішні модулі проєкту
from servi_pricing.errors import InvalidConfiguration
from servi_pricing.shared.utils.logger import LOG_NAME
from .interfaces import ProcessingFeeRule, card_info_from
from .rules import PROCESSING_FEE_RULES

logger = logging.getLogger(f"{LOG_NAME}.domain.processing_fees")


def select_worst_case_rule(rules: Sequence[ProcessingFeeRule]) -> ProcessingFeeRule:
    """
    Правило з найбільшим `percent + fixed/100`; за рівності — перше в таблиці.

    Raises:
        InvalidConfiguration: таблиця порожня.
    """
    if not rules:
        raise InvalidConfiguration("Processing fee rule table is empty", field="rules")
    worst = rules[0]
    for rule in rules[1:]:
        if rule.cost_score > worst.cost_score:
            worst = rule
    return worst


class ProcessingFeeResolver:
    """🧭 Незмінний резолвер над упорядкованою таблицею правил."""

    def __init__(self, rules: Optional[Iterable[ProcessingFeeRule]] = None) -> None:
        table: Tuple[ProcessingFeeRule, ...] = tuple(PROCESSING_FEE_RULES if rules is None else rules)
        seen = set()
        for rule in table:
            if rule.id in seen:
                raise InvalidConfiguration(f"Duplicate processing fee rule id: {rule.id}", field="rules")
            seen.add(rule.id)
        self._rules = table
        self._fallback = select_worst_case_rule(table)
        logger.debug(
            "🧭 Resolver ready | rules=%s fallback=%s",
            [rule.id for rule in table],
            self._fallback.id,
        )

    @property
    def rules(self) -> Tuple[ProcessingFeeRule, ...]:
        return self._rules

    @property
    def fallback_rule(self) -> ProcessingFeeRule:
        return self._fallback

    @property
    def default_rule_id(self) -> str:
        return self._fallback.id

    def resolve(self, card_info: Any = None) -> ProcessingFeeRule:
        """Повертає правило для картки; ніколи не падає."""
        card = card_info_from(card_info)
        if card.is_empty:
            logger.debug("🛡️ No card metadata, using worst case | rule=%s", self._fallback.id)
            return self._fallback
        for rule in self._rules:
            if rule.matches(card):
                logger.debug(
                    "💳 Rule matched | brand=%s funding=%s country=%s → %s",
                    card.brand,
                    card.funding,
                    card.country,
                    rule.id,
                )
                return rule
        logger.debug("🛡️ No rule matched, using worst case | rule=%s", self._fallback.id)
        return self._fallback

    def serialize(self) -> List[Dict[str, Any]]:
        """Таблиця правил у JSON-сумісному вигляді."""
        return [rule.to_dict() for rule in self._rules]


# ================================
# 📤 ТИПОВА ТАБЛИЦЯ
# ================================
_default_resolver = ProcessingFeeResolver()

DEFAULT_PROCESSING_FEE_RULE_ID: str = _default_resolver.default_rule_id


def resolve_processing_fee_rule(card_info: Any = None) -> ProcessingFeeRule:
    """Резолвить правило за типовою таблицею."""
    return _default_resolver.resolve(card_info)


def serialize_processing_fee_rules() -> List[Dict[str, Any]]:
    return _default_resolver.serialize()
