# 📦 servi_pricing/config/setup/container.py
"""
📦 Контейнер залежностей рушія ціноутворення.

🔹 Перетворює секції конфігурації на незмінні конфіги доменних сервісів.
🔹 Створює сервіси в правильному порядку DI і кешує їх.
🔹 Доменні сервіси ніколи не читають ConfigService напряму — лише через контейнер.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                           # 🧾 Базові засоби логування
from typing import Any, Mapping, Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from servi_pricing.config.config_service import ConfigService, get_config_service  # 🗂️ Джерело конфігурації
from servi_pricing.domain.pricing import (                              # 💵 Доменне ціноутворення
    PricingConfig,
    SlidingPricingService,
    VisitPreauthConfig,
    VisitPreauthService,
)
from servi_pricing.domain.processing_fees import (                      # 💳 Правила комісії процесора
    PROCESSING_FEE_RULES,
    ProcessingFeeResolver,
    ProcessingFeeRule,
)
from servi_pricing.errors import InvalidConfiguration                    # 🚨 Помилки конфігурації
from servi_pricing.infrastructure.adapters import BookingQuoteService    # 📬 Фасад котирувань
from servi_pricing.shared.utils.logger import LOG_NAME, init_logging_from_config

logger = logging.getLogger(f"{LOG_NAME}.container")


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _section(config: ConfigService, key: str) -> Mapping[str, Any]:
    """Повертає секцію-словник або порожній словник; інший тип → InvalidConfiguration."""
    node = config.get(key, {})
    if node is None:
        return {}
    if not isinstance(node, Mapping):
        raise InvalidConfiguration(f"Config section '{key}' must be a mapping", field=key)
    return node


def build_pricing_config(config: ConfigService) -> PricingConfig:
    return PricingConfig.from_mapping(_section(config, "pricing"))


def build_visit_preauth_config(config: ConfigService) -> VisitPreauthConfig:
    return VisitPreauthConfig.from_mapping(_section(config, "visit_preauth"))


def build_processing_fee_rules(config: ConfigService) -> Tuple[ProcessingFeeRule, ...]:
    """Таблиця з `processing_fees.rules` або типова, якщо секції немає."""
    raw_rules = _section(config, "processing_fees").get("rules")
    if raw_rules is None:
        return PROCESSING_FEE_RULES
    if not isinstance(raw_rules, list):
        raise InvalidConfiguration("processing_fees.rules must be a list", field="processing_fees.rules")
    rules = []
    for item in raw_rules:
        if not isinstance(item, Mapping):
            raise InvalidConfiguration("Each processing fee rule must be a mapping", field="processing_fees.rules")
        rules.append(ProcessingFeeRule.from_mapping(item))
    return tuple(rules)


# ================================
# 🏗️ КОНТЕЙНЕР
# ================================
class PricingContainer:
    """🏗️ Лінива збірка сервісів з однієї конфігурації."""

    def __init__(self, config: Optional[ConfigService] = None, *, init_logs: bool = False) -> None:
        self._config = config or get_config_service()
        if init_logs:
            init_logging_from_config(self._config.get("logging", {}))
        self._pricing_service: Optional[SlidingPricingService] = None
        self._visit_preauth_service: Optional[VisitPreauthService] = None
        self._resolver: Optional[ProcessingFeeResolver] = None
        self._quote_service: Optional[BookingQuoteService] = None

    @property
    def config(self) -> ConfigService:
        return self._config

    @property
    def pricing_service(self) -> SlidingPricingService:
        if self._pricing_service is None:
            self._pricing_service = SlidingPricingService(build_pricing_config(self._config))
            logger.debug("🧱 SlidingPricingService built | cfg=%s", self._pricing_service.config)
        return self._pricing_service

    @property
    def visit_preauth_service(self) -> VisitPreauthService:
        if self._visit_preauth_service is None:
            self._visit_preauth_service = VisitPreauthService(build_visit_preauth_config(self._config))
        return self._visit_preauth_service

    @property
    def resolver(self) -> ProcessingFeeResolver:
        if self._resolver is None:
            self._resolver = ProcessingFeeResolver(build_processing_fee_rules(self._config))
        return self._resolver

    @property
    def quote_service(self) -> BookingQuoteService:
        if self._quote_service is None:
            self._quote_service = BookingQuoteService(
                pricing=self.pricing_service,
                resolver=self.resolver,
                visit_preauth=self.visit_preauth_service,
            )
            logger.info("✅ BookingQuoteService ready | fallback_rule=%s", self.resolver.default_rule_id)
        return self._quote_service
