# 📬 servi_pricing/infrastructure/adapters/booking_quote_facade.py
"""
📬 BookingQuoteService — тонкий фасад для викликачів (HTTP-хендлерів, вебхуків).

🔹 Поєднує резолвер правил комісії та рушії ціноутворення в один виклик.
🔹 Правило картки потрапляє лише в колонку `processing_fee_type`: сума для клієнта
    завжди рахується із закріпленим найгіршим відсотком, щоб котирування не залежало
    від картки, якою клієнт зрештою заплатить.
🔹 Віддає готові payload-и для JSON-відповіді та для запису бронювання.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

# 🧩 Внутрішні модулі проєкту
from servi_pricing.domain.pricing import (
    IPricingService,
    IVisitPreauthService,
    PricingConfig,
    PricingInput,
    PricingResult,
    SlidingPricingService,
    VisitPreauthService,
)
from servi_pricing.domain.processing_fees import ProcessingFeeResolver, ProcessingFeeRule
from servi_pricing.errors import InvalidInput
from servi_pricing.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.adapters.booking_quote")

VISIT_PREAUTH_FEE_TYPE = "visit_preauth_fixed"


# ================================
# 📦 РЕЗУЛЬТАТ КОТИРУВАННЯ
# ================================
@dataclass(frozen=True, slots=True)
class BookingQuote:
    """Результат розрахунку разом із типом комісії для збереження."""
    result: PricingResult
    processing_fee_type: str
    processing_fee_rule: Optional[ProcessingFeeRule] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = self.result.to_dict()
        payload["processingFeeType"] = self.processing_fee_type
        payload["processingFeeRule"] = self.processing_fee_rule.to_dict() if self.processing_fee_rule else None
        return payload

    def to_booking_record(self) -> Dict[str, Any]:
        return self.result.to_booking_record(processing_fee_type=self.processing_fee_type)


# ================================
# 🏛️ КОНТРАКТ ФАСАДА
# ================================
class IBookingQuoteFacade(Protocol):
    """🏛️ Мінімальний API котирування для зовнішніх шарів."""

    def quote(self, provider_price_pesos: Any, card: Any = None, **overrides: Any) -> BookingQuote:
        ...

    def quote_visit(self, total_pesos: Any = None, provider_pesos: Any = None) -> BookingQuote:
        ...


# ================================
# 🧩 ФАСАД
# ================================
class BookingQuoteService(IBookingQuoteFacade):
    """🧩 Обгортка над резолвером та рушіями без залежностей від транспорту."""

    def __init__(
        self,
        pricing: Optional[IPricingService] = None,
        resolver: Optional[ProcessingFeeResolver] = None,
        visit_preauth: Optional[IVisitPreauthService] = None,
    ) -> None:
        self._pricing = pricing or SlidingPricingService()
        self._resolver = resolver or ProcessingFeeResolver()
        self._visit_preauth = visit_preauth or VisitPreauthService()

    @property
    def resolver(self) -> ProcessingFeeResolver:
        return self._resolver

    def quote(self, provider_price_pesos: Any, card: Any = None, **overrides: Any) -> BookingQuote:
        """
        Котирує бронювання за ціною провайдера.

        Args:
            provider_price_pesos: Ціна провайдера в песо.
            card: Метадані картки (dict, CardInfo або платіжний метод); опційно.
            **overrides: Оверрайди формули (alpha_max, vat_rate, ...).
        """
        unsupported = sorted(set(overrides) - PricingConfig.OVERRIDABLE_FIELDS)
        if unsupported:
            raise InvalidInput(f"Unsupported pricing overrides: {', '.join(unsupported)}", field=unsupported[0])
        rule = self._resolver.resolve(card)
        result = self._pricing.compute(PricingInput(provider_price_pesos=provider_price_pesos, **overrides))
        logger.info(
            "📬 Booking quoted | total=%s processing_fee_type=%s",
            result.total_amount_cents,
            rule.id,
        )
        return BookingQuote(result=result, processing_fee_type=rule.id, processing_fee_rule=rule)

    def quote_visit(self, total_pesos: Any = None, provider_pesos: Any = None) -> BookingQuote:
        """Котирує фіксований візит (за замовчуванням 140 / 90 песо)."""
        result = self._visit_preauth.compute(total_pesos=total_pesos, provider_pesos=provider_pesos)
        logger.info("📬 Visit quoted | total=%s", result.total_amount_cents)
        return BookingQuote(result=result, processing_fee_type=VISIT_PREAUTH_FEE_TYPE)
