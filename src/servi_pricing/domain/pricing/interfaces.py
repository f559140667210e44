# 🧩 servi_pricing/domain/pricing/interfaces.py
"""
🧩 Контракти та DTO доменного ціноутворення.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

# 🧩 Внутрішні модулі проєкту
from servi_pricing.errors import PricingInvariantError
from .rounding import to_cents


def _as_float(value: Optional[Decimal]) -> Optional[float]:
    return None if value is None else float(value)


# ================================
# 🏛️ СТРУКТУРИ ДАНИХ (DTO)
# ================================
@dataclass(frozen=True, slots=True)
class PricingInput:
    """DTO запиту ковзного розрахунку: ціна провайдера + опційні оверрайди формули."""
    provider_price_pesos: Any
    alpha_max: Any = None
    alpha_min: Any = None
    alpha_p0: Any = None
    alpha_gamma: Any = None
    beta: Any = None
    vat_rate: Any = None
    stripe_fixed: Any = None
    stripe_fee_vat_rate: Any = None

    def overrides(self) -> Dict[str, Any]:
        """Лише задані оверрайди (None → дефолт конфігу)."""
        return {
            name: getattr(self, name)
            for name in (
                "alpha_max",
                "alpha_min",
                "alpha_p0",
                "alpha_gamma",
                "beta",
                "vat_rate",
                "stripe_fixed",
                "stripe_fee_vat_rate",
            )
            if getattr(self, name) is not None
        }


@dataclass(frozen=True, slots=True)
class PricingComponents:
    """DTO з параметрами, якими було пораховано результат (для аудиту та БД)."""
    vat_rate: Decimal
    stripe_percent: Decimal
    stripe_fixed: Decimal                                   # 💵 Песо
    stripe_fee_vat_rate: Decimal
    alpha_value: Optional[Decimal] = None                   # 📈 None для фіксованого візиту
    booking_fee_raw_pesos: Optional[Decimal] = None
    booking_fee_clamped_pesos: Optional[Decimal] = None
    guardrail_max_pesos: Optional[Decimal] = None
    visit_preauth: bool = False
    visit_total_pesos: Optional[Decimal] = None
    visit_provider_pesos: Optional[Decimal] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "alphaValue": _as_float(self.alpha_value),
            "vatRate": float(self.vat_rate),
            "stripePercent": float(self.stripe_percent),
            "stripeFixed": float(self.stripe_fixed),
            "stripeFeeVatRate": float(self.stripe_fee_vat_rate),
        }
        if self.visit_preauth:
            payload.update(
                visitPreauth=True,
                visitTotalPesos=_as_float(self.visit_total_pesos),
                visitProviderPesos=_as_float(self.visit_provider_pesos),
            )
        else:
            payload.update(
                bookingFeeRawPesos=_as_float(self.booking_fee_raw_pesos),
                bookingFeeClampedPesos=_as_float(self.booking_fee_clamped_pesos),
                guardrailMaxPesos=_as_float(self.guardrail_max_pesos),
            )
        return payload


@dataclass(frozen=True, slots=True)
class PricingResult:
    """
    DTO повного розрахунку в цілих центах.

    Конструктор гарантує `provider + booking + processing + vat == total`:
    результат, що не сходиться до цента, створити неможливо.
    """
    provider_amount_cents: int
    booking_fee_amount_cents: int
    processing_fee_amount_cents: int
    vat_amount_cents: int
    total_amount_cents: int
    components: PricingComponents

    def __post_init__(self) -> None:
        parts = (
            self.provider_amount_cents,
            self.booking_fee_amount_cents,
            self.processing_fee_amount_cents,
            self.vat_amount_cents,
        )
        for value in parts + (self.total_amount_cents,):
            if not isinstance(value, int) or isinstance(value, bool):
                raise PricingInvariantError(f"Amounts must be integer cents, got: {value!r}")
            if value < 0:
                raise PricingInvariantError(f"Amounts cannot be negative, got: {value}")
        if sum(parts) != self.total_amount_cents:
            raise PricingInvariantError(
                f"Line items do not reconcile: {sum(parts)} != {self.total_amount_cents}",
                field="total_amount_cents",
            )

    def to_dict(self) -> Dict[str, Any]:
        """camelCase-payload для JSON-відповіді викликача."""
        return {
            "providerAmountCents": self.provider_amount_cents,
            "bookingFeeAmountCents": self.booking_fee_amount_cents,
            "processingFeeAmountCents": self.processing_fee_amount_cents,
            "vatAmountCents": self.vat_amount_cents,
            "totalAmountCents": self.total_amount_cents,
            "components": self.components.to_dict(),
        }

    def to_booking_record(self, processing_fee_type: Optional[str] = None) -> Dict[str, Any]:
        """Колонки ціноутворення для запису бронювання (значення зберігаються як є)."""
        c = self.components
        return {
            "amount": self.total_amount_cents,
            "provider_amount": self.provider_amount_cents,
            "booking_fee_amount": self.booking_fee_amount_cents,
            "processing_fee_amount": self.processing_fee_amount_cents,
            "vat_amount": self.vat_amount_cents,
            "pricing_total_amount": self.total_amount_cents,
            "vat_rate": float(c.vat_rate),
            "stripe_percent_fee": float(c.stripe_percent),
            "stripe_fixed_fee": to_cents(c.stripe_fixed),
            "stripe_fee_tax_rate": float(c.stripe_fee_vat_rate),
            "processing_fee_type": processing_fee_type,
            "alpha_value": _as_float(c.alpha_value),
        }


# ================================
# 💰 КОНТРАКТИ СЕРВІСІВ
# ================================
class IPricingService(ABC):
    """💰 Контракт ковзного розрахунку ціни."""

    @abstractmethod
    def compute(self, pricing_input: PricingInput) -> PricingResult:
        """Розраховує повну розбивку для ціни провайдера."""
        ...


class IVisitPreauthService(ABC):
    """🩺 Контракт фіксованого розподілу суми візиту."""

    @abstractmethod
    def compute(self, total_pesos: Any = None, provider_pesos: Any = None) -> PricingResult:
        """Розкладає фіксовану суму на частини, що сходяться до цента."""
        ...
