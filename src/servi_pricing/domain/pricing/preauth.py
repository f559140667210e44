# 🩺 servi_pricing/domain/pricing/preauth.py
"""
🩺 Розподіл фіксованої суми візиту з попередньою авторизацією.

🔹 Клієнт платить фіксовану суму (140 песо), провайдер отримує фіксовану частку (90).
🔹 Із залишку виділяються комісія процесора (від усієї суми, без gross-up), ПДВ і booking fee.
🔹 Кожна частина округлюється окремо, тож залишок округлення («residue») повністю
    поглинає booking fee: саме він є «буферною» статтею, інші частини не рухаються.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from dataclasses import replace
from decimal import Decimal, localcontext
from typing import Any, Optional

# 🧩 Внутрішні модулі проєкту
from servi_pricing.errors import InvalidInput
from servi_pricing.shared.utils.logger import LOG_NAME
from .config import VisitPreauthConfig
from .interfaces import IVisitPreauthService, PricingComponents, PricingResult
from .rounding import HUNDRED, MONEY_CONTEXT, ONE, round_half_up, to_cents, to_decimal

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing.preauth")


class VisitPreauthService(IVisitPreauthService):
    """🩺 Розкладає фіксовану суму візиту на чотири частини, що сходяться до цента."""

    def __init__(self, cfg: Optional[VisitPreauthConfig] = None) -> None:
        self._cfg = cfg or VisitPreauthConfig()

    @property
    def config(self) -> VisitPreauthConfig:
        return self._cfg

    def compute(self, total_pesos: Any = None, provider_pesos: Any = None) -> PricingResult:
        """
        Розподіляє суму візиту.

        Args:
            total_pesos: Сума, яку платить клієнт; None → значення з конфігу.
            provider_pesos: Частка провайдера; None → значення з конфігу.

        Raises:
            InvalidInput: сума ≤ 0, частка ≤ 0 або ≥ суми, або комісія процесора
                не вміщається в залишок (booking fee не може стати відʼємним).
        """
        with localcontext(MONEY_CONTEXT):                                 # 🔒 Не залежимо від контексту викликача
            return self._compute(total_pesos, provider_pesos)

    def _compute(self, total_pesos: Any, provider_pesos: Any) -> PricingResult:
        cfg = self._cfg
        cfg.validate()
        total_value = to_decimal(cfg.total_pesos if total_pesos is None else total_pesos, field="total_pesos")
        provider_value = to_decimal(
            cfg.provider_pesos if provider_pesos is None else provider_pesos,
            field="provider_pesos",
        )

        total_cents = to_cents(total_value)
        provider_cents = to_cents(provider_value)
        if total_cents <= 0:
            raise InvalidInput(f"Visit preauth total must be a positive number, got: {total_value}", field="total_pesos")
        if provider_cents <= 0 or provider_cents >= total_cents:
            raise InvalidInput(
                f"Visit provider amount must be positive and below total, got: {provider_value} of {total_value}",
                field="provider_pesos",
            )

        non_provider_cents = total_cents - provider_cents
        processing_cents = round_half_up(
            (cfg.stripe_percent * (Decimal(total_cents) / HUNDRED) + cfg.stripe_fixed) * HUNDRED
        )
        base_before_vat_cents = max(0, round_half_up(Decimal(non_provider_cents) / (ONE + cfg.vat_rate)))
        booking_cents = max(0, base_before_vat_cents - processing_cents)
        vat_cents = max(0, non_provider_cents - base_before_vat_cents)

        # --- 🔁 Перший прохід: residue → booking fee ---
        residue = non_provider_cents - (processing_cents + booking_cents + vat_cents)
        if residue:
            booking_cents = max(0, booking_cents + residue)
            logger.debug("🔁 Preauth residue absorbed | residue=%s booking=%s", residue, booking_cents)

        # --- 🔁 Другий прохід: звірка з повною сумою ---
        check = provider_cents + booking_cents + processing_cents + vat_cents
        if check != total_cents:
            booking_cents = max(0, booking_cents + (total_cents - check))
            check = provider_cents + booking_cents + processing_cents + vat_cents

        if check != total_cents:
            raise InvalidInput(
                "Visit split leaves no room for the processing fee",
                field="provider_pesos",
                details=f"processing={processing_cents} remainder_before_vat={base_before_vat_cents}",
            )

        logger.info(
            "🩺 Visit preauth computed | provider=%s booking=%s processing=%s vat=%s total=%s",
            provider_cents,
            booking_cents,
            processing_cents,
            vat_cents,
            total_cents,
        )
        return PricingResult(
            provider_amount_cents=provider_cents,
            booking_fee_amount_cents=booking_cents,
            processing_fee_amount_cents=processing_cents,
            vat_amount_cents=vat_cents,
            total_amount_cents=total_cents,
            components=PricingComponents(
                vat_rate=cfg.vat_rate,
                stripe_percent=cfg.stripe_percent,
                stripe_fixed=cfg.stripe_fixed,
                stripe_fee_vat_rate=cfg.stripe_fee_vat_rate,
                visit_preauth=True,
                visit_total_pesos=total_value,
                visit_provider_pesos=provider_value,
            ),
        )


def compute_visit_preauth_pricing(
    total_pesos: Any = None,
    provider_pesos: Any = None,
    *,
    vat_rate: Any = None,
    stripe_percent: Any = None,
    stripe_fixed: Any = None,
    config: Optional[VisitPreauthConfig] = None,
) -> PricingResult:
    """Розподіл візиту з дефолтами 140 / 90 песо; ставки можна перевизначити для одного виклику."""
    cfg = config or VisitPreauthConfig()
    overrides = {
        key: to_decimal(value, field=key)
        for key, value in (
            ("vat_rate", vat_rate),
            ("stripe_percent", stripe_percent),
            ("stripe_fixed", stripe_fixed),
        )
        if value is not None
    }
    if overrides:
        cfg = replace(cfg, **overrides)
    return VisitPreauthService(cfg).compute(total_pesos=total_pesos, provider_pesos=provider_pesos)
