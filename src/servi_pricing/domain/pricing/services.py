# 📦 servi_pricing/domain/pricing/services.py
"""
📦 Ковзний рушій ціноутворення бронювань.

🔹 Перетворює ціну провайдера на повну розбивку: виплата провайдеру, booking fee,
    комісія процесора, ПДВ і загальна сума в цілих центах.
🔹 Ставка booking fee (alpha) спадає з ростом ціни: дрібні замовлення мають ставку
    близько `alpha_max`, великі наближаються до `alpha_min`.
🔹 Комісія процесора «донараховується» (gross-up), щоб після утримання процесором
    відсотка + фіксованої частини (і ПДВ на них) платформа отримала свою суму.
🔹 Чиста функція: жодного I/O, часу чи глобального змінного стану.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                # 🪵 Логування кроків розрахунку
import math                                                   # 📈 Неперервна крива alpha (float)
from decimal import Decimal, localcontext                     # 💵 Точні гроші у власному контексті
from decimal import Overflow as DecimalOverflow
from typing import Any, Optional

# 🧩 Внутрішні модулі проєкту
from servi_pricing.errors import InvalidConfiguration, InvalidInput
from servi_pricing.shared.utils.logger import LOG_NAME
from .config import PricingConfig
from .interfaces import IPricingService, PricingComponents, PricingInput, PricingResult
from .rounding import (
    HUNDRED,
    MONEY_CONTEXT,
    ONE,
    ceil_cents,
    ceil_int,
    ceil_to_step,
    cents_to_pesos,
    to_cents,
    to_decimal,
)

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing")      # 🧾 Іменований логер сервісу


# ================================
# 🏛️ ГОЛОВНИЙ ДОМЕННИЙ СЕРВІС
# ================================
class SlidingPricingService(IPricingService):
    """💸 Доменний сервіс ковзного розрахунку booking fee з gross-up комісії процесора."""

    def __init__(self, cfg: Optional[PricingConfig] = None) -> None:
        """
        ⚙️ Прив'язує сервіс до конфігурації формули.

        Args:
            cfg: Параметри формули; за замовчуванням — іменовані дефолти.
        """
        self._cfg = cfg or PricingConfig()

    @property
    def config(self) -> PricingConfig:
        return self._cfg

    # ================================
    # 🔢 ПУБЛІЧНИЙ API РОЗРАХУНКУ
    # ================================
    def compute(self, pricing_input: PricingInput) -> PricingResult:
        """
        🚀 Розраховує повну розбивку для ціни провайдера.

        Args:
            pricing_input: Ціна провайдера в песо та опційні оверрайди формули.

        Returns:
            PricingResult: П'ять сум у центах, що сходяться до цента.

        Raises:
            InvalidInput: ціна відсутня, нечислова або ≤ 0.
            InvalidConfiguration: параметри формули поза межами або знаменник gross-up ≤ 0.
        """
        with localcontext(MONEY_CONTEXT):                                         # 🔒 Не залежимо від контексту викликача
            return self._compute(pricing_input)

    def _compute(self, pricing_input: PricingInput) -> PricingResult:
        cfg = self._cfg.with_overrides(**pricing_input.overrides())
        cfg.validate()

        price = to_decimal(pricing_input.provider_price_pesos, field="provider_price_pesos")
        if price <= 0:
            raise InvalidInput(
                f"Provider price must be a positive number, got: {price}",
                field="provider_price_pesos",
            )
        provider_cents = to_cents(price)                                          # 💵 Виплата провайдеру
        if provider_cents <= 0:
            raise InvalidInput(
                f"Provider price rounds to zero cents: {price}",
                field="provider_price_pesos",
            )
        # Крива й gross-up рахуються від ціни, вже округленої до цента (як і виплата провайдеру).
        provider_pesos = cents_to_pesos(provider_cents)

        # --- 📈 Крок 1: ставка booking fee ---
        alpha = self.alpha_value(provider_pesos, cfg)

        # --- 🧮 Крок 2–3: сирий fee та guardrail ---
        raw_fee = alpha * provider_pesos + cfg.beta
        guardrail_max = self.guardrail_max(provider_pesos, cfg)
        clamped_fee = min(guardrail_max, max(cfg.guardrail_floor, raw_fee))
        logger.debug(
            "🧮 Booking fee | price=%s alpha=%s raw=%s guardrail=[%s, %s] → clamped=%s",
            provider_pesos,
            alpha,
            raw_fee,
            cfg.guardrail_floor,
            guardrail_max,
            clamped_fee,
        )

        # --- 🔁 Крок 4–5: вгору до кроку 5 песо → центи ---
        booking_fee_pesos = ceil_to_step(clamped_fee, cfg.fee_step)
        booking_fee_cents = to_cents(booking_fee_pesos)

        # --- 💳 Крок 6: gross-up комісії процесора ---
        processing_fee_cents = self._processing_fee_cents(provider_pesos, booking_fee_cents, cfg)

        # --- 🧾 Крок 7: ПДВ на дохід платформи ---
        vat_cents = ceil_int(cfg.vat_rate * (booking_fee_cents + processing_fee_cents))

        # --- ➕ Крок 8: сума — лише додавання округлених частин ---
        total_cents = provider_cents + booking_fee_cents + processing_fee_cents + vat_cents

        logger.info(
            "💸 Pricing computed | provider=%s booking=%s processing=%s vat=%s total=%s",
            provider_cents,
            booking_fee_cents,
            processing_fee_cents,
            vat_cents,
            total_cents,
        )
        return PricingResult(
            provider_amount_cents=provider_cents,
            booking_fee_amount_cents=booking_fee_cents,
            processing_fee_amount_cents=processing_fee_cents,
            vat_amount_cents=vat_cents,
            total_amount_cents=total_cents,
            components=PricingComponents(
                vat_rate=cfg.vat_rate,
                stripe_percent=cfg.stripe_percent,
                stripe_fixed=cfg.stripe_fixed,
                stripe_fee_vat_rate=cfg.stripe_fee_vat_rate,
                alpha_value=alpha,
                booking_fee_raw_pesos=raw_fee,
                booking_fee_clamped_pesos=clamped_fee,
                guardrail_max_pesos=guardrail_max,
            ),
        )

    # ================================
    # 🧰 КРОКИ ФОРМУЛИ
    # ================================
    @staticmethod
    def alpha_value(price: Decimal, cfg: PricingConfig) -> Decimal:
        """
        Ставка booking fee: `alpha_min + (alpha_max - alpha_min) / (1 + (P/P0)^gamma)`.

        Крива рахується у float; результат повертається як Decimal для подальшої грошової алгебри.
        Коли float-хвіст зливається з `alpha_min` (ціни від ~1e17 песо), крива перераховується
        в Decimal з точністю 28 знаків. Лише за межею і цієї точності (~1e26 песо і вище)
        ставка дорівнює `alpha_min`.
        """
        with localcontext(MONEY_CONTEXT):
            ratio = price / cfg.alpha_p0
            try:
                curve = 1.0 + math.pow(float(ratio), float(cfg.alpha_gamma))
                alpha = Decimal(repr(float(cfg.alpha_min) + float(cfg.alpha_max - cfg.alpha_min) / curve))
            except OverflowError:
                alpha = cfg.alpha_min
            if alpha > cfg.alpha_min:
                return alpha
            try:
                return cfg.alpha_min + (cfg.alpha_max - cfg.alpha_min) / (ONE + ratio ** cfg.alpha_gamma)
            except DecimalOverflow:
                return cfg.alpha_min                                              # 📉 Межа кривої для астрономічних цін

    @staticmethod
    def guardrail_max(price: Decimal, cfg: PricingConfig) -> Decimal:
        """
        Верхня межа booking fee: `min(ceiling, share * P)`, але не нижче підлоги.

        Для малих цін (share * P < floor) межі інвертуються, і виграє підлога.
        """
        return max(cfg.guardrail_floor, min(cfg.guardrail_ceiling, cfg.guardrail_price_share * price))

    @staticmethod
    def _processing_fee_cents(price: Decimal, booking_fee_cents: int, cfg: PricingConfig) -> int:
        """Розвʼязує лінійне рівняння gross-up і округлює комісію вгору до цента."""
        p_eff = cfg.stripe_percent * (ONE + cfg.stripe_fee_vat_rate)
        f_eff = cfg.stripe_fixed * (ONE + cfg.stripe_fee_vat_rate)
        denominator = ONE - p_eff * (ONE + cfg.vat_rate)
        if denominator <= 0:
            raise InvalidConfiguration(
                "Invalid Stripe fee configuration; gross-up denominator must be positive",
                field="stripe_percent",
                details=f"denominator={denominator}",
            )
        booking_fee_pesos = Decimal(booking_fee_cents) / HUNDRED
        numerator = p_eff * price + p_eff * (ONE + cfg.vat_rate) * booking_fee_pesos + f_eff
        processing_fee_pesos = numerator / denominator
        logger.debug(
            "💳 Processing gross-up | p_eff=%s f_eff=%s denominator=%s → fee=%s",
            p_eff,
            f_eff,
            denominator,
            processing_fee_pesos,
        )
        return ceil_cents(processing_fee_pesos)


# ================================
# 🚪 ФУНКЦІОНАЛЬНИЙ ВХІД
# ================================
def compute_pricing(
    provider_price_pesos: Any,
    *,
    alpha_max: Any = None,
    alpha_min: Any = None,
    alpha_p0: Any = None,
    alpha_gamma: Any = None,
    beta: Any = None,
    vat_rate: Any = None,
    stripe_fixed: Any = None,
    stripe_fee_vat_rate: Any = None,
    config: Optional[PricingConfig] = None,
) -> PricingResult:
    """Розраховує ціну з дефолтним (або переданим) конфігом; None-оверрайди беруть дефолт."""
    return SlidingPricingService(config).compute(
        PricingInput(
            provider_price_pesos=provider_price_pesos,
            alpha_max=alpha_max,
            alpha_min=alpha_min,
            alpha_p0=alpha_p0,
            alpha_gamma=alpha_gamma,
            beta=beta,
            vat_rate=vat_rate,
            stripe_fixed=stripe_fixed,
            stripe_fee_vat_rate=stripe_fee_vat_rate,
        )
    )
