# ⚙️ servi_pricing/domain/pricing/config.py
"""
⚙️ Незмінні параметри формул ціноутворення.

🔹 `PricingConfig` — ковзна формула booking fee, guardrail-и та комісія процесора.
🔹 `VisitPreauthConfig` — фіксований продукт «візит» (140 / 90 песо).
🔹 Конфіг передається в сервіс явно; глобального змінного стану немає, тож
    різні деплойменти або A/B-варіанти просто створюють свій екземпляр.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                            # 🧾 Логування відхилених параметрів
from dataclasses import dataclass, fields, replace                        # 🧱 Frozen-конфіг і копії з оверрайдами
from decimal import Decimal                                               # 💵 Гроші та ставки
from typing import Any, ClassVar, FrozenSet, Mapping, Optional

# 🧩 Внутрішні модулі проєкту
from servi_pricing.errors import InvalidConfiguration, InvalidInput
from servi_pricing.shared.utils.logger import LOG_NAME
from .rounding import ONE, ZERO, to_decimal

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing.config")


# ================================
# 🧾 ІМЕНОВАНІ ДЕФОЛТИ
# ================================
DEFAULT_ALPHA_MAX = Decimal("0.17")
DEFAULT_ALPHA_MIN = Decimal("0.075")
DEFAULT_ALPHA_P0 = Decimal("1200")
DEFAULT_ALPHA_GAMMA = Decimal("1.2")
DEFAULT_BETA = Decimal("9")                                               # 💵 MXN
DEFAULT_VAT_RATE = Decimal("0.16")
DEFAULT_STRIPE_PERCENT = Decimal("0.061")                                 # 🛡️ Найгірший випадок: міжнародна картка з конвертацією
DEFAULT_STRIPE_FIXED = Decimal("3")                                       # 💵 MXN
DEFAULT_STRIPE_FEE_VAT_RATE = Decimal("0.16")
DEFAULT_GUARDRAIL_FLOOR = Decimal("40")
DEFAULT_GUARDRAIL_CEILING = Decimal("500")
DEFAULT_GUARDRAIL_PRICE_SHARE = Decimal("0.20")
DEFAULT_FEE_STEP = Decimal("5")

VISIT_PREAUTH_TOTAL_PESOS = Decimal("140")
VISIT_PREAUTH_PROVIDER_PESOS = Decimal("90")


def _coerce_fields(cls: type, data: Mapping[str, Any], error: type) -> dict:
    """Перетворює відомі поля словника в Decimal; невідомі ключі ігноруються з попередженням."""
    known = {f.name for f in fields(cls)}
    converted = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("⚠️ Unknown %s key ignored | key=%s", cls.__name__, key)
            continue
        if value is None:
            continue
        converted[key] = to_decimal(value, field=key, error=error)
    return converted


# ================================
# 💸 КОВЗНА ФОРМУЛА
# ================================
@dataclass(frozen=True, slots=True)
class PricingConfig:
    """Параметри ковзної формули booking fee та gross-up комісії процесора."""

    alpha_max: Decimal = DEFAULT_ALPHA_MAX
    alpha_min: Decimal = DEFAULT_ALPHA_MIN
    alpha_p0: Decimal = DEFAULT_ALPHA_P0
    alpha_gamma: Decimal = DEFAULT_ALPHA_GAMMA
    beta: Decimal = DEFAULT_BETA
    vat_rate: Decimal = DEFAULT_VAT_RATE
    stripe_percent: Decimal = DEFAULT_STRIPE_PERCENT
    stripe_fixed: Decimal = DEFAULT_STRIPE_FIXED
    stripe_fee_vat_rate: Decimal = DEFAULT_STRIPE_FEE_VAT_RATE
    guardrail_floor: Decimal = DEFAULT_GUARDRAIL_FLOOR
    guardrail_ceiling: Decimal = DEFAULT_GUARDRAIL_CEILING
    guardrail_price_share: Decimal = DEFAULT_GUARDRAIL_PRICE_SHARE
    fee_step: Decimal = DEFAULT_FEE_STEP

    # Поля, які викликач може змінити для окремого розрахунку.
    # stripe_percent сюди не входить: відсоток процесора закріплений на рівні деплойменту.
    OVERRIDABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset(
        {
            "alpha_max",
            "alpha_min",
            "alpha_p0",
            "alpha_gamma",
            "beta",
            "vat_rate",
            "stripe_fixed",
            "stripe_fee_vat_rate",
        }
    )

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "PricingConfig":
        """Будує конфіг із секції `pricing` конфігурації (усі ключі опційні)."""
        cfg = cls(**_coerce_fields(cls, data or {}, InvalidConfiguration))
        cfg.validate()
        return cfg

    def with_overrides(self, **overrides: Any) -> "PricingConfig":
        """
        Повертає копію з оверрайдами для одного розрахунку.

        None означає «взяти дефолт». Невідомі поля та `stripe_percent` → InvalidInput.
        """
        rejected = sorted(key for key in overrides if key not in self.OVERRIDABLE_FIELDS)
        if rejected:
            raise InvalidInput(
                f"Unsupported pricing overrides: {', '.join(rejected)}",
                field=rejected[0],
            )
        converted = {
            key: to_decimal(value, field=key)
            for key, value in overrides.items()
            if value is not None
        }
        return replace(self, **converted) if converted else self

    def validate(self) -> None:
        """Перевіряє межі параметрів; порушення → InvalidConfiguration."""
        if not (ZERO <= self.alpha_min <= ONE and ZERO <= self.alpha_max <= ONE):
            raise InvalidConfiguration(
                f"alpha_min and alpha_max must lie in [0, 1], got: {self.alpha_min}, {self.alpha_max}",
                field="alpha_max",
            )
        if self.alpha_max <= self.alpha_min:
            raise InvalidConfiguration(
                f"alpha_max must exceed alpha_min, got: {self.alpha_max} <= {self.alpha_min}",
                field="alpha_max",
            )
        if self.alpha_p0 <= 0:
            raise InvalidConfiguration(f"alpha_p0 must be positive, got: {self.alpha_p0}", field="alpha_p0")
        if self.alpha_gamma <= 0:
            raise InvalidConfiguration(f"alpha_gamma must be positive, got: {self.alpha_gamma}", field="alpha_gamma")
        if not (ZERO <= self.vat_rate < ONE):
            raise InvalidConfiguration(f"vat_rate must lie in [0, 1), got: {self.vat_rate}", field="vat_rate")
        if self.stripe_percent < 0 or self.stripe_fixed < 0 or self.stripe_fee_vat_rate < 0:
            raise InvalidConfiguration("Stripe fee parameters cannot be negative", field="stripe_percent")
        if self.guardrail_floor < 0:
            raise InvalidConfiguration(
                f"guardrail_floor cannot be negative, got: {self.guardrail_floor}", field="guardrail_floor"
            )
        if self.guardrail_price_share <= 0:
            raise InvalidConfiguration(
                f"guardrail_price_share must be positive, got: {self.guardrail_price_share}",
                field="guardrail_price_share",
            )
        if self.fee_step <= 0:
            raise InvalidConfiguration(f"fee_step must be positive, got: {self.fee_step}", field="fee_step")


# ================================
# 🩺 ФІКСОВАНИЙ ВІЗИТ
# ================================
@dataclass(frozen=True, slots=True)
class VisitPreauthConfig:
    """Параметри фіксованого продукту «візит» з попередньою авторизацією."""

    total_pesos: Decimal = VISIT_PREAUTH_TOTAL_PESOS
    provider_pesos: Decimal = VISIT_PREAUTH_PROVIDER_PESOS
    vat_rate: Decimal = DEFAULT_VAT_RATE
    stripe_percent: Decimal = DEFAULT_STRIPE_PERCENT
    stripe_fixed: Decimal = DEFAULT_STRIPE_FIXED
    stripe_fee_vat_rate: Decimal = DEFAULT_STRIPE_FEE_VAT_RATE         # 🧾 Лише для метаданих результату

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "VisitPreauthConfig":
        """Будує конфіг із секції `visit_preauth`."""
        cfg = cls(**_coerce_fields(cls, data or {}, InvalidConfiguration))
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if not (ZERO <= self.vat_rate < ONE):
            raise InvalidConfiguration(f"vat_rate must lie in [0, 1), got: {self.vat_rate}", field="vat_rate")
        if self.stripe_percent < 0 or self.stripe_fixed < 0:
            raise InvalidConfiguration("Stripe fee parameters cannot be negative", field="stripe_percent")
