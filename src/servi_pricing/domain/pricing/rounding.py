# ➗ servi_pricing/domain/pricing/rounding.py
"""
➗ Decimal-утиліти для грошей.

🔹 Уся грошова алгебра йде в Decimal (песо), у центи переходимо лише на межі.
🔹 Кожна межа має явний напрям округлення: ROUND_CEILING для сум на користь
    платформи, ROUND_HALF_UP для сум, що приходять ззовні.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from decimal import (
    ROUND_CEILING,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Any, Type

# 🧩 Внутрішні модулі проєкту
from servi_pricing.errors import InvalidInput

HUNDRED = Decimal("100")
ZERO = Decimal("0")
ONE = Decimal("1")

# Власний контекст грошової алгебри: результат не залежить від `decimal.getcontext()` викликача.
MONEY_CONTEXT = Context(
    prec=28,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def to_decimal(value: Any, field: str = "value", error: Type[InvalidInput] = InvalidInput) -> Decimal:
    """
    Приводить число/рядок до скінченного Decimal.

    Float проходить через `str`, щоб 0.16 став Decimal("0.16"), а не двійковим хвостом.
    None, bool, нечислові та нескінченні значення → `error`.
    """
    if value is None or isinstance(value, bool):
        raise error(f"{field} must be a number, got: {value!r}", field=field)
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise error(f"{field} must be a number, got: {value!r}", field=field, details=str(exc)) from exc
    if not result.is_finite():
        raise error(f"{field} must be finite, got: {value!r}", field=field)
    return result


def round_half_up(value: Decimal) -> int:
    """Округлює до цілого, половина — вгору (для додатних сум)."""
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def ceil_int(value: Decimal) -> int:
    """Стеля до цілого."""
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def to_cents(pesos: Decimal) -> int:
    """Песо → центи, ROUND_HALF_UP."""
    with localcontext(MONEY_CONTEXT):
        return round_half_up(pesos * HUNDRED)


def ceil_cents(pesos: Decimal) -> int:
    """Песо → центи зі стелею, щоб платформа ніколи не недоотримала."""
    with localcontext(MONEY_CONTEXT):
        return ceil_int(pesos * HUNDRED)


def cents_to_pesos(cents: int) -> Decimal:
    with localcontext(MONEY_CONTEXT):
        return Decimal(cents) / HUNDRED


def ceil_to_step(value: Decimal, step: Decimal) -> Decimal:
    """Округлює вгору до найближчого кратного `step` (наприклад, 41 → 45 при step=5)."""
    with localcontext(MONEY_CONTEXT):
        return (value / step).to_integral_value(rounding=ROUND_CEILING) * step
