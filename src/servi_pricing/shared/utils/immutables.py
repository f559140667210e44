# 🧊 servi_pricing/shared/utils/immutables.py
"""
🧊 «Заморожування» таблиць правил і метаданих розрахунку.

🔹 `freeze` робить словники/списки незмінними, щоб таблицю комісій можна було
    ділити між потоками без синхронізації.
🔹 `thaw` повертає звичайні dict/list для JSON-відповідей.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from collections.abc import Mapping                      # 🧰 Перевірка словникових типів
from decimal import Decimal                              # 💵 Грошові скаляри
from enum import Enum                                    # 🏷️ Перерахування
from types import MappingProxyType                       # 🔒 Незмінна обгортка над dict
from typing import Any

FrozenMapping = MappingProxyType

_SCALARS = (str, bytes, int, float, bool, Decimal, Enum)


def freeze(obj: Any) -> Any:
    """Рекурсивно перетворює колекції на незмінні аналоги."""
    if obj is None or isinstance(obj, _SCALARS):
        return obj
    if isinstance(obj, Mapping):                         # 🧭 dict → MappingProxyType
        return MappingProxyType({key: freeze(value) for key, value in obj.items()})
    if isinstance(obj, (set, frozenset)):
        return frozenset(freeze(value) for value in obj)
    if isinstance(obj, (list, tuple)):
        return tuple(freeze(value) for value in obj)
    return obj


def thaw(obj: Any) -> Any:
    """Зворотне до `freeze`: мапи → dict, кортежі → list (для серіалізації)."""
    if isinstance(obj, Mapping):
        return {key: thaw(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [thaw(value) for value in obj]
    if isinstance(obj, frozenset):
        return sorted(thaw(value) for value in obj)
    return obj


def is_frozen_mapping(obj: Any) -> bool:
    """Перевіряє, чи є обʼєкт замороженою мапою (`freeze(dict)`)."""
    return isinstance(obj, MappingProxyType)
