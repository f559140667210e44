# ⚙️ servi_pricing/config/config_service.py
"""
⚙️ config_service.py — Сервіс доступу до статичної конфігурації ціноутворення.

🔹 Клас `ConfigService`:
- Завантажує config.yaml, опційний config.json та змінні середовища (.env).
- Надає єдиний метод .get() з крапковими ключами (`pricing.vat_rate`).
- Пріоритет: config.yaml → config.json → змінні середовища (середовище перемагає).
🔹 `get_config_service()` кешує один екземпляр на процес; після завантаження
    конфігурація лише читається.
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import copy                                 # 🧬 Глибокі копії секцій для викликачів
import json                                 # 📄 Робота з JSON-файлами
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from functools import lru_cache             # ♻️ Один екземпляр на процес
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Dict, Mapping, Optional, Union

# 🧩 Внутрішні модулі проєкту
from servi_pricing.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.config")

CONFIG_DIR = Path(__file__).parent

# 🔐 Змінна середовища → крапковий ключ конфігурації
ENV_KEYS: Mapping[str, str] = {
    "PRICING_VAT_RATE": "pricing.vat_rate",
    "PRICING_STRIPE_PERCENT": "pricing.stripe_percent",
    "PRICING_STRIPE_FIXED": "pricing.stripe_fixed",
    "PRICING_GUARDRAIL_CEILING": "pricing.guardrail_ceiling",
    "VISIT_PREAUTH_TOTAL_PESOS": "visit_preauth.total_pesos",
    "VISIT_PREAUTH_PROVIDER_PESOS": "visit_preauth.provider_pesos",
    "LOG_LEVEL": "logging.level",
    "LOG_FILE": "logging.file",
}


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Обʼєднує всі джерела конфігурації в один словник.
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        *,
        env_file: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Args:
            config_dir: Каталог з config.yaml / config.json (за замовчуванням — каталог пакета).
            env_file: Шлях до .env; None → стандартний пошук python-dotenv.
            environ: Джерело змінних середовища (для тестів); None → os.environ.
        """
        self._config_dir = Path(config_dir) if config_dir else CONFIG_DIR
        self._env_file = env_file
        self._environ = environ
        self._config: Dict[str, Any] = {}
        self._load_all_configs()

    def _load_all_configs(self) -> None:
        """📥 Завантажує всі джерела в один словник."""

        # --- 1. YAML-файл ---
        yaml_path = self._config_dir / "config.yaml"
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
            logger.debug("📘 Loaded %s", yaml_path)
        except FileNotFoundError:
            logger.warning("⚠️ config.yaml not found | path=%s", yaml_path)
        except yaml.YAMLError as e:
            logger.warning("⚠️ config.yaml is invalid | path=%s error=%s", yaml_path, e)

        # --- 2. JSON-файл (опційний) ---
        json_path = self._config_dir / "config.json"
        if json_path.exists():
            try:
                with open(json_path, "r", encoding="utf-8") as f:
                    self._deep_update(self._config, json.load(f))
                logger.debug("📄 Loaded %s", json_path)
            except json.JSONDecodeError as e:
                logger.warning("⚠️ config.json is invalid | path=%s error=%s", json_path, e)

        # --- 3. Змінні середовища ---
        if self._environ is None:
            load_dotenv(self._env_file)          # 🔐 Не перезаписує вже встановлені змінні
            environ: Mapping[str, str] = os.environ
        else:
            environ = self._environ
        env_vars = {key: environ.get(name) for name, key in ENV_KEYS.items()}
        env_vars = {key: value for key, value in env_vars.items() if value not in (None, "")}
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logger.info("✅ Configuration loaded | sections=%s", sorted(self._config))

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Отримує значення за крапковим ключем (наприклад: 'pricing.vat_rate').

        Секції повертаються копією, тож викликач не може змінити спільний стан.
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return copy.deepcopy(value)

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================
    @staticmethod
    def _unflatten_dict(d: Mapping[str, Any]) -> Dict[str, Any]:
        """🔁 'pricing.vat_rate' → {'pricing': {'vat_rate': ...}}"""
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split(".")
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    @classmethod
    def _deep_update(cls, source: Dict[str, Any], overrides: Mapping[str, Any]) -> None:
        """🔁 Рекурсивно зливає словники; вкладені dict зливаються, решта перезаписується."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                cls._deep_update(source[key], value)
            else:
                source[key] = value


@lru_cache(maxsize=None)
def get_config_service() -> ConfigService:
    """Спільний екземпляр із конфігурацією пакета."""
    return ConfigService()
