# ⚙️ servi_pricing/config/__init__.py
"""⚙️ Конфігурація пакета: джерела (YAML, JSON, .env) та збірка сервісів."""

from .config_service import ConfigService, get_config_service

__all__ = ["ConfigService", "get_config_service"]
