"""
🧪 test_pricing_logger.py — схема логування пакета

Перевіряє:
- JSON-форматтер з extra-полями (Decimal → рядок)
- Ініціалізацію з секції `logging` без дублювання хендлерів
- Дочірні логери під префіксом пакета
"""

import json
import logging
from decimal import Decimal
from logging.handlers import TimedRotatingFileHandler

import pytest

from servi_pricing.shared.utils import LOG_NAME, get_logger, init_logging, init_logging_from_config
from servi_pricing.shared.utils.logger import JsonFormatter


@pytest.fixture
def reset_package_logger():
    yield
    init_logging(console=False, file=None)


def test_json_formatter_serializes_extras():
    record = logging.makeLogRecord(
        {
            "name": f"{LOG_NAME}.domain.pricing",
            "levelname": "INFO",
            "levelno": logging.INFO,
            "msg": "💸 Pricing computed | total=%s",
            "args": (16390,),
            "total_cents": 16390,
            "vat_rate": Decimal("0.16"),
        }
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "💸 Pricing computed | total=16390"
    assert payload["total_cents"] == 16390
    assert payload["vat_rate"] == "0.16"
    assert payload["level"] == "INFO"


def test_reinit_replaces_handlers(tmp_path, reset_package_logger):
    log_file = tmp_path / "logs" / "pricing.log"

    init_logging(level="DEBUG", console=True, file=str(log_file))
    root = init_logging(level="DEBUG", console=True, file=str(log_file))

    file_handlers = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
    console_handlers = [
        h for h in root.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, TimedRotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    assert len(console_handlers) == 1
    assert log_file.exists()


def test_init_from_config_writes_json_lines(tmp_path, reset_package_logger):
    log_file = tmp_path / "pricing.jsonl"
    init_logging_from_config({"level": "DEBUG", "console": False, "json": True, "file": str(log_file)})

    get_logger("tests").info("🧪 hello | rule=%s", "mx_domestic", extra={"rule_id": "mx_domestic"})

    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    entry = next(line for line in lines if line["name"] == f"{LOG_NAME}.tests")
    assert entry["rule_id"] == "mx_domestic"
    assert entry["message"] == "🧪 hello | rule=mx_domestic"


def test_file_can_be_disabled(reset_package_logger):
    root = init_logging_from_config({"console": False, "file": None})

    assert not [h for h in root.handlers if isinstance(h, logging.StreamHandler)]


def test_get_logger_uses_package_prefix():
    assert get_logger().name == LOG_NAME
    assert get_logger("domain.pricing").name == f"{LOG_NAME}.domain.pricing"
