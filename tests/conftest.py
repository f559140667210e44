# tests/conftest.py
import os
import sys
from pathlib import Path

import pytest

# 1) Гасимо автопідхоплення сторонніх плагінів
os.environ.setdefault("PYTEST_DISABLE_PLUGIN_AUTOLOAD", "1")

# 2) Додаємо src у sys.path, щоб працював імпорт "servi_pricing.…" без встановлення пакета
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def config_dir(tmp_path):
    """Порожній каталог конфігурації; тест сам пише config.yaml / config.json."""
    return tmp_path


@pytest.fixture
def write_yaml(config_dir):
    def _write(text: str) -> Path:
        path = config_dir / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
