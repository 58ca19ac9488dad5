import sys
from pathlib import Path

import pytest

# Ensure `src` is on sys.path for tests when not installed editable.
SRC = Path(__file__).resolve().parent.parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _fresh_settings():
    from otlp_log_mapper.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
