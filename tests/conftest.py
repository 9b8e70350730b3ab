# tests/conftest.py
import os

import pytest

# Qt tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from hangul_ime.domain.combiner import HangulCombiner  # noqa: E402


@pytest.fixture
def combiner() -> HangulCombiner:
    return HangulCombiner()
