from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.lang_builder import LangBuilder


@pytest.fixture
def lang_builder(tmp_path: Path) -> LangBuilder:
    """Provide a reusable language directory builder rooted at the pytest tmp_path."""
    return LangBuilder(tmp_path)
