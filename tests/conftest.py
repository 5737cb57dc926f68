from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.record_builder import RecordBuilder


@pytest.fixture
def record_builder(tmp_path: Path) -> RecordBuilder:
    """Provide a reusable record builder rooted at the pytest tmp_path."""
    return RecordBuilder(tmp_path)
