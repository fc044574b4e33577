from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.asset_builder import AssetProjectBuilder


@pytest.fixture
def project(tmp_path: Path) -> AssetProjectBuilder:
    """Provide a reusable asset project rooted at the pytest tmp_path."""
    return AssetProjectBuilder(tmp_path)
