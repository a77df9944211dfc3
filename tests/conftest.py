from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure repo root is importable when running pytest from any CWD.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from icomesh import subdivision  # noqa: E402


@pytest.fixture
def shared_level_two():
    return subdivision.build_levels(subdivision.SHARED, 2)


@pytest.fixture
def duplicated_level_two():
    return subdivision.build_levels(subdivision.DUPLICATED, 2)
