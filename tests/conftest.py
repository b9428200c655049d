"""
Pytest configuration and shared fixtures for rollup_l1_bridge tests.
"""

import sys
from pathlib import Path

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from helpers import make_proof_hex  # noqa: E402


@pytest.fixture
def proof_hex() -> str:
    return make_proof_hex()
