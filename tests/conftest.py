"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates the process-wide default config between tests
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

make_tree = _common.make_tree
make_md5_policy = _common.make_md5_policy
DEMO_VALUES = _common.DEMO_VALUES
SAMPLE_VALUES = _common.SAMPLE_VALUES


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def _reset_default_config(monkeypatch):
    """Keep env vars and the cached default config from leaking between tests."""
    from hashtree.config.runtime import set_default_config

    for var in ("HASHTREE_HASH_ALGORITHM", "HASHTREE_COMPARATOR", "HASHTREE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def md5_policy():
    """Provide the fixed md5 / hex-compare Digest Policy."""
    return make_md5_policy()


@pytest.fixture
def demo_tree():
    """Provide a built tree over the four demo values."""
    return make_tree(DEMO_VALUES)


@pytest.fixture
def sample_tree():
    """Provide a built tree over the eight sample values."""
    return make_tree(SAMPLE_VALUES)
