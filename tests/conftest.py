"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Isolates tests from HASHTREE_* environment variables and config files
3. Provides commonly-used fixtures via pytest's autodiscovery
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from hashtree.config import set_default_config
from hashtree.merkle import MerkleTree


_ENV_VARS = [
    "HASHTREE_HASH_ALGORITHM",
    "HASHTREE_STRICT_HASH",
    "HASHTREE_PROOF_FORMAT",
    "HASHTREE_LOG_LEVEL",
    "HASHTREE_LOG_FILE",
]


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Clear HASHTREE_* variables and reset the process-wide config."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory with an empty home, so no config file is found."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def blocks():
    """Four data blocks used by the reference walkthrough."""
    return [b"data1", b"data2", b"data3", b"data4"]


@pytest.fixture
def tree(blocks):
    """A tree over the four reference blocks."""
    return MerkleTree(blocks)

