# tests/conftest.py
"""Shared fixtures for unicode-sanitize tests."""

import os
import sys
from pathlib import Path

import pytest

# Add src directory to path so tests run without an editable install
_src_path = str(Path(__file__).parent.parent / "src")
if _src_path not in sys.path:
    sys.path.insert(0, _src_path)

from unicode_sanitize.config import debug_options, default_options  # noqa: E402
from unicode_sanitize.models import Options  # noqa: E402

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def defaults() -> Options:
    return default_options()


@pytest.fixture
def debug() -> Options:
    return debug_options()


@pytest.fixture
def clean_env(monkeypatch) -> None:
    """Remove SANITIZE_* variables so the harness sees only explicit flags."""
    for key in list(os.environ):
        if key.startswith("SANITIZE_"):
            monkeypatch.delenv(key)
