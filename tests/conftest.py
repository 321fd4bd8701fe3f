"""Shared pytest configuration and fixtures for tests."""

import sys
import io
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from taskboard.context import AppContext  # noqa: E402
from taskboard.core.store import DocumentStore  # noqa: E402


@pytest.fixture()
def store(tmp_path):
    """Fresh document store in a temporary database."""
    return DocumentStore(tmp_path / "test_taskboard.db")


@pytest.fixture()
def ctx(tmp_path):
    """Fully wired repositories and services on a temporary database."""
    return AppContext.create(tmp_path / "test_taskboard.db", max_workers=4)
