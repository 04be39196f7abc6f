# tests/conftest.py

from __future__ import annotations
import sys
from pathlib import Path

import pytest

# Ensure the repository root (parent of /tests) is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TESTDATA = Path(__file__).resolve().parent / "testdata"


@pytest.fixture(autouse=True)
def clean_template_env(monkeypatch):
    # A developer's MDP_TEMPLATE must not leak into the tests
    monkeypatch.delenv("MDP_TEMPLATE", raising=False)
    yield


@pytest.fixture
def input_file() -> Path:
    return TESTDATA / "test1.md"


@pytest.fixture
def golden() -> bytes:
    return (TESTDATA / "test1.md.html").read_bytes().strip()


@pytest.fixture
def temp_dir(monkeypatch, tmp_path: Path) -> Path:
    """Point tempfile at tmp_path so written previews are cleaned up by pytest."""
    import tempfile

    out = tmp_path / "out"
    out.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(out))
    return out
