from pathlib import Path

import pytest


@pytest.fixture
def target(tmp_path: Path) -> Path:
    """Path of a not-yet-existing JSON array file."""
    return tmp_path / "out.json"


@pytest.fixture
def write_text(target: Path):
    """Seed ``target`` with raw text before the test appends to it."""

    def _write(text: str) -> Path:
        target.write_text(text, encoding="utf-8")
        return target

    return _write
