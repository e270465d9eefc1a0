#!/usr/bin/env python3
"""Pytest fixtures for clipman tests.

Provides a configuration pointing at a temporary history file and
helpers to seed that file.
"""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from clipman.config import ClipmanConfig


@pytest.fixture
def histfile(tmp_path: Path) -> Path:
    """Provide a temporary path for the JSON history file."""
    return tmp_path / "clipman.json"


@pytest.fixture
def config(histfile: Path) -> ClipmanConfig:
    """Create a ClipmanConfig using the temporary history file."""
    return ClipmanConfig(histpath=str(histfile))


@pytest.fixture
def write_history(histfile: Path) -> Callable[[list[str]], Path]:
    """Return a function that seeds the history file with a list."""
    def _write(history: list[str]) -> Path:
        histfile.write_text(json.dumps(history), encoding="utf-8")
        return histfile
    return _write


def read_history(path: Path) -> list[str]:
    """Read a history file written by clipman."""
    return json.loads(path.read_text(encoding="utf-8"))
