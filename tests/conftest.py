"""Pytest configuration and fixtures for Vellum tests."""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from vellum import Engine


@pytest.fixture
def write_template(tmp_path: Path) -> Callable[[str, str], str]:
    """Return a function that writes a body file and returns its absolute path."""

    def _write(name: str, source: str) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source).strip() + "\n", encoding="utf-8")
        return str(path.resolve())

    return _write


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Folder the ``engine`` fixture searches."""
    folder = tmp_path / "templates"
    folder.mkdir()
    return folder


@pytest.fixture
def engine(template_dir: Path) -> Engine:
    """Create a Vellum Engine searching ``template_dir``."""
    return Engine(template_dir)
