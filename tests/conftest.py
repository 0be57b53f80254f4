"""
Shared test fixtures and configuration.
"""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from orderroots.core.models import RootModel


@pytest.fixture
def model() -> RootModel:
    """An empty root model (no module source entry)."""
    return RootModel("app", with_source=False)


@pytest.fixture
def other_model() -> RootModel:
    """A second, unrelated root model."""
    return RootModel("other", with_source=False)


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[[str], Path]:
    """Write a dedented project.yml into tmp_path and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "project.yml"
        path.write_text(textwrap.dedent(content))
        return path

    return _write
