"""Shared pytest fixtures for wikitext-parser tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"
WIKITEXT_DIR = FIXTURES_DIR / "wikitext"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def load_fixture() -> Callable[[str], str]:
    """Factory fixture to load wikitext fixture files.

    Usage:
        def test_something(load_fixture):
            content = load_fixture("fictional_town.txt")
    """

    def _load(name: str) -> str:
        path = WIKITEXT_DIR / name
        return path.read_text(encoding="utf-8")

    return _load


@pytest.fixture
def television_series(load_fixture: Callable[[str], str]) -> str:
    """Sample article lead: metadata templates, infobox and one paragraph."""
    return load_fixture("television_series.txt")


@pytest.fixture
def fictional_town(load_fixture: Callable[[str], str]) -> str:
    """Sample full page with sections, subsections, table and categories."""
    return load_fixture("fictional_town.txt")
