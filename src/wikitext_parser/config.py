"""Project configuration loaded from pyproject.toml."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class WikitextConfig(BaseModel):
    """Configuration for wikitext rendering."""

    # Prefix for [[internal links]] in HTML output
    link_base_path: str = "/wiki/"
    # Prefix for [[File:...]] image sources
    commons_file_url: str = "https://commons.wikimedia.org/wiki/File:"
    # Visible footnote index is the reference hash modulo this value
    ref_index_modulus: int = Field(default=100, gt=0)


@lru_cache(maxsize=1)
def load_config() -> WikitextConfig:
    """Load configuration from pyproject.toml.

    Returns:
        WikitextConfig with settings from [tool.wikitext-parser] section,
        falling back to defaults if not found.
    """
    pyproject_path = _find_pyproject()
    if pyproject_path is None:
        return WikitextConfig()

    with pyproject_path.open("rb") as f:
        data = tomllib.load(f)

    tool_config: dict[str, Any] = data.get("tool", {}).get("wikitext-parser", {})
    return WikitextConfig(**tool_config)


def _find_pyproject() -> Path | None:
    """Find pyproject.toml by walking up from current file."""
    current = Path(__file__).resolve().parent
    for _ in range(10):  # Max 10 levels up
        candidate = current / "pyproject.toml"
        if candidate.exists():
            return candidate
        if current.parent == current:
            break
        current = current.parent
    return None
