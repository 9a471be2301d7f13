"""Test fixture helpers."""

from __future__ import annotations

from pathlib import Path

_FIXTURE_ROOT = Path(__file__).parent


def load_html(name: str) -> str:
    """Load an HTML fixture by filename."""

    return (_FIXTURE_ROOT / name).read_text(encoding="utf-8")
