from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


def _make_backlight(root: Path, name: str, current: int, max_value: int) -> Path:
    d = root / name
    d.mkdir(parents=True)
    (d / "max_brightness").write_text(f"{max_value}\n", encoding="utf-8")
    (d / "brightness").write_text(f"{current}\n", encoding="utf-8")
    (d / "actual_brightness").write_text(f"{current}\n", encoding="utf-8")
    return d


@pytest.fixture
def make_backlight() -> Callable[[Path, str, int, int], Path]:
    return _make_backlight


@pytest.fixture
def backlight_root(tmp_path: Path) -> Path:
    root = tmp_path / "class" / "backlight"
    root.mkdir(parents=True)
    return root
