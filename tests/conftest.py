# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

import pytest


@pytest.fixture()
def task_file(tmp_path: Path) -> Callable[..., Path]:
    """Write the given lines (newline-terminated) to a todo file and return its path."""

    def _write(*lines: str, name: str = "todo.txt") -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def scripted_keys() -> Callable[[Iterable[str]], Callable[[], str]]:
    """Factory for a key reader that replays the given keys and then quits."""

    def _reader(keys: Iterable[str]) -> Callable[[], str]:
        it = iter(list(keys) + ["q"])
        return lambda: next(it)

    return _reader
