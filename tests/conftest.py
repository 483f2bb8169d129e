"""Shared fixtures for resizer tests.

Images are generated with Pillow inside tmp_path; nothing is read from a
fixtures folder.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from resizer.log import configure_logging

MakeImage = Callable[..., Path]


@pytest.fixture(autouse=True)
def _log_to_captured_stderr() -> None:
    """Route loguru through sys.stderr so capsys sees warnings and errors."""
    configure_logging()


@pytest.fixture
def make_image() -> MakeImage:
    """Factory writing a noisy RGB image of the given size to path."""

    def _make(path: Path, size: tuple[int, int] = (40, 20), mode: str = "RGB", format: str | None = None) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        channels = len(mode)
        im = Image.frombytes(mode, size, os.urandom(size[0] * size[1] * channels))
        im.save(path, format=format)
        return path

    return _make


@pytest.fixture
def image_size() -> Callable[[Path], tuple[int, int]]:
    def _size(path: Path) -> tuple[int, int]:
        with Image.open(path) as im:
            return im.size

    return _size
