"""Shared fixtures: synthetic RGBA images written to tmp_path."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image


def write_rgba(path: Path, pixels: np.ndarray) -> Path:
    Image.fromarray(pixels.astype(np.uint8)).save(path, format="PNG")
    return path


@pytest.fixture
def scenario_png(tmp_path):
    """2x2: (0,0) is half transparent red, everything else opaque black."""
    px = np.zeros((2, 2, 4), dtype=np.uint8)
    px[..., 3] = 255
    px[0, 0] = (255, 0, 0, 128)
    return write_rgba(tmp_path / "name.png", px)


@pytest.fixture
def noisy_png(tmp_path):
    rng = np.random.default_rng(1234)
    px = rng.integers(0, 256, size=(24, 32, 4), dtype=np.uint8)
    return write_rgba(tmp_path / "noisy.png", px)


@pytest.fixture
def corrupt_png(tmp_path, noisy_png):
    data = noisy_png.read_bytes()
    path = tmp_path / "broken.png"
    path.write_bytes(data[: len(data) // 2])
    return path


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "dist"
