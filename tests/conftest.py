"""Shared fixtures: synthetic images and temporary batch directories."""

import os

import cv2
import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def gradient_u8():
    """256x256 left-to-right gradient, column x has value x."""
    return np.tile(np.arange(256, dtype=np.uint8), (256, 1))


@pytest.fixture
def noisy_u8(rng):
    return rng.integers(0, 256, size=(96, 128), dtype=np.uint8)


@pytest.fixture
def color_u8(rng):
    """Muted BGR colors (away from the gamut edges)."""
    return rng.integers(60, 190, size=(48, 64, 3), dtype=np.uint8)


def _write_png(path, img):
    ok, buf = cv2.imencode(".png", img)
    assert ok
    buf.tofile(path)


@pytest.fixture
def batch_dir(tmp_path, rng):
    """Input directory with gray/color/16-bit images plus one corrupt file."""
    src = tmp_path / "input"
    src.mkdir()
    _write_png(str(src / "gray8.png"), rng.integers(0, 256, size=(40, 50), dtype=np.uint8))
    _write_png(str(src / "color8.png"), rng.integers(0, 256, size=(40, 50, 3), dtype=np.uint8))
    _write_png(str(src / "gray16.png"), rng.integers(0, 4096, size=(40, 50), dtype=np.uint16))
    (src / "broken.png").write_bytes(b"this is not an image")
    return src


@pytest.fixture
def out_dir(tmp_path):
    return os.path.join(str(tmp_path), "output")
