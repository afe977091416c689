# -*- coding: utf-8 -*-
"""
formats.py — shared helpers for image I/O: layout classification, channel
order, container choice. No file I/O here, only utilities used by both
readers and writers.
"""
from __future__ import annotations
import os
from typing import Tuple
import numpy as np

from ..errors import UnsupportedChannelLayout
from ..preprocess.depth import sample_depth

__all__ = [
    "TIFF_EXTS",
    "is_tiff",
    "channel_count",
    "describe_layout",
    "layout_label",
    "_rgb_to_bgr",
    "_bgr_to_rgb",
]

TIFF_EXTS = (".tif", ".tiff")


def is_tiff(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in TIFF_EXTS


def channel_count(image: np.ndarray) -> int:
    """1, 3 or 4; raises UnsupportedChannelLayout for any other shape."""
    a = np.asarray(image)
    if a.ndim == 2:
        return 1
    if a.ndim == 3 and a.shape[2] in (1, 3, 4):
        return int(a.shape[2])
    raise UnsupportedChannelLayout(a.shape)


def describe_layout(image: np.ndarray) -> Tuple[int, int]:
    """(bits per sample, channel count) of a decoded image."""
    return sample_depth(image), channel_count(image)


def layout_label(depth: int, channels: int) -> str:
    """Human-readable layout, e.g. 'gray scale 8 bit image' or 'RGB 16 bit image'."""
    kind = {1: "gray scale", 3: "RGB", 4: "RGBA"}.get(channels, f"{channels}-channel")
    return f"{kind} {depth} bit image"


def _rgb_to_bgr(a: np.ndarray) -> np.ndarray:
    """Swap R and B for 3/4-channel arrays (tifffile is RGB, OpenCV is BGR)."""
    if a.ndim == 3 and a.shape[2] in (3, 4):
        out = a.copy()
        out[:, :, 0], out[:, :, 2] = a[:, :, 2], a[:, :, 0]
        return out
    return a


# the swap is its own inverse
_bgr_to_rgb = _rgb_to_bgr
