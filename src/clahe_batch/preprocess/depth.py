# clahe_batch/preprocess/depth.py
"""
Sample-depth normalization: 16-bit → 8-bit, max-relative.

Each image is scaled by its own maximum M (s → round(255 · s / M)), so the
brightest sample lands on 255 and 0 stays 0. Nothing is shared between images.

Typical use
-----------
>>> from clahe_batch.preprocess import normalize_to_u8, sample_depth
>>> sample_depth(img16)
16
>>> u8 = normalize_to_u8(img16)
"""

from __future__ import annotations

import numpy as np

from ..errors import UnsupportedSampleDepth

__all__ = ["sample_depth", "normalize_to_u8", "alpha_to_u8"]

_DEPTHS = {np.dtype(np.uint8): 8, np.dtype(np.uint16): 16}


def sample_depth(image: np.ndarray) -> int:
    """Bits per sample (8 or 16); raises UnsupportedSampleDepth otherwise."""
    try:
        return _DEPTHS[np.asarray(image).dtype]
    except KeyError:
        raise UnsupportedSampleDepth(np.asarray(image).dtype) from None


def normalize_to_u8(image: np.ndarray) -> np.ndarray:
    """
    Bring an image into the uint8 domain.

    uint8 input is returned as-is. uint16 input is scaled by its own maximum;
    an all-zero image maps to zeros and an empty image to an empty uint8 array
    of the same shape.
    """
    a = np.asarray(image)
    depth = sample_depth(a)
    if depth == 8:
        return a
    if a.size == 0:
        return np.zeros(a.shape, dtype=np.uint8)
    m = int(a.max())
    if m == 0:
        return np.zeros(a.shape, dtype=np.uint8)
    out = np.rint(a.astype(np.float64) * (255.0 / m))
    return np.clip(out, 0, 255).astype(np.uint8)


def alpha_to_u8(alpha: np.ndarray) -> np.ndarray:
    """Alpha planes keep their absolute meaning: uint16 → uint8 by /257."""
    a = np.asarray(alpha)
    if sample_depth(a) == 8:
        return a
    return np.rint(a.astype(np.float64) / 257.0).astype(np.uint8)
