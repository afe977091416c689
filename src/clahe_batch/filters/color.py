# -*- coding: utf-8 -*-
"""
Luminance/chrominance separation for color images.

Color images are equalized on the L plane of OpenCV's 8-bit Lab only; the
a/b planes are carried through untouched and recombined afterwards, so hue
and saturation survive up to Lab rounding. Single-channel images are their
own luminance.
"""
from __future__ import annotations
from typing import Optional, Tuple

import cv2
import numpy as np

from ..errors import UnsupportedChannelLayout

__all__ = ["split_luminance", "merge_luminance", "split_alpha", "merge_alpha"]


def split_luminance(image: np.ndarray) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """
    Separate luminance from chrominance.

    Parameters
    ----------
    image : np.ndarray
        uint8, (H, W) / (H, W, 1) gray or (H, W, 3) BGR.

    Returns
    -------
    (lum, chroma)
        lum is (H, W) uint8. chroma is the (H, W, 2) Lab a/b planes for color
        input, or None for gray input.
    """
    a = np.asarray(image)
    if a.ndim == 3 and a.shape[2] == 1:
        a = a[:, :, 0]
    if a.ndim == 2:
        return a, None
    if a.ndim != 3 or a.shape[2] != 3:
        raise UnsupportedChannelLayout(a.shape)
    lab = cv2.cvtColor(np.ascontiguousarray(a), cv2.COLOR_BGR2LAB)
    return np.ascontiguousarray(lab[:, :, 0]), np.ascontiguousarray(lab[:, :, 1:])


def merge_luminance(lum: np.ndarray, chroma: Optional[np.ndarray]) -> np.ndarray:
    """Inverse of `split_luminance`: (L', a, b) → BGR uint8, or lum itself for gray."""
    if chroma is None:
        return lum
    if chroma.shape[:2] != lum.shape[:2]:
        raise ValueError(f"Luminance {lum.shape} and chroma {chroma.shape} sizes differ.")
    lab = np.dstack([lum, chroma]).astype(np.uint8, copy=False)
    return cv2.cvtColor(lab, cv2.COLOR_LAB2BGR)


def split_alpha(image: np.ndarray) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """(H, W, 4) BGRA → (BGR, alpha). Anything else passes through with alpha None."""
    if image.ndim == 3 and image.shape[2] == 4:
        return np.ascontiguousarray(image[:, :, :3]), image[:, :, 3].copy()
    return image, None


def merge_alpha(image: np.ndarray, alpha: Optional[np.ndarray]) -> np.ndarray:
    if alpha is None:
        return image
    return np.dstack([image, alpha.astype(image.dtype, copy=False)])
