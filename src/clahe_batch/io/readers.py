# -*- coding: utf-8 -*-
"""
readers.py — image decoding: TIFF via tifffile, everything else via OpenCV.
Images are returned as (H, W) or (H, W, C) arrays in BGR(A) channel order with
their original sample type (uint16 stays uint16).
"""
from __future__ import annotations
import os
from typing import List

import cv2
import numpy as np
import tifffile as tiff

from ..errors import ImageDecodeFailure, InvalidInputDirectory
from .formats import is_tiff, _rgb_to_bgr

__all__ = ["read_image", "list_images"]


# ---- low-level readers ------------------------------------------------------

def _read_tiff(path: str) -> np.ndarray:
    """First page of a TIFF; planar (C, H, W) data is moved to (H, W, C)."""
    a = np.asarray(tiff.imread(path, key=0))
    if a.ndim == 3 and a.shape[0] in (3, 4) and a.shape[-1] not in (1, 3, 4):
        a = np.moveaxis(a, 0, -1)
    return _rgb_to_bgr(a)


def _read_cv2(path: str) -> np.ndarray:
    """OpenCV decode with IMREAD_UNCHANGED (keeps 16-bit samples and alpha)."""
    buf = np.fromfile(path, dtype=np.uint8)
    if buf.size == 0:
        raise ValueError("empty file")
    a = cv2.imdecode(buf, cv2.IMREAD_UNCHANGED)
    if a is None:
        raise ValueError("no OpenCV decoder accepts this file")
    return a


# ---- high-level API ---------------------------------------------------------

def read_image(path: str) -> np.ndarray:
    """
    Decode `path` into an array.

    Raises
    ------
    ImageDecodeFailure
        If the file is missing, empty, truncated or not an image.
    """
    try:
        a = _read_tiff(path) if is_tiff(path) else _read_cv2(path)
    except Exception as e:
        raise ImageDecodeFailure(path, f"{type(e).__name__}: {e}") from e
    if a.size == 0:
        raise ImageDecodeFailure(path, "decoded image is empty")
    return a


def list_images(input_dir: str) -> List[str]:
    """
    All regular files directly inside `input_dir` (any extension), sorted.

    Raises InvalidInputDirectory if `input_dir` is not an existing directory.
    """
    if not os.path.isdir(input_dir):
        raise InvalidInputDirectory(input_dir)
    names = sorted(os.listdir(input_dir))
    return [
        os.path.join(input_dir, n) for n in names
        if os.path.isfile(os.path.join(input_dir, n))
    ]
