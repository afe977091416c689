# -*- coding: utf-8 -*-
"""
writers.py — image encoding: TIFF via tifffile (deflate), everything else via
OpenCV codecs chosen by the file extension. Inputs are BGR(A) arrays.
"""
from __future__ import annotations
import os

import cv2
import numpy as np
import tifffile as tiff

from ..errors import ImageEncodeFailure
from .formats import is_tiff, _bgr_to_rgb

__all__ = ["write_image", "ensure_dir"]


def ensure_dir(path: str, mode: int = 0o700) -> str:
    """Create `path` (owner rwx by default) if missing; return it."""
    os.makedirs(path, mode=mode, exist_ok=True)
    return path


def _write_tiff(path: str, a: np.ndarray) -> None:
    color = a.ndim == 3 and a.shape[2] in (3, 4)
    kwargs = {}
    if color and a.shape[2] == 4:
        kwargs["extrasamples"] = (tiff.EXTRASAMPLE.UNASSALPHA,)
    if a.ndim == 3 and a.shape[2] == 1:
        a = a[:, :, 0]
    tiff.imwrite(
        path,
        _bgr_to_rgb(a),
        photometric=("rgb" if color else "minisblack"),
        compression="deflate",
        **kwargs,
    )


def _write_cv2(path: str, a: np.ndarray) -> None:
    ext = os.path.splitext(path)[1]
    if not ext:
        raise ValueError("no file extension to choose an encoder from")
    ok, buf = cv2.imencode(ext, a)
    if not ok:
        raise ValueError(f"OpenCV could not encode {ext!r}")
    buf.tofile(path)


def write_image(path: str, image: np.ndarray) -> str:
    """
    Encode `image` to `path`, creating the parent directory if needed.

    Raises
    ------
    ImageEncodeFailure
        If no encoder fits the extension or the file cannot be written.
    """
    a = np.ascontiguousarray(image)
    try:
        ensure_dir(os.path.dirname(os.path.abspath(path)) or ".")
        if is_tiff(path):
            _write_tiff(path, a)
        else:
            _write_cv2(path, a)
    except Exception as e:
        raise ImageEncodeFailure(path, f"{type(e).__name__}: {e}") from e
    return path
