# --- file: clahe_batch/filters/contrast.py ---
"""
Local contrast enhancement for whole images (any supported depth/layout).

Pipeline per image: depth normalization → luminance split → CLAHE on the
luminance plane → recombination. Alpha planes are passed through.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config import ClaheParams
from ..io.formats import channel_count
from ..preprocess.depth import alpha_to_u8, normalize_to_u8, sample_depth
from .clahe import equalize
from .color import merge_alpha, merge_luminance, split_alpha, split_luminance

__all__ = ["ContrastResult", "clahe_image", "clahe_u8"]


@dataclass
class ContrastResult:
    """Result of `clahe_image`.

    Attributes
    ----------
    image : np.ndarray
        Enhanced image, uint8, same height/width/channel count as the input.
    lum_in : np.ndarray
        (H, W) uint8 luminance that went into the equalizer.
    lum_out : np.ndarray
        (H, W) uint8 equalized luminance.
    """
    image: np.ndarray
    lum_in: np.ndarray
    lum_out: np.ndarray


def clahe_image(
    img: np.ndarray,
    params: Optional[ClaheParams] = None,
    *,
    interpolate: bool = True,
) -> ContrastResult:
    """
    CLAHE on a gray, BGR or BGRA image with 8 or 16 bit samples.

    Raises UnsupportedSampleDepth / UnsupportedChannelLayout for anything else.
    """
    p = params or ClaheParams()
    im = np.asarray(img)
    channels = channel_count(im)
    sample_depth(im)
    if im.size == 0:
        empty = np.zeros(im.shape[:2], dtype=np.uint8)
        return ContrastResult(image=np.zeros(im.shape, dtype=np.uint8), lum_in=empty, lum_out=empty.copy())

    color, alpha = split_alpha(im)
    color = normalize_to_u8(color)
    if alpha is not None:
        alpha = alpha_to_u8(alpha)

    lum, chroma = split_luminance(color)
    lum_out = equalize(
        lum,
        clip_limit=p.clip_limit,
        window_size=p.window_size,
        zero_clip=p.zero_clip,
        max_clip_iterations=p.max_clip_iterations,
        interpolate=interpolate,
    )
    out = merge_alpha(merge_luminance(lum_out, chroma), alpha)
    if channels == 1 and im.ndim == 3:
        out = out[:, :, None]
    return ContrastResult(image=out, lum_in=lum, lum_out=lum_out)


def clahe_u8(img: np.ndarray, clip_limit: float = 2.0, tile: int = 8) -> np.ndarray:
    """
    CLAHE with a square tile grid (tile × tile). Returns uint8.
    """
    return clahe_image(img, ClaheParams.square(clip_limit, tile)).image
