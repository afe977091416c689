# -*- coding: utf-8 -*-
"""
Contrast-Limited Adaptive Histogram Equalization on single-channel uint8 images.

Steps
-----
1. Partition the image into a rows × cols tile grid (see `tiles.py`).
2. Build a 256-bin histogram per tile.
3. Clip every bin at T = clip_limit · n / 256 and redistribute the excess
   uniformly (iterated, integer arithmetic, so the histogram still sums to n).
4. Mapping per tile: lut[v] = round(255 · cdf[v] / n).
5. Each output pixel blends the LUTs of the (up to) four tiles whose centers
   surround it with bilinear weights. Blending is what removes tile seams.

Typical usage
-------------
>>> from clahe_batch.filters import equalize
>>> out = equalize(gray_u8, clip_limit=2.0, window_size=(8, 8))

Notes
-----
- clip_limit == 0 is ambiguous; `zero_clip` selects "unbounded" (no clipping,
  OpenCV behaviour, default) or "uniform" (clip everything to 0 and spread).
- For clip_limit > 0 the threshold is floored at one count per bin.
- A tile containing a single intensity keeps that intensity (identity LUT),
  like cv2.equalizeHist does for constant images.
"""

from __future__ import annotations
from typing import Literal, Optional, Tuple

import numpy as np

from ..errors import UnsupportedChannelLayout, UnsupportedSampleDepth
from .tiles import TileGrid, axis_weights, make_tile_grid

__all__ = [
    "NBINS",
    "tile_histograms",
    "clip_threshold",
    "clip_histogram",
    "build_mapping",
    "tile_mappings",
    "blend_mapping",
    "apply_mappings",
    "equalize",
]

NBINS = 256
_IDENTITY = np.arange(NBINS, dtype=np.uint8)


# ---- histograms & clipping --------------------------------------------------

def tile_histograms(image: np.ndarray, grid: TileGrid) -> np.ndarray:
    """Per-tile 256-bin histograms, shape (rows, cols, 256), int64."""
    hists = np.zeros((grid.rows, grid.cols, NBINS), dtype=np.int64)
    for i, j, (y0, y1, x0, x1) in grid:
        hists[i, j] = np.bincount(image[y0:y1, x0:x1].ravel(), minlength=NBINS)[:NBINS]
    return hists


def clip_threshold(
    n: int,
    clip_limit: float,
    zero_clip: Literal["unbounded", "uniform"] = "unbounded",
) -> Optional[int]:
    """Integer bin ceiling for a tile of `n` pixels, or None for no clipping."""
    if clip_limit <= 0:
        return None if zero_clip == "unbounded" else 0
    t = clip_limit * n / NBINS
    # no bin can exceed n, so such a limit never clips
    if not np.isfinite(t) or t >= n:
        return None
    return max(int(t), 1)


def _spread(hist: np.ndarray, pending: int) -> None:
    """Add `pending` counts to `hist` in place, as evenly as integers allow."""
    if pending >= NBINS:
        hist += pending // NBINS
        pending %= NBINS
    if pending:
        step = max(NBINS // pending, 1)
        hist[::step][:pending] += 1


def clip_histogram(
    hist: np.ndarray,
    limit: Optional[int],
    *,
    max_iterations: int = 16,
) -> np.ndarray:
    """Clip bins at `limit` and redistribute the excess uniformly.

    Parameters
    ----------
    hist : np.ndarray
        256 non-negative counts.
    limit : int or None
        Bin ceiling from `clip_threshold`. None returns the histogram unchanged;
        0 moves the whole mass into a uniform distribution.
    max_iterations : int
        Upper bound on clip/redistribute passes. Whatever excess is left after
        the last pass is spread over all bins.

    Returns
    -------
    np.ndarray
        int64 histogram with the same sum as `hist`.
    """
    h = np.asarray(hist, dtype=np.int64).copy()
    if limit is None:
        return h
    if limit <= 0:
        pending = int(h.sum())
        h[:] = 0
        _spread(h, pending)
        return h

    pending = 0
    for _ in range(max(1, int(max_iterations))):
        excess = np.maximum(h - limit, 0)
        pending += int(excess.sum())
        h -= excess
        if pending < NBINS:
            break
        h += pending // NBINS
        pending %= NBINS
    _spread(h, pending)
    return h


def build_mapping(hist: np.ndarray) -> np.ndarray:
    """LUT from a (clipped) histogram: round(255 · cdf / n), uint8, non-decreasing."""
    h = np.asarray(hist, dtype=np.int64)
    n = int(h.sum())
    if n == 0:
        return _IDENTITY.copy()
    cdf = np.cumsum(h)
    return np.clip(np.rint(cdf * (255.0 / n)), 0, 255).astype(np.uint8)


def tile_mappings(
    image: np.ndarray,
    grid: TileGrid,
    clip_limit: float,
    *,
    zero_clip: Literal["unbounded", "uniform"] = "unbounded",
    max_clip_iterations: int = 16,
) -> np.ndarray:
    """Per-tile LUTs, shape (rows, cols, 256), uint8."""
    hists = tile_histograms(image, grid)
    luts = np.empty((grid.rows, grid.cols, NBINS), dtype=np.uint8)
    for i in range(grid.rows):
        for j in range(grid.cols):
            h = hists[i, j]
            if np.count_nonzero(h) == 1:
                luts[i, j] = _IDENTITY
                continue
            limit = clip_threshold(int(h.sum()), clip_limit, zero_clip)
            luts[i, j] = build_mapping(clip_histogram(h, limit, max_iterations=max_clip_iterations))
    return luts


# ---- application -------------------------------------------------------------

def blend_mapping(y: int, x: int, value: int, grid: TileGrid, luts: np.ndarray) -> int:
    """Output intensity of one pixel: bilinear blend of the surrounding tile LUTs.

    Pure function of position, grid and LUTs; `apply_mappings` computes the
    same thing for every pixel at once.
    """
    i0, i1, wy = axis_weights(y, grid.centers_y)
    j0, j1, wx = axis_weights(x, grid.centers_x)
    i0, i1, j0, j1 = int(i0), int(i1), int(j0), int(j1)
    wy, wx = float(wy), float(wx)
    v = int(value)
    top = (1.0 - wx) * float(luts[i0, j0, v]) + wx * float(luts[i0, j1, v])
    bot = (1.0 - wx) * float(luts[i1, j0, v]) + wx * float(luts[i1, j1, v])
    out = (1.0 - wy) * top + wy * bot
    return int(np.clip(np.rint(out), 0, 255))


def apply_mappings(
    image: np.ndarray,
    grid: TileGrid,
    luts: np.ndarray,
    *,
    interpolate: bool = True,
) -> np.ndarray:
    """Map every pixel through the tile LUTs.

    With `interpolate=False` each pixel only uses its own tile's LUT, which
    leaves visible seams; it exists for comparison.
    """
    H, W = image.shape
    idx = image.astype(np.intp, copy=False)
    ys = np.arange(H)
    xs = np.arange(W)

    if not interpolate:
        ti, tj = grid.tile_index(ys, xs)
        return luts[ti[:, None], tj[None, :], idx]

    i0, i1, wy = axis_weights(ys, grid.centers_y)
    j0, j1, wx = axis_weights(xs, grid.centers_x)
    lut = luts.astype(np.float64)
    wy = wy[:, None]
    wx = wx[None, :]

    def _take(ii, jj):
        return lut[ii[:, None], jj[None, :], idx]

    top = (1.0 - wx) * _take(i0, j0) + wx * _take(i0, j1)
    bot = (1.0 - wx) * _take(i1, j0) + wx * _take(i1, j1)
    out = (1.0 - wy) * top + wy * bot
    return np.clip(np.rint(out), 0, 255).astype(np.uint8)


def equalize(
    image: np.ndarray,
    clip_limit: float = 2.0,
    window_size: Tuple[int, int] = (8, 8),
    *,
    zero_clip: Literal["unbounded", "uniform"] = "unbounded",
    max_clip_iterations: int = 16,
    interpolate: bool = True,
) -> np.ndarray:
    """
    CLAHE on a single-channel uint8 image.

    Parameters
    ----------
    image : np.ndarray
        (H, W) uint8.
    clip_limit : float
        Bin ceiling relative to the mean bin height of a tile; >= 0.
    window_size : (int, int)
        Tile grid (rows, cols), each >= 1. Reduced to the image size if larger.
    zero_clip : {"unbounded", "uniform"}
        Meaning of clip_limit == 0, see module notes.
    max_clip_iterations : int
        Bound on clip/redistribute passes per tile.
    interpolate : bool
        Bilinear blending between tiles (default). False gives the naive
        per-tile result.

    Returns
    -------
    np.ndarray
        (H, W) uint8.

    Raises
    ------
    UnsupportedChannelLayout
        If `image` is not 2D.
    UnsupportedSampleDepth
        If `image` is not uint8.
    ValueError
        If clip_limit < 0 or window_size has an axis < 1.
    """
    a = np.asarray(image)
    if a.ndim != 2:
        raise UnsupportedChannelLayout(a.shape)
    if a.dtype != np.uint8:
        raise UnsupportedSampleDepth(a.dtype)
    if not (clip_limit >= 0):
        raise ValueError(f"clip_limit must be >= 0, got {clip_limit!r}")
    if a.size == 0:
        return a.copy()

    grid = make_tile_grid(a.shape, window_size)
    luts = tile_mappings(
        a, grid, clip_limit, zero_clip=zero_clip, max_clip_iterations=max_clip_iterations
    )
    return apply_mappings(a, grid, luts, interpolate=interpolate)
