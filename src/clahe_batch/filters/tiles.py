# -*- coding: utf-8 -*-
"""
Tile grid for local (per-tile) statistics.

The grid partitions an (H, W) image into rows × cols non-overlapping tiles.
Tile height is H // rows and tile width W // cols; the last row/column takes
the remainder, so every pixel belongs to exactly one tile.

Tile centers are used as interpolation nodes: a pixel between two centers
along an axis gets a linear weight from its fractional position, a pixel
outside the outermost centers is clamped to the nearest one.

Typical usage
-------------
>>> grid = make_tile_grid((480, 640), (8, 8))
>>> y0, y1, x0, x1 = grid.bounds(0, 0)
>>> i0, i1, w = axis_weights(np.arange(480), grid.centers_y)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

__all__ = ["TileGrid", "make_tile_grid", "axis_weights"]


def _edges(length: int, n: int) -> np.ndarray:
    """Edges of n tiles along an axis of `length` px; last tile absorbs the remainder."""
    step = length // n
    edges = np.arange(n + 1, dtype=np.int64) * step
    edges[-1] = length
    return edges


@dataclass(frozen=True)
class TileGrid:
    """Exact partition of an (H, W) image into tiles.

    Attributes
    ----------
    y_edges : np.ndarray
        Row boundaries, shape (rows + 1,), int64, y_edges[0] == 0, y_edges[-1] == H.
    x_edges : np.ndarray
        Column boundaries, shape (cols + 1,), int64.
    """
    y_edges: np.ndarray
    x_edges: np.ndarray

    @property
    def rows(self) -> int:
        return int(self.y_edges.size - 1)

    @property
    def cols(self) -> int:
        return int(self.x_edges.size - 1)

    @property
    def image_shape(self) -> Tuple[int, int]:
        return int(self.y_edges[-1]), int(self.x_edges[-1])

    @property
    def centers_y(self) -> np.ndarray:
        return (self.y_edges[:-1] + self.y_edges[1:] - 1) / 2.0

    @property
    def centers_x(self) -> np.ndarray:
        return (self.x_edges[:-1] + self.x_edges[1:] - 1) / 2.0

    def bounds(self, i: int, j: int) -> Tuple[int, int, int, int]:
        """(y0, y1, x0, x1) inclusive-exclusive bounds of tile (i, j)."""
        return (
            int(self.y_edges[i]), int(self.y_edges[i + 1]),
            int(self.x_edges[j]), int(self.x_edges[j + 1]),
        )

    def tile_index(self, y, x):
        """Tile (row, col) owning pixel(s) (y, x). Accepts scalars or arrays."""
        i = np.searchsorted(self.y_edges, y, side="right") - 1
        j = np.searchsorted(self.x_edges, x, side="right") - 1
        return np.minimum(i, self.rows - 1), np.minimum(j, self.cols - 1)

    def __iter__(self) -> Iterator[Tuple[int, int, Tuple[int, int, int, int]]]:
        for i in range(self.rows):
            for j in range(self.cols):
                yield i, j, self.bounds(i, j)


def make_tile_grid(shape_hw: Tuple[int, int], window: Tuple[int, int]) -> TileGrid:
    """Build the tile grid for an image.

    Parameters
    ----------
    shape_hw : (int, int)
        Image shape as (H, W); both must be > 0.
    window : (int, int)
        Requested grid (rows, cols), each >= 1. A request larger than the image
        along an axis is reduced to the image size so no tile is empty.
    """
    H, W = int(shape_hw[0]), int(shape_hw[1])
    rows, cols = int(window[0]), int(window[1])
    if H <= 0 or W <= 0:
        raise ValueError(f"Cannot tile an empty image of shape {(H, W)}.")
    if rows < 1 or cols < 1:
        raise ValueError(f"Tile grid must be >= 1 in each axis, got {(rows, cols)}.")
    rows = min(rows, H)
    cols = min(cols, W)
    return TileGrid(y_edges=_edges(H, rows), x_edges=_edges(W, cols))


def axis_weights(coords, centers: np.ndarray):
    """Neighbouring tile indices and linear weight along one axis.

    Parameters
    ----------
    coords : float or array-like
        Pixel coordinate(s) along the axis.
    centers : np.ndarray
        Tile centers along the axis, increasing.

    Returns
    -------
    (i0, i1, w) : arrays (or scalars) with the lower/upper tile index and the
        weight of the upper tile; the lower tile gets (1 - w). Outside the
        outermost centers i0 == i1 or w == 0, so only one tile contributes.
    """
    c = np.asarray(coords, dtype=np.float64)
    n = centers.size
    i0 = np.clip(np.searchsorted(centers, c, side="right") - 1, 0, n - 1)
    i1 = np.minimum(i0 + 1, n - 1)
    span = centers[i1] - centers[i0]
    safe = np.where(span > 0, span, 1.0)
    w = np.where(span > 0, (c - centers[i0]) / safe, 0.0)
    w = np.clip(w, 0.0, 1.0)
    return i0, i1, w
