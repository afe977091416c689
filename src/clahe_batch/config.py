# -*- coding: utf-8 -*-
"""
config.py — CLAHE parameters shared by the equalizer, the per-image pipeline
and the batch runner.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Tuple

__all__ = ["ClaheParams", "ZeroClipMode"]

ZeroClipMode = Literal["unbounded", "uniform"]


@dataclass(frozen=True)
class ClaheParams:
    """Contrast-limited equalization settings.

    Attributes
    ----------
    clip_limit : float
        Maximum bin height relative to the mean bin height (n / 256) of a tile.
        Higher values allow steeper local contrast.
    window_size : (int, int)
        Tile grid as (rows, cols).
    zero_clip : {"unbounded", "uniform"}
        Meaning of ``clip_limit == 0``. "unbounded" disables clipping (plain
        per-tile equalization, OpenCV behaviour); "uniform" clips every bin to
        zero and spreads the whole tile uniformly.
    max_clip_iterations : int
        Upper bound on clip/redistribute passes per tile.
    """
    clip_limit: float = 2.0
    window_size: Tuple[int, int] = (8, 8)
    zero_clip: ZeroClipMode = "unbounded"
    max_clip_iterations: int = 16

    def __post_init__(self):
        if not (self.clip_limit >= 0):
            raise ValueError(f"clip_limit must be >= 0, got {self.clip_limit!r}")
        if len(self.window_size) != 2:
            raise ValueError(f"window_size must be (rows, cols), got {self.window_size!r}")
        rows, cols = self.window_size
        if int(rows) < 1 or int(cols) < 1:
            raise ValueError(f"window_size must be >= 1 in each axis, got {self.window_size!r}")
        if self.zero_clip not in ("unbounded", "uniform"):
            raise ValueError(f"zero_clip must be 'unbounded' or 'uniform', got {self.zero_clip!r}")
        if int(self.max_clip_iterations) < 1:
            raise ValueError("max_clip_iterations must be >= 1")
        object.__setattr__(self, "clip_limit", float(self.clip_limit))
        object.__setattr__(self, "window_size", (int(rows), int(cols)))

    @classmethod
    def square(cls, clip_limit: float, window: int, **kwargs) -> "ClaheParams":
        """Square tile grid (window × window), as used by the CLI."""
        return cls(clip_limit=clip_limit, window_size=(window, window), **kwargs)
