# --- file: clahe_batch/summary/viz.py ---
"""
Before/after preview panels for QC.

Figures are built with the object-oriented Matplotlib API (Figure + Agg
canvas) and never touch pyplot's global state, so worker threads can each
render their own preview.
"""

from __future__ import annotations
import os
from typing import Optional, Sequence, Tuple

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

__all__ = ["robust_limits", "grid_before_after", "save_before_after"]


def robust_limits(img: np.ndarray, p: Tuple[float, float] = (1.0, 99.0)) -> Tuple[float, float]:
    """Percentile display limits [vmin, vmax] of a 2D image; never degenerate."""
    a = np.asarray(img)
    if a.ndim != 2:
        raise ValueError(f"robust_limits expects 2D input, got shape {a.shape}.")
    if a.size == 0:
        return 0.0, 1.0
    lo, hi = np.percentile(a, p)
    if hi <= lo:
        lo = float(a.min())
        hi = float(a.max()) if float(a.max()) > lo else lo + 1.0
    return float(lo), float(hi)


def grid_before_after(
    img_before: np.ndarray,
    img_after: np.ndarray,
    titles: Sequence[str] = ("Before", "After"),
    suptitle: Optional[str] = None,
) -> Figure:
    """Two grayscale panels side by side; the input panel uses robust limits."""
    fig = Figure(figsize=(10, 4))
    FigureCanvasAgg(fig)
    axs = fig.subplots(1, 2)
    vmin, vmax = robust_limits(img_before)
    axs[0].imshow(img_before, cmap="gray", vmin=vmin, vmax=vmax); axs[0].set_title(titles[0]); axs[0].axis("off")
    axs[1].imshow(img_after, cmap="gray", vmin=0, vmax=255); axs[1].set_title(titles[1]); axs[1].axis("off")
    if suptitle is not None:
        fig.suptitle(suptitle)
    fig.tight_layout()
    return fig


def save_before_after(path: str, img_before: np.ndarray, img_after: np.ndarray, *, title: Optional[str] = None) -> str:
    """Render `grid_before_after` to a PNG at `path`."""
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)
    fig = grid_before_after(img_before, img_after, titles=("Input luminance", "CLAHE luminance"), suptitle=title)
    fig.savefig(path, dpi=100)
    return path
