"""
clahe_batch.filters
===================

Contrast-limited adaptive histogram equalization and the color handling
around it.

Modules
-------
tiles    : Tile grid (exact partition, tile centers, interpolation weights).
clahe    : Histograms, clipping, mapping LUTs and interpolated application.
color    : Luminance/chrominance split (Lab) and alpha pass-through.
contrast : Whole-image pipeline (depth → luminance → CLAHE → recombine).

Design
------
- The equalizer only ever sees single-channel uint8 images; depth
  normalization and color separation happen around it.
- Tile LUTs are blended bilinearly between tile centers; no seams.
- clip_limit is relative to the mean bin height, like OpenCV's.

Typical defaults
----------------
- clip_limit ≈ 2.0–3.0, tile grid ≈ 8×8.
"""

# Short imports for public API
from .tiles import TileGrid, make_tile_grid, axis_weights
from .clahe import (
    tile_histograms,
    clip_threshold,
    clip_histogram,
    build_mapping,
    tile_mappings,
    blend_mapping,
    apply_mappings,
    equalize,
)
from .color import split_luminance, merge_luminance
from .contrast import ContrastResult, clahe_image, clahe_u8

# Modules export (tiles, clahe, color, contrast)
import importlib as _importlib
tiles = _importlib.import_module(".tiles", __name__)
clahe = _importlib.import_module(".clahe", __name__)
color = _importlib.import_module(".color", __name__)
contrast = _importlib.import_module(".contrast", __name__)

__all__ = [
    # classes / functions
    "TileGrid",
    "make_tile_grid",
    "axis_weights",
    "tile_histograms",
    "clip_threshold",
    "clip_histogram",
    "build_mapping",
    "tile_mappings",
    "blend_mapping",
    "apply_mappings",
    "equalize",
    "split_luminance",
    "merge_luminance",
    "ContrastResult",
    "clahe_image",
    "clahe_u8",
    # modules
    "tiles",
    "clahe",
    "color",
    "contrast",
]
