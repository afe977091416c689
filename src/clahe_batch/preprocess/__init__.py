"""
clahe_batch.preprocess
======================

Steps that bring decoded images into the domain the equalizer works in.

Modules
-------
depth : 16-bit → 8-bit, max-relative normalization (per image).

Guidelines
----------
- Normalization is computed from the current image only; never reuse a
  maximum from another image of the batch.
"""

# Re-exports for short imports like:
#   from clahe_batch.preprocess import normalize_to_u8, sample_depth
from .depth import sample_depth, normalize_to_u8, alpha_to_u8

import importlib as _importlib
depth = _importlib.import_module(".depth", __name__)

__all__ = [
    # functions
    "sample_depth",
    "normalize_to_u8",
    "alpha_to_u8",
    # modules
    "depth",
]
