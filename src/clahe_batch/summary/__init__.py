"""
clahe_batch.summary
===================

Quality-control numbers, batch summary table and before/after previews.

Modules
-------
qc  : Luminance statistics and summary.csv writer.
viz : Before/after preview panels (Matplotlib, no pyplot state).

Guidelines
----------
- Summary products are for inspection only; they never feed back into the
  images that are written.
"""

# Re-exports for short imports like:
#   from clahe_batch.summary import luminance_stats, write_summary_csv
#   from clahe_batch.summary import save_before_after
from .qc import SUMMARY_FIELDS, luminance_stats, write_summary_csv
from .viz import robust_limits, grid_before_after, save_before_after

import importlib as _importlib
qc = _importlib.import_module(".qc", __name__)
viz = _importlib.import_module(".viz", __name__)

__all__ = [
    # constants / functions
    "SUMMARY_FIELDS",
    "luminance_stats",
    "write_summary_csv",
    "robust_limits",
    "grid_before_after",
    "save_before_after",
    # modules
    "qc",
    "viz",
]
