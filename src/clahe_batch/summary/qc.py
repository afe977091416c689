# --- file: clahe_batch/summary/qc.py ---
"""
Per-image QC numbers and the batch summary table.

The summary is a CSV with one row per input file (processed, skipped or
failed), written next to the outputs.
"""

from __future__ import annotations
import csv
import os
from typing import Dict, Iterable, List, Mapping

import numpy as np

__all__ = ["SUMMARY_FIELDS", "luminance_stats", "write_summary_csv"]

SUMMARY_FIELDS: List[str] = [
    "file",
    "status",
    "depth",
    "channels",
    "height",
    "width",
    "mean_in",
    "mean_out",
    "std_in",
    "std_out",
    "message",
]


def luminance_stats(lum_in: np.ndarray, lum_out: np.ndarray) -> Dict[str, float]:
    """Mean/std of the luminance before and after equalization."""
    a = np.asarray(lum_in, dtype=np.float64)
    b = np.asarray(lum_out, dtype=np.float64)
    return {
        "mean_in": float(a.mean()) if a.size else float("nan"),
        "mean_out": float(b.mean()) if b.size else float("nan"),
        "std_in": float(a.std()) if a.size else float("nan"),
        "std_out": float(b.std()) if b.size else float("nan"),
    }


def write_summary_csv(path: str, rows: Iterable[Mapping[str, object]]) -> str:
    """Write rows (dicts keyed by SUMMARY_FIELDS) to `path`; missing keys stay empty."""
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)
    with open(path, "w", newline="") as fw:
        w = csv.DictWriter(fw, fieldnames=SUMMARY_FIELDS, extrasaction="ignore")
        w.writeheader()
        for r in rows:
            w.writerow({k: ("" if r.get(k) is None else r.get(k)) for k in SUMMARY_FIELDS})
    return path
