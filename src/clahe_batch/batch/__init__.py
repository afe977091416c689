"""
clahe_batch.batch
=================

Parallel batch runner: one independent task per image on a bounded
thread pool, results joined when the pool drains.
"""

from .scheduler import ImageResult, BatchScheduler, process_one, run_batch

import importlib as _importlib
scheduler = _importlib.import_module(".scheduler", __name__)

__all__ = [
    # classes / functions
    "ImageResult",
    "BatchScheduler",
    "process_one",
    "run_batch",
    # modules
    "scheduler",
]
