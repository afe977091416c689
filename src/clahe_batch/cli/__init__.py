"""
clahe_batch.cli
===============

Command-line entrypoint for batch CLAHE (clahe_cli).

Re-exports
----------
from clahe_batch.cli import run_clahe, clahe_main, clahe_cli
"""

# short imports, e.g.:
#   from clahe_batch.cli import run_clahe
from .clahe_cli import run_clahe as run_clahe, main as clahe_main

# also expose the submodule itself
import importlib as _importlib
clahe_cli = _importlib.import_module(".clahe_cli", __name__)

__all__ = [
    # functions
    "run_clahe", "clahe_main",
    # modules
    "clahe_cli",
]
