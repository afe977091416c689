# --- file: clahe_batch/__init__.py ---
__all__ = [
    "batch",
    "cli",
    "config",
    "errors",
    "filters",
    "io",
    "preprocess",
    "summary",
]

__version__ = "0.1.0"
