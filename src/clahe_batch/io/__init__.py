# -*- coding: utf-8 -*-
"""Public I/O API for clahe_batch.io."""
from .readers import read_image, list_images
from .writers import write_image, ensure_dir
from .formats import describe_layout, layout_label

__all__ = [
    "read_image",
    "list_images",
    "write_image",
    "ensure_dir",
    "describe_layout",
    "layout_label",
]
