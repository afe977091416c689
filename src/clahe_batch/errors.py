# -*- coding: utf-8 -*-
"""
errors.py — exception taxonomy for clahe_batch.

Fatal setup errors (InvalidInputDirectory) abort a run before the worker pool
starts. Everything else is per-image: the scheduler records it against that
image and keeps going.
"""
from __future__ import annotations

__all__ = [
    "ClaheError",
    "InvalidInputDirectory",
    "UnsupportedSampleDepth",
    "UnsupportedChannelLayout",
    "ImageDecodeFailure",
    "ImageEncodeFailure",
]


class ClaheError(Exception):
    """Base class for all clahe_batch errors."""


class InvalidInputDirectory(ClaheError, FileNotFoundError):
    """Input directory is missing or is not a directory."""

    def __init__(self, path: str):
        super().__init__(f"Input directory does not exist: {path}")
        self.path = path


class UnsupportedSampleDepth(ClaheError, ValueError):
    """Samples are neither uint8 nor uint16."""

    def __init__(self, dtype, path: str | None = None):
        where = f"{path}: " if path else ""
        super().__init__(
            f"{where}unsupported sample type {dtype}; expected 8 or 16 bit unsigned samples"
        )
        self.dtype = dtype
        self.path = path


class UnsupportedChannelLayout(ClaheError, ValueError):
    """Array shape is not (H, W), (H, W, 1), (H, W, 3) or (H, W, 4)."""

    def __init__(self, shape, path: str | None = None):
        where = f"{path}: " if path else ""
        super().__init__(f"{where}unsupported image shape {tuple(shape)}")
        self.shape = tuple(shape)
        self.path = path


class ImageDecodeFailure(ClaheError, OSError):
    """File could not be decoded as an image."""

    def __init__(self, path: str, reason: str = "not a readable image"):
        super().__init__(f"{path}: {reason}")
        self.path = path


class ImageEncodeFailure(ClaheError, OSError):
    """Result could not be encoded/written to its destination."""

    def __init__(self, path: str, reason: str = "encoder refused the image"):
        super().__init__(f"{path}: {reason}")
        self.path = path
