# --- file: clahe_batch/batch/scheduler.py ---
"""
Batch CLAHE over a closed list of image files with a bounded thread pool.

Each file is one independent task: read → classify depth/channels → normalize
→ luminance split → equalize → recombine → write. Tasks share nothing mutable;
the only synchronization is the join when the pool drains.

Per-image failures (undecodable file, unsupported depth/layout, encoder
refusal) are recorded in that image's `ImageResult` and never reach sibling
tasks. Nothing is retried.

Usage
-----
>>> from clahe_batch.batch import BatchScheduler
>>> from clahe_batch.config import ClaheParams
>>> sched = BatchScheduler(workers=4, params=ClaheParams.square(2.0, 8))
>>> results = sched.run(paths, "out")
"""

from __future__ import annotations
import os
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
from tqdm import tqdm

from ..config import ClaheParams
from ..errors import (
    ImageDecodeFailure,
    ImageEncodeFailure,
    UnsupportedChannelLayout,
    UnsupportedSampleDepth,
)
from ..filters.contrast import clahe_image
from ..io import describe_layout, layout_label, read_image, write_image
from ..summary import luminance_stats, save_before_after

__all__ = ["ImageResult", "BatchScheduler", "process_one", "run_batch"]

Reader = Callable[[str], np.ndarray]
Writer = Callable[[str, np.ndarray], object]


@dataclass
class ImageResult:
    """Outcome of one image task.

    Attributes
    ----------
    file : str
        Input path.
    status : str
        "ok", "skipped" (decode/depth/layout problems) or "failed" (encode or
        unexpected error).
    output : str or None
        Written path when status == "ok".
    depth, channels, height, width : int or None
        Decoded layout, when decoding got that far.
    stats : dict
        Luminance mean/std before and after (see summary.qc.luminance_stats).
    message : str
        Diagnostic for skipped/failed images.
    preview : str or None
        Before/after PNG, when previews were requested.
    """
    file: str
    status: str
    output: Optional[str] = None
    depth: Optional[int] = None
    channels: Optional[int] = None
    height: Optional[int] = None
    width: Optional[int] = None
    stats: Dict[str, float] = field(default_factory=dict)
    message: str = ""
    preview: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def as_row(self) -> Dict[str, object]:
        row: Dict[str, object] = {
            "file": os.path.basename(self.file),
            "status": self.status,
            "depth": self.depth,
            "channels": self.channels,
            "height": self.height,
            "width": self.width,
            "message": self.message,
        }
        row.update(self.stats)
        return row


def _emit(msg: str, verbose: bool) -> None:
    if verbose:
        tqdm.write(msg, file=sys.stdout)


def process_one(
    path: str,
    outdir: str,
    params: ClaheParams,
    *,
    reader: Reader = read_image,
    writer: Writer = write_image,
    preview: bool = False,
    verbose: bool = True,
) -> ImageResult:
    """Run the full pipeline for one file; per-image errors become the result status."""
    name = os.path.basename(path)
    out_path = os.path.join(outdir, name)

    # 1) Decode and classify
    try:
        img = reader(path)
    except ImageDecodeFailure as e:
        _emit(f"[skip] {name}: cannot decode ({e})", verbose)
        return ImageResult(file=path, status="skipped", message=str(e))

    H, W = (int(img.shape[0]), int(img.shape[1])) if img.ndim >= 2 else (None, None)
    try:
        depth, channels = describe_layout(img)
    except (UnsupportedSampleDepth, UnsupportedChannelLayout) as e:
        _emit(f"[skip] {name}: not supported, expected 8 or 16 bit unsigned gray/RGB ({e})", verbose)
        return ImageResult(file=path, status="skipped", message=str(e), height=H, width=W)

    _emit(f"[clahe] {name}: {layout_label(depth, channels)}", verbose)

    # 2) Enhance
    res = clahe_image(img, params)
    result = ImageResult(
        file=path, status="ok", depth=depth, channels=channels, height=H, width=W,
        stats=luminance_stats(res.lum_in, res.lum_out),
    )

    # 3) Write
    try:
        writer(out_path, res.image)
    except ImageEncodeFailure as e:
        _emit(f"[fail] {name}: cannot write ({e})", verbose)
        result.status = "failed"
        result.message = str(e)
        return result
    result.output = out_path

    # 4) Optional preview panel
    if preview:
        base = os.path.splitext(name)[0]
        png = os.path.join(outdir, "_preview", f"{base}_preview.png")
        try:
            result.preview = save_before_after(png, res.lum_in, res.lum_out, title=name)
        except (OSError, ValueError) as e:
            _emit(f"[warn] {name}: preview failed ({e!r})", verbose)

    return result


def _run_task(path: str, outdir: str, params: ClaheParams, **kwargs) -> ImageResult:
    """`process_one` with a last-resort guard so one task never kills the batch."""
    try:
        return process_one(path, outdir, params, **kwargs)
    except Exception as e:  # isolated to this image
        _emit(f"[fail] {os.path.basename(path)}: {type(e).__name__}: {e}", kwargs.get("verbose", True))
        return ImageResult(file=path, status="failed", message=f"{type(e).__name__}: {e}")


class BatchScheduler:
    """Bounded worker pool applying CLAHE to a closed list of files.

    Parameters
    ----------
    workers : int
        Number of worker threads (>= 1). Oversubscription is allowed.
    params : ClaheParams, optional
        Equalization settings shared (read-only) by all tasks.
    reader, writer : callables
        Codec collaborators; default to `clahe_batch.io.read_image` / `write_image`.
    preview : bool
        Also render a before/after PNG per image into `<outdir>/_preview`.
    progress : bool
        tqdm progress bar over completed images.
    verbose : bool
        Per-image diagnostic lines.
    """

    def __init__(
        self,
        workers: int,
        params: Optional[ClaheParams] = None,
        *,
        reader: Reader = read_image,
        writer: Writer = write_image,
        preview: bool = False,
        progress: bool = True,
        verbose: bool = True,
    ):
        if int(workers) < 1:
            raise ValueError(f"workers must be >= 1, got {workers!r}")
        self.workers = int(workers)
        self.params = params or ClaheParams()
        self.reader = reader
        self.writer = writer
        self.preview = bool(preview)
        self.progress = bool(progress)
        self.verbose = bool(verbose)

    def run(self, paths: Sequence[str], outdir: str) -> List[ImageResult]:
        """Process every path; returns results in input order once all tasks finish."""
        paths = list(paths)
        results: List[Optional[ImageResult]] = [None] * len(paths)
        if not paths:
            return []

        kwargs = dict(
            reader=self.reader, writer=self.writer,
            preview=self.preview, verbose=self.verbose,
        )
        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="clahe") as ex:
            futures = {
                ex.submit(_run_task, p, outdir, self.params, **kwargs): k
                for k, p in enumerate(paths)
            }
            done = as_completed(futures)
            if self.progress:
                done = tqdm(done, total=len(futures), desc="CLAHE", file=sys.stdout)
            for fut in done:
                results[futures[fut]] = fut.result()

        return [r for r in results if r is not None]


def run_batch(
    paths: Sequence[str],
    outdir: str,
    params: Optional[ClaheParams] = None,
    workers: int = 1,
    **kwargs,
) -> List[ImageResult]:
    """One-shot helper: `BatchScheduler(workers, params, **kwargs).run(paths, outdir)`."""
    return BatchScheduler(workers, params, **kwargs).run(paths, outdir)
