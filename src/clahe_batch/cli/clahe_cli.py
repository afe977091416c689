# --- file: clahe_batch/cli/clahe_cli.py ---
"""
Batch CLAHE over a directory of images.

Features
--------
- Any file in the input directory is attempted; 8/16 bit gray, RGB and RGBA
  images are enhanced, everything else is reported and skipped.
- 16 bit inputs are scaled to 8 bit by their own maximum before CLAHE.
- Color images are equalized on the Lab L plane only (chroma untouched).
- One task per image on a fixed-size thread pool.

Usage
-----
clahe <input_dir> <output_dir> <clip_limit> <window_size> <thread_count>

python -m clahe_batch.cli.clahe_cli input output 2 8 4 --summary --preview

Outputs
-------
<output_dir>/<same file name>          - enhanced image (8 bit)
<output_dir>/summary.csv               - per-file status and stats (if --summary)
<output_dir>/_preview/<name>_preview.png - before/after panel (if --preview)

Exit status is 0 once the batch has run (even with skipped images) and 1 if
the input directory does not exist.
"""

from __future__ import annotations
import argparse
import os
from typing import Iterable, List

from clahe_batch.batch import BatchScheduler, ImageResult
from clahe_batch.config import ClaheParams
from clahe_batch.errors import InvalidInputDirectory
from clahe_batch.io import ensure_dir, list_images
from clahe_batch.summary import write_summary_csv


# ------------------------------- helpers ------------------------------------ #

def _non_negative_float(v: str) -> float:
    try:
        x = float(v)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {v!r}") from None
    if not (x >= 0):
        raise argparse.ArgumentTypeError(f"must be >= 0, got {v!r}")
    return x


def _positive_int(v: str) -> int:
    try:
        n = int(v)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {v!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {v!r}")
    return n


# ------------------------------- core --------------------------------------- #

def run_clahe(
    input_dir: str,
    output_dir: str,
    clip_limit: float,
    window_size: int,
    threads: int,
    *,
    zero_clip: str = "unbounded",
    summary: bool = False,
    preview: bool = False,
    progress: bool = True,
    verbose: bool = True,
) -> List[ImageResult]:
    """
    Enhance every file of `input_dir` into `output_dir`.

    Raises InvalidInputDirectory before any work if `input_dir` is missing.
    """
    files = list_images(input_dir)
    if verbose:
        print(f"[clahe] input directory: {input_dir}")
        print(f"[clahe] output directory: {output_dir}")
    if not os.path.isdir(output_dir):
        if verbose:
            print("[clahe] output directory does not exist, creating it")
        ensure_dir(output_dir, mode=0o700)

    params = ClaheParams.square(clip_limit, window_size, zero_clip=zero_clip)
    if verbose:
        print(f"[batch] files={len(files)} clip={params.clip_limit:g} "
              f"grid={params.window_size[0]}x{params.window_size[1]} threads={threads}")

    sched = BatchScheduler(
        threads, params, preview=preview, progress=progress, verbose=verbose,
    )
    results = sched.run(files, output_dir)

    if summary:
        csv_path = write_summary_csv(os.path.join(output_dir, "summary.csv"), [r.as_row() for r in results])
        if verbose:
            print(f"[OK] summary -> {csv_path}")

    if verbose:
        n_ok = sum(r.ok for r in results)
        n_skip = sum(r.status == "skipped" for r in results)
        n_fail = sum(r.status == "failed" for r in results)
        print(f"[OK] processed={n_ok} skipped={n_skip} failed={n_fail}")
    return results


# ------------------------------- CLI ---------------------------------------- #

def main(argv: Iterable[str] | None = None) -> None:
    ap = argparse.ArgumentParser(
        prog="clahe",
        description="Contrast-limited adaptive histogram equalization over a directory of images.",
    )
    ap.add_argument("input_dir", help="Directory with input images (must exist)")
    ap.add_argument("output_dir", help="Destination directory (created if missing)")
    ap.add_argument("clip_limit", type=_non_negative_float, help="Clip limit, e.g. 2 (0 = see --zero-clip)")
    ap.add_argument("window_size", type=_positive_int, help="Tile grid size N (N x N tiles)")
    ap.add_argument("thread_count", type=_positive_int, help="Number of worker threads")
    ap.add_argument("--zero-clip", choices=["unbounded", "uniform"], default="unbounded",
                    help="Meaning of clip_limit 0: no clipping (default) or full uniform redistribution")
    ap.add_argument("--summary", action="store_true", help="Write summary.csv into output_dir")
    ap.add_argument("--preview", action="store_true", help="Write before/after PNGs into output_dir/_preview")
    ap.add_argument("--quiet", action="store_true", help="No per-image messages or progress bar")
    args = ap.parse_args(list(argv) if argv is not None else None)

    try:
        run_clahe(
            args.input_dir,
            args.output_dir,
            args.clip_limit,
            args.window_size,
            args.thread_count,
            zero_clip=args.zero_clip,
            summary=args.summary,
            preview=args.preview,
            progress=not args.quiet,
            verbose=not args.quiet,
        )
    except InvalidInputDirectory as e:
        raise SystemExit(f"[clahe] {e}")


if __name__ == "__main__":
    main()
