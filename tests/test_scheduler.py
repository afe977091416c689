"""Tests for the batch scheduler: isolation, ordering, determinism."""

import os
import threading

import numpy as np
import pytest

from clahe_batch.batch import BatchScheduler, process_one, run_batch
from clahe_batch.config import ClaheParams
from clahe_batch.errors import ImageEncodeFailure
from clahe_batch.io import list_images, read_image, write_image

PARAMS = ClaheParams.square(2.0, 4)


def _by_name(results):
    return {os.path.basename(r.file): r for r in results}


def test_batch_isolates_bad_files(batch_dir, out_dir):
    results = run_batch(list_images(str(batch_dir)), out_dir, PARAMS, workers=3, progress=False, verbose=False)
    r = _by_name(results)
    assert set(r) == {"broken.png", "color8.png", "gray16.png", "gray8.png"}
    assert r["broken.png"].status == "skipped"
    assert r["broken.png"].output is None
    for name in ("color8.png", "gray16.png", "gray8.png"):
        assert r[name].ok, r[name].message
        assert os.path.isfile(os.path.join(out_dir, name))
    assert not os.path.exists(os.path.join(out_dir, "broken.png"))


def test_outputs_are_8bit_with_input_layout(batch_dir, out_dir):
    run_batch(list_images(str(batch_dir)), out_dir, PARAMS, workers=2, progress=False, verbose=False)
    g16 = read_image(os.path.join(out_dir, "gray16.png"))
    assert g16.dtype == np.uint8 and g16.shape == (40, 50)
    c8 = read_image(os.path.join(out_dir, "color8.png"))
    assert c8.dtype == np.uint8 and c8.shape == (40, 50, 3)


def test_result_metadata(batch_dir, out_dir):
    r = _by_name(run_batch(list_images(str(batch_dir)), out_dir, PARAMS, progress=False, verbose=False))
    g16 = r["gray16.png"]
    assert (g16.depth, g16.channels, g16.height, g16.width) == (16, 1, 40, 50)
    assert set(g16.stats) == {"mean_in", "mean_out", "std_in", "std_out"}
    row = g16.as_row()
    assert row["file"] == "gray16.png" and row["status"] == "ok" and "mean_out" in row


def test_results_in_input_order(batch_dir, out_dir):
    paths = list_images(str(batch_dir))
    results = BatchScheduler(4, PARAMS, progress=False, verbose=False).run(paths, out_dir)
    assert [r.file for r in results] == paths


def test_worker_count_does_not_change_outputs(batch_dir, tmp_path):
    paths = list_images(str(batch_dir))
    one = str(tmp_path / "one")
    many = str(tmp_path / "many")
    run_batch(paths, one, PARAMS, workers=1, progress=False, verbose=False)
    run_batch(paths, many, PARAMS, workers=8, progress=False, verbose=False)
    for name in ("color8.png", "gray16.png", "gray8.png"):
        np.testing.assert_array_equal(
            read_image(os.path.join(one, name)), read_image(os.path.join(many, name))
        )


def test_unsupported_depth_is_skipped(tmp_path, out_dir):
    import tifffile as tiff

    src = tmp_path / "in"
    src.mkdir()
    tiff.imwrite(str(src / "float.tif"), np.zeros((8, 8), np.float32))
    (res,) = run_batch(list_images(str(src)), out_dir, PARAMS, progress=False, verbose=False)
    assert res.status == "skipped"
    assert (res.height, res.width) == (8, 8)
    assert "unsupported sample type" in res.message


def test_writer_failure_is_isolated(batch_dir, out_dir):
    def writer(path, image):
        if os.path.basename(path) == "gray8.png":
            raise ImageEncodeFailure(path, "disk full")
        return write_image(path, image)

    r = _by_name(run_batch(list_images(str(batch_dir)), out_dir, PARAMS, workers=2,
                           writer=writer, progress=False, verbose=False))
    assert r["gray8.png"].status == "failed"
    assert "disk full" in r["gray8.png"].message
    assert r["color8.png"].ok and r["gray16.png"].ok


def test_unexpected_error_is_isolated(batch_dir, out_dir):
    def reader(path):
        if path.endswith("color8.png"):
            raise RuntimeError("boom")
        return read_image(path)

    r = _by_name(run_batch(list_images(str(batch_dir)), out_dir, PARAMS, workers=2,
                           reader=reader, progress=False, verbose=False))
    assert r["color8.png"].status == "failed"
    assert "RuntimeError" in r["color8.png"].message
    assert r["gray8.png"].ok


def test_uses_requested_threads(batch_dir, out_dir):
    seen = set()

    def reader(path):
        seen.add(threading.current_thread().name)
        return read_image(path)

    run_batch(list_images(str(batch_dir)), out_dir, PARAMS, workers=2, reader=reader,
              progress=False, verbose=False)
    assert seen and all(n.startswith("clahe") for n in seen)
    assert len(seen) <= 2


def test_preview(batch_dir, out_dir):
    path = os.path.join(str(batch_dir), "gray8.png")
    res = process_one(path, out_dir, PARAMS, preview=True, verbose=False)
    assert res.ok
    assert res.preview == os.path.join(out_dir, "_preview", "gray8_preview.png")
    assert os.path.isfile(res.preview)


def test_empty_batch(out_dir):
    assert BatchScheduler(2, progress=False).run([], out_dir) == []


@pytest.mark.parametrize("workers", [0, -3])
def test_invalid_worker_count(workers):
    with pytest.raises(ValueError):
        BatchScheduler(workers)


def test_messages_name_layout(batch_dir, out_dir, capsys):
    process_one(os.path.join(str(batch_dir), "gray16.png"), out_dir, PARAMS)
    process_one(os.path.join(str(batch_dir), "broken.png"), out_dir, PARAMS)
    out = capsys.readouterr().out
    assert "gray16.png: gray scale 16 bit image" in out
    assert "[skip] broken.png" in out
