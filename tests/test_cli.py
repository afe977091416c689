"""Tests for the `clahe` command line."""

import csv
import os

import pytest

from clahe_batch.cli import clahe_main, run_clahe


def test_missing_input_directory_exits_nonzero(tmp_path):
    with pytest.raises(SystemExit) as ei:
        clahe_main([str(tmp_path / "nope"), str(tmp_path / "out"), "2", "8", "2"])
    # a string code makes the interpreter exit with status 1
    assert isinstance(ei.value.code, str)
    assert "does not exist" in ei.value.code
    assert not os.path.exists(tmp_path / "out")


def test_run_writes_outputs_and_summary(batch_dir, out_dir):
    clahe_main([str(batch_dir), out_dir, "2", "4", "3", "--quiet", "--summary"])
    for name in ("gray8.png", "color8.png", "gray16.png"):
        assert os.path.isfile(os.path.join(out_dir, name))
    with open(os.path.join(out_dir, "summary.csv"), newline="") as f:
        rows = {r["file"]: r for r in csv.DictReader(f)}
    assert rows["broken.png"]["status"] == "skipped"
    assert rows["gray8.png"]["status"] == "ok"
    assert rows["gray16.png"]["depth"] == "16"


def test_output_directory_is_private(batch_dir, out_dir):
    run_clahe(str(batch_dir), out_dir, 2.0, 4, 1, progress=False, verbose=False)
    if os.name == "posix":
        assert os.stat(out_dir).st_mode & 0o077 == 0


def test_preview_flag(batch_dir, out_dir):
    clahe_main([str(batch_dir), out_dir, "2", "4", "2", "--quiet", "--preview"])
    assert os.path.isfile(os.path.join(out_dir, "_preview", "gray8_preview.png"))


def test_zero_clip_option(batch_dir, out_dir):
    results = run_clahe(str(batch_dir), out_dir, 0.0, 4, 2, zero_clip="uniform",
                        progress=False, verbose=False)
    assert sum(r.ok for r in results) == 3


def test_verbose_messages(batch_dir, out_dir, capsys):
    run_clahe(str(batch_dir), out_dir, 2.0, 4, 2, progress=False)
    out = capsys.readouterr().out
    assert f"input directory: {batch_dir}" in out
    assert "output directory does not exist" in out
    assert "processed=3 skipped=1 failed=0" in out


@pytest.mark.parametrize(
    "args",
    [
        ["-1", "8", "2"],
        ["x", "8", "2"],
        ["2", "0", "2"],
        ["2", "8", "0"],
        ["2", "8"],
    ],
)
def test_bad_arguments_are_usage_errors(batch_dir, out_dir, args):
    with pytest.raises(SystemExit) as ei:
        clahe_main([str(batch_dir), out_dir] + args)
    assert ei.value.code == 2
