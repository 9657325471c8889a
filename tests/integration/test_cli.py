"""Integration test: CLI argument parsing and commands."""

from __future__ import annotations

import numpy as np
from typer.testing import CliRunner

from slicenii.cli import combine_app, slice_app
from slicenii.io.nifti_io import load_volume, save_volume

runner = CliRunner()


def test_version():
    result = runner.invoke(slice_app, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output

    result = runner.invoke(combine_app, ["--version"])
    assert result.exit_code == 0


def test_missing_input():
    result = runner.invoke(slice_app, [])
    assert result.exit_code != 0


def test_nonexistent_input():
    result = runner.invoke(slice_app, ["/nonexistent/file.nii"])
    assert result.exit_code != 0


def test_combine_requires_reference(tmp_path):
    result = runner.invoke(combine_app, ["-i", str(tmp_path)])
    assert result.exit_code != 0


def test_invalid_axis_rejected(nifti_file):
    result = runner.invoke(slice_app, [str(nifti_file), "-a", "fourth"])
    assert result.exit_code != 0


def test_thickness_below_one_rejected(nifti_file):
    result = runner.invoke(slice_app, [str(nifti_file), "-t", "0"])
    assert result.exit_code != 0


def test_slice_then_combine(nifti_file, tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    result = runner.invoke(slice_app, [str(nifti_file), "-o", str(out), "-a", "guess", "-t", "2"])
    assert result.exit_code == 0, f"CLI failed: {result.output}"

    slice_dir = out / "sub-01_T1w_slices"
    files = sorted(slice_dir.glob("*.nii"))
    assert len(files) == 4
    assert files[0].name == "sub-01_T1w_axis-2_slice-padded-001.nii"

    combined = tmp_path / "combined.nii"
    result = runner.invoke(
        combine_app,
        ["-i", str(slice_dir), "-r", str(nifti_file), "-o", str(combined), "-s", "sub-01_T1w"],
    )
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    np.testing.assert_array_equal(load_volume(combined).data, load_volume(nifti_file).data)


def test_ambiguous_axis_exits_nonzero(tmp_path, volume_factory):
    path = tmp_path / "iso.nii"
    save_volume(volume_factory((4, 4, 4), (1.0, 1.0, 1.0)), path)
    result = runner.invoke(slice_app, [str(path), "-o", str(tmp_path)])
    assert result.exit_code == 1
    assert not (tmp_path / "iso_slices").exists()


def test_spatial_axis_on_4d_exits_nonzero(nifti_temporal_file, tmp_path):
    result = runner.invoke(slice_app, [str(nifti_temporal_file), "-o", str(tmp_path), "-a", "first"])
    assert result.exit_code == 1


def test_combine_missing_reference_exits_4(tmp_path):
    result = runner.invoke(combine_app, ["-i", str(tmp_path), "-r", str(tmp_path / "ref.nii")])
    assert result.exit_code == 4


def test_combine_no_matching_files_exits_nonzero(nifti_file, tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    result = runner.invoke(combine_app, ["-i", str(empty), "-r", str(nifti_file)])
    assert result.exit_code == 1
