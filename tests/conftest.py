"""Shared test fixtures: synthetic NIfTI volumes."""

from __future__ import annotations

from pathlib import Path

import nibabel as nib
import numpy as np
import pytest

from slicenii.core.header import HeaderModel
from slicenii.core.volume import Volume
from slicenii.io.nifti_io import save_volume


def make_affine(zooms, origin=(0.0, 0.0, 0.0)) -> np.ndarray:
    """Oblique affine: a rotation about z, scaled by ``zooms``."""
    theta = np.deg2rad(15.0)
    rot = np.array([
        [np.cos(theta), -np.sin(theta), 0.0],
        [np.sin(theta), np.cos(theta), 0.0],
        [0.0, 0.0, 1.0],
    ])
    affine = np.eye(4)
    affine[:3, :3] = rot @ np.diag(zooms)
    affine[:3, 3] = origin
    return affine


def make_volume(shape, zooms, dtype=np.float32, origin=(-10.0, 20.0, -30.0)) -> Volume:
    """Volume with distinct, index-dependent voxel values."""
    data = np.arange(int(np.prod(shape)), dtype=np.float64).reshape(shape).astype(dtype)
    affine = make_affine(zooms[:3], origin)
    header = HeaderModel(
        dim=shape,
        pixdim=zooms,
        affine=affine,
        sform_code=1,
        qform=affine,
        qform_code=1,
        datatype=16,
        xyzt_units=10,
        descrip="synthetic",
    )
    return Volume(data=data, header=header)


@pytest.fixture
def synthetic_volume() -> Volume:
    """Create a small 3D volume with a coarse third axis."""
    return make_volume((6, 5, 4), (2.0, 2.0, 4.0))


@pytest.fixture
def synthetic_temporal_volume() -> Volume:
    """Create a small 4D volume with 3 time points."""
    return make_volume((6, 5, 4, 3), (2.0, 2.0, 4.0, 1.5))


@pytest.fixture
def nifti_file(tmp_path, synthetic_volume) -> Path:
    """Write the synthetic 3D volume to disk."""
    path = tmp_path / "sub-01_T1w.nii"
    save_volume(synthetic_volume, path)
    return path


@pytest.fixture
def nifti_temporal_file(tmp_path, synthetic_temporal_volume) -> Path:
    """Write the synthetic 4D volume to disk."""
    path = tmp_path / "sub-01_bold.nii"
    save_volume(synthetic_temporal_volume, path)
    return path


@pytest.fixture
def volume_factory():
    """Return the make_volume helper for tests needing custom shapes."""
    return make_volume


@pytest.fixture
def scaled_nifti_file(tmp_path) -> Path:
    """int16 volume with scaling and the header fields slicing must carry."""
    shape = (6, 5, 4)
    raw = (np.arange(int(np.prod(shape))).reshape(shape) * 37 - 200).astype(np.int16)
    img = nib.Nifti1Image(raw, make_affine((2.0, 2.0, 4.0), (-10.0, 20.0, -30.0)))
    hdr = img.header
    hdr.set_data_dtype(np.int16)
    hdr.set_zooms((2.0, 2.0, 4.0))
    hdr.set_slope_inter(0.37, 11.0)
    hdr.set_intent("label")
    hdr.set_dim_info(freq=0, phase=1, slice=2)
    hdr["cal_min"] = -5.0
    hdr["cal_max"] = 99.0
    hdr["slice_duration"] = 0.05
    hdr["toffset"] = 1.5
    path = tmp_path / "sub-02_T2w.nii"
    nib.save(img, str(path))
    return path
