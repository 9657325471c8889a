"""NIfTI reader/writer: convert between nibabel images and Volumes."""

from __future__ import annotations

import logging
from pathlib import Path

import nibabel as nib
import numpy as np

from slicenii.core.errors import UnsupportedRank
from slicenii.core.header import HeaderModel
from slicenii.core.volume import Volume

logger = logging.getLogger(__name__)

NIFTI_SUFFIXES = (".nii", ".nii.gz")


def strip_nifti_suffix(name: str) -> str:
    """Drop a trailing .nii / .nii.gz, leaving other periods in place."""
    for suffix in sorted(NIFTI_SUFFIXES, key=len, reverse=True):
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def is_nifti(path: Path) -> bool:
    return path.is_file() and path.name.endswith(NIFTI_SUFFIXES)


def header_from_nifti(hdr: nib.Nifti1Header) -> HeaderModel:
    """Build a HeaderModel from a nibabel header."""
    shape = hdr.get_data_shape()
    if len(shape) not in (3, 4):
        raise UnsupportedRank(f"Volumes must be 3D or 4D, got {len(shape)} dimensions")
    sform, sform_code = hdr.get_sform(coded=True)
    if sform is None:
        sform = hdr.get_sform()
    descrip = hdr["descrip"].item()
    if isinstance(descrip, bytes):
        descrip = descrip.decode("latin-1").rstrip("\x00")
    return HeaderModel(
        dim=tuple(shape),
        pixdim=tuple(hdr.get_zooms()[: len(shape)]),
        affine=sform,
        sform_code=int(sform_code),
        qform=hdr.get_qform(),
        qform_code=int(hdr["qform_code"]),
        datatype=int(hdr["datatype"]),
        xyzt_units=int(hdr["xyzt_units"]),
        descrip=descrip,
        scl_slope=float(hdr["scl_slope"]),
        scl_inter=float(hdr["scl_inter"]),
        source=hdr.copy(),
    )


def header_to_nifti(model: HeaderModel) -> nib.Nifti1Header:
    """Build a nibabel header carrying every HeaderModel field.

    Starts from a copy of the header the model was read from, so fields the
    model does not name (intent, dim_info, cal_min/cal_max, slice timing,
    toffset) pass through unchanged.
    """
    if isinstance(model.source, nib.Nifti1Header):
        hdr = model.source.copy()
    else:
        hdr = nib.Nifti1Header()
    hdr.set_data_dtype(model.datatype)
    hdr.set_data_shape(model.dim)
    hdr.set_qform(model.qform, code=model.qform_code)
    hdr.set_sform(model.affine, code=model.sform_code)
    # set_qform overwrites pixdim[1:4] from the qform column norms
    hdr.set_zooms(model.pixdim)
    hdr["xyzt_units"] = model.xyzt_units
    hdr["descrip"] = model.descrip.encode("latin-1", errors="replace")[:79]
    hdr["scl_slope"] = model.scl_slope
    hdr["scl_inter"] = model.scl_inter
    return hdr


def load_volume(path: Path) -> Volume:
    """Read a NIfTI file into a Volume.

    Raises FileNotFoundError for a missing file; nibabel errors for malformed
    files propagate unchanged.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"NIfTI file not found: {path}")
    img = nib.load(str(path))
    header = header_from_nifti(img.header)
    # raw stored values; scl_slope/scl_inter travel in the header
    dataobj = img.dataobj
    data = dataobj.get_unscaled() if nib.is_proxy(dataobj) else np.asanyarray(dataobj)
    logger.debug(f"Loaded {path.name}: shape {data.shape}, dtype {data.dtype}")
    return Volume(data=data, header=header)


def save_volume(volume: Volume, path: Path) -> Path:
    """Write a Volume as an uncompressed single-file NIfTI."""
    path = Path(path)
    # affine=None keeps the header's own sform/qform and their codes
    img = nib.Nifti1Image(volume.data, affine=None, header=header_to_nifti(volume.header))
    # the constructor clears scl_slope/scl_inter; restoring them makes nibabel
    # write the raw array as is instead of picking a new scale
    img.header["scl_slope"] = volume.header.scl_slope
    img.header["scl_inter"] = volume.header.scl_inter
    nib.save(img, str(path))
    logger.debug(f"Saved {path.name}: shape {volume.shape}")
    return path
