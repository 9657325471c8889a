"""Header model: the subset of NIfTI metadata needed for reslicing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np

from slicenii.core.errors import UnsupportedRank
from slicenii.core.types import Axis

_HOMOGENEOUS_ROW = np.array([0.0, 0.0, 0.0, 1.0])


def check_affine(affine: np.ndarray) -> np.ndarray:
    """Return a read-only float64 copy of a 4x4 homogeneous affine."""
    arr = np.array(affine, dtype=np.float64)
    if arr.shape != (4, 4):
        raise ValueError(f"Affine must be 4x4, got {arr.shape}")
    if not np.array_equal(arr[3], _HOMOGENEOUS_ROW):
        raise ValueError(f"Affine bottom row must be (0, 0, 0, 1), got {tuple(arr[3])}")
    arr.flags.writeable = False
    return arr


def _same_scale(a: float, b: float) -> bool:
    # unset scaling is stored as NaN
    return a == b or (math.isnan(a) and math.isnan(b))


def _shift_origin(affine: np.ndarray, axis: int, index: int) -> np.ndarray:
    shifted = affine.copy()
    shifted[:3, 3] = affine[:3, 3] + index * affine[:3, axis]
    return shifted


@dataclass(frozen=True, eq=False)
class HeaderModel:
    """Immutable spatial header for a 3D or 4D volume.

    ``affine`` is the sform (voxel index -> world) and ``qform`` the
    quaternion-derived transform; the ``*_code`` fields say whether each one
    is authoritative. ``datatype``, ``xyzt_units``, ``descrip`` and the
    ``scl_slope``/``scl_inter`` scaling pair are opaque and only ever copied;
    ``source`` is the full file header the model was read from (if any), kept
    so writers can reproduce every field the model does not name.
    """

    dim: tuple[int, ...]
    pixdim: tuple[float, ...]
    affine: np.ndarray
    sform_code: int = 1
    qform: np.ndarray = field(default_factory=lambda: np.eye(4))
    qform_code: int = 0
    datatype: int = 16  # NIFTI_TYPE_FLOAT32
    xyzt_units: int = 0
    descrip: str = ""
    scl_slope: float = math.nan
    scl_inter: float = math.nan
    source: Any = None

    def __post_init__(self):
        dim = tuple(int(d) for d in self.dim)
        pixdim = tuple(float(p) for p in self.pixdim)
        if len(dim) not in (3, 4):
            raise UnsupportedRank(f"Volumes must be 3D or 4D, got {len(dim)} dimensions")
        if len(pixdim) != len(dim):
            raise ValueError(
                f"Voxel sizes {pixdim} do not match dimensions {dim}"
            )
        if any(d <= 0 for d in dim):
            raise ValueError(f"Dimensions must be positive, got {dim}")
        object.__setattr__(self, "dim", dim)
        object.__setattr__(self, "pixdim", pixdim)
        object.__setattr__(self, "scl_slope", float(self.scl_slope))
        object.__setattr__(self, "scl_inter", float(self.scl_inter))
        object.__setattr__(self, "affine", check_affine(self.affine))
        object.__setattr__(self, "qform", check_affine(self.qform))

    @property
    def ndim(self) -> int:
        return len(self.dim)

    @property
    def zooms(self) -> tuple[float, float, float]:
        """Spatial voxel sizes (first three entries of pixdim)."""
        return self.pixdim[:3]

    def shifted(self, axis: Axis, index: int, thickness: int = 1) -> HeaderModel:
        """Header for the slice at ``index`` along a spatial ``axis``.

        The sliced dimension becomes ``thickness`` and both affines move
        their origin to the slice's physical position.
        """
        if not axis.is_spatial:
            raise ValueError("shifted() only applies to spatial axes")
        a = axis.value
        dim = list(self.dim)
        dim[a] = thickness
        return replace(
            self,
            dim=tuple(dim),
            affine=_shift_origin(self.affine, a, index),
            qform=_shift_origin(self.qform, a, index),
        )

    def drop_trailing(self) -> HeaderModel:
        """Header for one 3D time point of a 4D volume."""
        if self.ndim != 4:
            raise UnsupportedRank("Only 4D headers have a trailing axis to drop")
        return replace(self, dim=self.dim[:3], pixdim=self.pixdim[:3])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderModel):
            return NotImplemented
        return (
            self.dim == other.dim
            and self.pixdim == other.pixdim
            and np.array_equal(self.affine, other.affine)
            and self.sform_code == other.sform_code
            and np.array_equal(self.qform, other.qform)
            and self.qform_code == other.qform_code
            and self.datatype == other.datatype
            and self.xyzt_units == other.xyzt_units
            and self.descrip == other.descrip
            and _same_scale(self.scl_slope, other.scl_slope)
            and _same_scale(self.scl_inter, other.scl_inter)
        )

    __hash__ = None
