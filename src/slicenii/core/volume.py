"""Volume data structures: an array paired with its header."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from slicenii.core.errors import ShapeMismatch, UnsupportedRank
from slicenii.core.header import HeaderModel
from slicenii.core.types import Axis


@dataclass(frozen=True, eq=False)
class Volume:
    """Dense 3D or 4D array whose shape equals its header's ``dim``."""

    data: np.ndarray
    header: HeaderModel

    def __post_init__(self):
        if self.data.ndim not in (3, 4):
            raise UnsupportedRank(f"Volumes must be 3D or 4D, got {self.data.ndim} dimensions")
        if tuple(self.data.shape) != self.header.dim:
            raise ShapeMismatch(
                f"Array shape {self.data.shape} does not match header dim {self.header.dim}"
            )

    @property
    def shape(self) -> tuple[int, ...]:
        return self.data.shape

    @property
    def ndim(self) -> int:
        return self.data.ndim


@dataclass
class SliceSet:
    """Ordered slices of one volume along a resolved axis."""

    slices: list[Volume]
    axis: Axis
    thickness: int = 1

    def __len__(self) -> int:
        return len(self.slices)

    def __iter__(self):
        return iter(self.slices)

    def __getitem__(self, index: int) -> Volume:
        return self.slices[index]

    def validate(self) -> None:
        """Check all members share off-axis shape and datatype code."""
        if not self.slices:
            return
        first = self.slices[0]
        expected = off_axis_shape(first.shape, self.axis)
        for i, vol in enumerate(self.slices[1:], start=1):
            if vol.ndim != first.ndim or off_axis_shape(vol.shape, self.axis) != expected:
                raise ShapeMismatch(
                    f"Slice {i} has shape {vol.shape}, expected {expected} outside axis "
                    f"{self.axis.value}"
                )
            if vol.header.datatype != first.header.datatype:
                raise ShapeMismatch(
                    f"Slice {i} has datatype code {vol.header.datatype}, "
                    f"expected {first.header.datatype}"
                )


def off_axis_shape(shape: tuple[int, ...], axis: Axis) -> tuple[int, ...]:
    if axis is Axis.TRAILING:
        return tuple(shape)
    return tuple(s for i, s in enumerate(shape) if i != axis.value)
