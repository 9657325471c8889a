"""Slicer: decompose a volume into ordered slice volumes."""

from __future__ import annotations

import logging

import numpy as np

from slicenii.axis import resolve
from slicenii.core.types import Axis, AxisOption
from slicenii.core.volume import SliceSet, Volume

logger = logging.getLogger(__name__)


def extract_slice(volume: Volume, axis: Axis, index: int, thickness: int = 1) -> Volume:
    """Extract the slice at ``index`` along ``axis`` as a new Volume.

    Spatial slices keep rank 3 with ``thickness`` identical planes along the
    sliced axis; trailing slices are the full 3D time point.
    """
    if thickness < 1:
        raise ValueError(f"Thickness must be >= 1, got {thickness}")

    if axis is Axis.TRAILING:
        data = np.ascontiguousarray(volume.data[..., index])
        return Volume(data=data, header=volume.header.drop_trailing())

    a = axis.value
    plane = np.take(volume.data, [index], axis=a)
    if thickness > 1:
        plane = np.repeat(plane, thickness, axis=a)
    return Volume(
        data=np.ascontiguousarray(plane),
        header=volume.header.shifted(axis, index, thickness),
    )


def slice_volume(
    volume: Volume,
    axis: Axis | AxisOption | None = None,
    thickness: int = 1,
) -> SliceSet:
    """Split ``volume`` into slices along ``axis`` in ascending index order.

    Trailing slices are never thickness-replicated.
    """
    if thickness < 1:
        raise ValueError(f"Thickness must be >= 1, got {thickness}")
    resolved = resolve(volume, axis)
    if resolved is Axis.TRAILING and thickness > 1:
        logger.warning("Thickness is ignored when slicing along the trailing axis")
        thickness = 1

    count = volume.shape[resolved.value]
    logger.info(f"Slicing {volume.shape} along axis {resolved.name.lower()} into {count} slices")
    slices = [extract_slice(volume, resolved, i, thickness) for i in range(count)]
    return SliceSet(slices=slices, axis=resolved, thickness=thickness)
