"""Combiner: re-stack ordered slices into a volume framed by a reference."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from slicenii.axis import resolve_for_combine
from slicenii.core.errors import AxisMismatch, ShapeMismatch
from slicenii.core.types import Axis, AxisOption
from slicenii.core.volume import SliceSet, Volume, off_axis_shape

logger = logging.getLogger(__name__)


def representative_plane(volume: Volume, axis: Axis) -> np.ndarray:
    """Return the single plane of a (possibly replicated) spatial slice.

    The returned array keeps a singleton dimension along ``axis``. Replicated
    planes must all be identical.
    """
    a = axis.value
    data = volume.data
    if data.shape[a] == 1:
        return data
    first = np.take(data, [0], axis=a)
    if not np.array_equal(np.broadcast_to(first, data.shape), data, equal_nan=_has_nan(data)):
        raise ShapeMismatch(
            f"Replicated planes along axis {a} differ; slice data is corrupt"
        )
    return first


def _has_nan(data: np.ndarray) -> bool:
    return np.issubdtype(data.dtype, np.floating) and bool(np.isnan(data).any())


def _validate(slices: Sequence[Volume], reference: Volume, axis: Axis) -> None:
    expected_rank = 3
    ref_shape = reference.shape[:3] if axis is Axis.TRAILING else reference.shape
    expected = off_axis_shape(ref_shape, axis)
    for i, vol in enumerate(slices):
        if vol.ndim != expected_rank:
            raise ShapeMismatch(f"Slice {i} is {vol.ndim}D, expected {expected_rank}D")
        got = off_axis_shape(vol.shape, axis)
        if got != expected:
            raise ShapeMismatch(
                f"Slice {i} has shape {vol.shape}; off-axis shape {got} does not match "
                f"reference {expected}"
            )


def combine(
    slices: SliceSet | Sequence[Volume],
    reference: Volume,
    requested: Axis | AxisOption | None = None,
) -> Volume:
    """Stack ``slices`` (already in slice order) along the resolved axis.

    The output header is the reference header unchanged, so the result
    occupies the reference's world-space framing whatever the slice headers
    say.
    """
    members = list(slices)
    axis = resolve_for_combine(reference, len(members), requested)
    logger.info(f"Combining {len(members)} slices along axis {axis.name.lower()}")

    expected_count = reference.shape[axis.value]
    if len(members) != expected_count:
        raise AxisMismatch(
            f"Found {len(members)} slices but reference has {expected_count} "
            f"along axis {axis.name.lower()}"
        )

    _validate(members, reference, axis)
    SliceSet(slices=members, axis=axis).validate()

    if axis is Axis.TRAILING:
        data = np.stack([vol.data for vol in members], axis=-1)
    else:
        planes = [representative_plane(vol, axis) for vol in members]
        data = np.concatenate(planes, axis=axis.value)

    if data.shape != reference.shape:
        raise AxisMismatch(f"Combined shape {data.shape} does not match reference {reference.shape}")
    logger.info(f"Final shape: {data.shape}")
    return Volume(data=data, header=reference.header)
