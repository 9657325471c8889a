"""Axis resolution: turn an axis option into a concrete slicing axis."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from slicenii.core.errors import AmbiguousAxis, UnsupportedAxisFor4D, UnsupportedRank
from slicenii.core.header import HeaderModel
from slicenii.core.types import Axis, AxisOption
from slicenii.core.volume import Volume

logger = logging.getLogger(__name__)


def _as_header(volume: Volume | HeaderModel) -> HeaderModel:
    return volume.header if isinstance(volume, Volume) else volume


def _as_axis(requested: Axis | AxisOption | None) -> Axis | None:
    if isinstance(requested, AxisOption):
        return requested.to_axis()
    return requested


def largest_voxel_axis(
    header: HeaderModel,
    candidates: Iterable[Axis] | None = None,
) -> Axis:
    """Return the spatial axis with the strictly largest voxel size.

    Acquisition slice thickness is usually the coarsest dimension, so it is
    the through-plane axis. Ties raise AmbiguousAxis.
    """
    axes = list(candidates) if candidates is not None else list(Axis.spatial())
    sizes = {axis: header.pixdim[axis.value] for axis in axes}
    largest = max(sizes.values())
    winners = [axis for axis, size in sizes.items() if size == largest]
    if len(winners) != 1:
        names = ", ".join(a.name.lower() for a in winners)
        raise AmbiguousAxis(
            f"Voxel sizes {header.zooms} tie for largest on axes {names}; "
            "pass an explicit axis"
        )
    return winners[0]


def resolve(
    volume: Volume | HeaderModel,
    requested: Axis | AxisOption | None = None,
) -> Axis:
    """Resolve the slicing axis for ``volume``.

    An explicit spatial axis is returned unchanged for 3D volumes. In guess
    mode 4D volumes slice along time and 3D volumes along the axis with the
    largest voxel size.
    """
    header = _as_header(volume)
    axis = _as_axis(requested)

    if header.ndim not in (3, 4):
        raise UnsupportedRank(f"Volumes must be 3D or 4D, got {header.ndim} dimensions")

    if axis is Axis.TRAILING:
        if header.ndim != 4:
            raise UnsupportedRank("The trailing axis can only be sliced on a 4D volume")
        return axis

    if axis is not None:
        if header.ndim == 4:
            raise UnsupportedAxisFor4D(
                f"Cannot slice a 4D volume along spatial axis {axis.name.lower()}; "
                "only the trailing (time) axis is supported"
            )
        return axis

    if header.ndim == 4:
        logger.debug("4D volume: guessing trailing axis")
        return Axis.TRAILING

    guessed = largest_voxel_axis(header)
    logger.debug(f"Guessed axis {guessed.name.lower()} from voxel sizes {header.zooms}")
    return guessed


def resolve_for_combine(
    reference: Volume | HeaderModel,
    slice_count: int,
    requested: Axis | AxisOption | None = None,
) -> Axis:
    """Resolve the stacking axis, using the slice count as extra evidence.

    A count matching exactly one reference dimension picks that axis; several
    matches are split by the voxel-size heuristic; no match falls back to the
    heuristic over all axes and leaves the length check to the combiner.
    """
    header = _as_header(reference)
    axis = _as_axis(requested)
    if axis is not None or header.ndim != 3:
        return resolve(header, axis)

    matches = [a for a in Axis.spatial() if header.dim[a.value] == slice_count]
    if len(matches) == 1:
        logger.debug(f"{slice_count} slices match axis {matches[0].name.lower()}")
        return matches[0]
    if matches:
        return largest_voxel_axis(header, matches)
    return largest_voxel_axis(header)
