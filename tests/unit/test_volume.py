"""Unit tests for Volume and SliceSet invariants."""

from __future__ import annotations

import numpy as np
import pytest

from slicenii.core.errors import ShapeMismatch, UnsupportedRank
from slicenii.core.header import HeaderModel
from slicenii.core.types import Axis
from slicenii.core.volume import SliceSet, Volume, off_axis_shape


def test_volume_shape_must_match_header(synthetic_volume):
    with pytest.raises(ShapeMismatch):
        Volume(data=np.zeros((6, 5, 3)), header=synthetic_volume.header)


def test_volume_rank_checked():
    header = HeaderModel(dim=(2, 2, 2), pixdim=(1.0, 1.0, 1.0), affine=np.eye(4))
    with pytest.raises(UnsupportedRank):
        Volume(data=np.zeros((2, 2)), header=header)


def test_off_axis_shape():
    assert off_axis_shape((6, 5, 4), Axis.SECOND) == (6, 4)
    assert off_axis_shape((6, 5, 4), Axis.TRAILING) == (6, 5, 4)


def test_slice_set_validate_detects_shape(synthetic_volume, volume_factory):
    good = Volume(data=synthetic_volume.data[:, :, :1], header=synthetic_volume.header.shifted(Axis.THIRD, 0))
    bad = volume_factory((6, 4, 1), (2.0, 2.0, 4.0))
    slices = SliceSet(slices=[good, bad], axis=Axis.THIRD)
    assert len(slices) == 2
    with pytest.raises(ShapeMismatch):
        slices.validate()


def test_empty_slice_set_is_valid():
    SliceSet(slices=[], axis=Axis.FIRST).validate()
