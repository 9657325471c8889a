"""Core data types for the slicenii pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Axis(Enum):
    """A concrete slicing axis; the value is the array dimension index."""

    FIRST = 0
    SECOND = 1
    THIRD = 2
    TRAILING = 3

    @property
    def is_spatial(self) -> bool:
        return self is not Axis.TRAILING

    @classmethod
    def spatial(cls) -> tuple[Axis, Axis, Axis]:
        return (cls.FIRST, cls.SECOND, cls.THIRD)


class AxisOption(str, Enum):
    """Axis selector accepted by both tools."""

    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    TRAILING = "trailing"
    GUESS = "guess"

    def to_axis(self) -> Axis | None:
        """Return the concrete axis, or None for guess mode."""
        if self is AxisOption.GUESS:
            return None
        return Axis[self.name]


@dataclass
class SliceConfig:
    """Configuration for the slicing pipeline (from CLI flags)."""

    input_path: Path
    output_dir: Path = Path(".")
    axis: AxisOption = AxisOption.GUESS
    thickness: int = 1
    workers: int = 4
    verbose: bool = False


@dataclass
class CombineConfig:
    """Configuration for the combining pipeline (from CLI flags)."""

    reference: Path
    input_dir: Path = Path(".")
    output: Path = Path("combined.nii")
    axis: AxisOption = AxisOption.GUESS
    prefix: str = "*"
    workers: int = 4
    verbose: bool = False
