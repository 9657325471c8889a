"""Error kinds raised by the slicing and combining operations."""

from __future__ import annotations


class SliceniiError(ValueError):
    """Base class for all slicenii domain errors."""

    kind: str = "SliceniiError"

    def __str__(self) -> str:
        return f"{self.kind}: {super().__str__()}"


class UnsupportedRank(SliceniiError):
    """Volume rank is outside {3, 4}."""

    kind = "UnsupportedRank"


class UnsupportedAxisFor4D(SliceniiError):
    """A spatial axis was requested on a 4D volume."""

    kind = "UnsupportedAxisFor4D"


class AmbiguousAxis(SliceniiError):
    """The axis heuristic could not pick a unique axis."""

    kind = "AmbiguousAxis"


class NoMatchingFiles(SliceniiError):
    """The prefix filter left no slice files."""

    kind = "NoMatchingFiles"


class ShapeMismatch(SliceniiError):
    """Slices disagree with each other or with the reference."""

    kind = "ShapeMismatch"


class AxisMismatch(SliceniiError):
    """Reconstructed axis length disagrees with the reference."""

    kind = "AxisMismatch"
