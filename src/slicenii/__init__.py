"""slicenii: split NIfTI volumes into slices and recombine them."""

__version__ = "0.1.0"
