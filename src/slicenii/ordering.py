"""Slice ordering: numeric-aware sort of slice file names."""

from __future__ import annotations

import re
from collections.abc import Iterable

from slicenii.core.errors import NoMatchingFiles

WILDCARD = "*"


def natural_key(name: str) -> tuple:
    """Sort key comparing embedded digit runs numerically.

    The raw name is appended so names differing only in zero padding
    (``s_01`` vs ``s_1``) still have a total order.
    """
    parts = re.split(r"(\d+)", name)
    key = tuple((0, int(part), "") if part.isdigit() else (1, 0, part) for part in parts)
    return key + ((1, 0, name),)


def order(names: Iterable[str], prefix: str = WILDCARD) -> list[str]:
    """Keep names starting with ``prefix`` and return them in slice order."""
    if prefix == WILDCARD:
        kept = list(names)
    else:
        kept = [n for n in names if n.startswith(prefix)]
    if not kept:
        raise NoMatchingFiles(f"No slice files match prefix '{prefix}'")
    return sorted(kept, key=natural_key)
