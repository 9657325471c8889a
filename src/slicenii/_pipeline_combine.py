"""Combining pipeline: discover slices, read them, stack against a reference."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from slicenii._console import console
from slicenii.combiner import combine
from slicenii.core.types import CombineConfig
from slicenii.core.volume import Volume
from slicenii.io.nifti_io import is_nifti, load_volume, save_volume
from slicenii.ordering import WILDCARD, order

logger = logging.getLogger("slicenii")


def discover_slices(
    input_dir: Path,
    prefix: str = WILDCARD,
    exclude: Iterable[Path] = (),
) -> list[Path]:
    """List NIfTI files in ``input_dir`` matching ``prefix``, in slice order.

    Paths in ``exclude`` (the combine output and the reference) are never
    treated as slices, so re-running in the same directory is safe.
    """
    input_dir = Path(input_dir)
    if not input_dir.exists():
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    if not input_dir.is_dir():
        raise ValueError(f"Input is not a directory: {input_dir}")

    skip = {Path(p).resolve() for p in exclude}
    names = [p.name for p in input_dir.iterdir() if is_nifti(p) and p.resolve() not in skip]
    return [input_dir / name for name in order(names, prefix)]


def read_slices(
    paths: list[Path],
    workers: int = 4,
    progress: Progress | None = None,
) -> list[Volume]:
    """Read slice files in parallel, returning them in the order given."""
    task = None
    if progress is not None:
        task = progress.add_task(f"Loading {len(paths)} slices...", total=len(paths))

    volumes: list[Volume] = []
    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        # map() yields in submission order
        for path, vol in zip(paths, executor.map(load_volume, paths)):
            logger.debug(f"Loaded {path.name} as slice {len(volumes)}")
            volumes.append(vol)
            if task is not None:
                progress.update(task, advance=1)

    if task is not None:
        progress.remove_task(task)
    return volumes


def run_combine_from_config(config: CombineConfig) -> Volume:
    """Run the combining pipeline from a CombineConfig."""
    reference_path = Path(config.reference)
    if not reference_path.is_file():
        raise FileNotFoundError(f"Reference NIfTI file not found: {reference_path}")

    paths = discover_slices(
        config.input_dir, config.prefix, exclude=(config.output, reference_path)
    )
    logger.info(f"Found {len(paths)} slice files in {config.input_dir}")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(f"Loading reference {reference_path.name}...", total=None)
        reference = load_volume(reference_path)
        progress.remove_task(task)

        slices = read_slices(paths, workers=config.workers, progress=progress)

        task = progress.add_task("Stacking slices...", total=None)
        combined = combine(slices, reference, config.axis)
        progress.remove_task(task)

        save_volume(combined, config.output)

    console.print(
        f"[green]Combined {len(slices)} slices[/green] into {config.output} "
        f"with shape {combined.shape}"
    )
    return combined
