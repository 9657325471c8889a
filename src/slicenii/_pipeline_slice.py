"""Slicing pipeline: load a volume, slice it, write each slice to disk."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from slicenii._console import console
from slicenii.core.types import Axis, SliceConfig
from slicenii.core.volume import SliceSet
from slicenii.io.nifti_io import load_volume, save_volume, strip_nifti_suffix
from slicenii.slicer import slice_volume

logger = logging.getLogger("slicenii")


def slice_dir_for(output_dir: Path, stem: str) -> Path:
    """Directory that holds the slices of ``stem``."""
    return output_dir / f"{stem}_slices"


def slice_filename(stem: str, axis: Axis, index: int, total: int, padded: bool) -> str:
    """File name for slice ``index`` (0-based) out of ``total``.

    The embedded number is 1-based and zero-padded to at least three digits
    so that plain and numeric sorting agree.
    """
    width = max(3, len(str(total)))
    tag = "padded-" if padded else ""
    return f"{stem}_axis-{axis.value}_slice-{tag}{index + 1:0{width}d}.nii"


def write_slices(
    slices: SliceSet,
    save_dir: Path,
    stem: str,
    workers: int = 4,
    progress: Progress | None = None,
) -> list[Path]:
    """Write every slice under its own file name, in parallel.

    Returns the written paths in slice order. The first write error is
    re-raised; files already written are left in place.
    """
    total = len(slices)
    padded = slices.thickness > 1
    paths = [
        save_dir / slice_filename(stem, slices.axis, i, total, padded) for i in range(total)
    ]

    task = None
    if progress is not None:
        task = progress.add_task(f"Writing {total} slices...", total=total)

    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        futures = {
            executor.submit(save_volume, vol, path): path
            for vol, path in zip(slices, paths)
        }
        for future in as_completed(futures):
            future.result()
            if task is not None:
                progress.update(task, advance=1)

    if task is not None:
        progress.remove_task(task)
    return paths


def run_slice_from_config(config: SliceConfig) -> list[Path]:
    """Run the slicing pipeline from a SliceConfig."""
    input_path = Path(config.input_path)
    output_dir = Path(config.output_dir)
    if not output_dir.is_dir():
        raise FileNotFoundError(f"Output directory not found: {output_dir}")

    stem = strip_nifti_suffix(input_path.name)
    if not stem:
        raise ValueError(f"Could not parse input file name: {input_path}")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(f"Loading {input_path.name}...", total=None)
        volume = load_volume(input_path)
        progress.remove_task(task)

        slices = slice_volume(volume, config.axis, config.thickness)
        save_dir = slice_dir_for(output_dir, stem)
        save_dir.mkdir(parents=True, exist_ok=True)
        paths = write_slices(slices, save_dir, stem, workers=config.workers, progress=progress)

    console.print(
        f"[green]Wrote {len(paths)} slices[/green] along axis "
        f"[bold]{slices.axis.name.lower()}[/bold] to {save_dir}"
    )
    return paths
