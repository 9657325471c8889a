"""CLI entry points for slicenii and combinenii."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from slicenii import __version__
from slicenii._console import console, err_console
from slicenii.core.types import AxisOption, CombineConfig, SliceConfig

slice_app = typer.Typer(
    name="slicenii",
    help="Split a 3D or 4D NIfTI volume into a series of slice volumes.",
    add_completion=False,
)

combine_app = typer.Typer(
    name="combinenii",
    help="Combine a series of NIfTI slices back into a single volume.",
    add_completion=False,
)

logger = logging.getLogger("slicenii")


def version_callback(value: bool):
    if value:
        console.print(f"slicenii {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")


def _run_guarded(func, config, verbose: bool):
    """Run a pipeline, mapping failures to exit codes."""
    logger.debug(f"Config: {config}")
    try:
        return func(config)
    except ValueError as e:
        err_console.print(f"[red]Error! {e}[/red]")
        raise typer.Exit(code=1)
    except FileNotFoundError as e:
        err_console.print(f"[red]Error! {e}[/red]")
        raise typer.Exit(code=4)
    except Exception as e:
        err_console.print(f"[red]Error! {e}[/red]")
        if verbose:
            import traceback
            err_console.print(traceback.format_exc())
        raise typer.Exit(code=1)


@slice_app.command()
def slice_main(
    input_path: Path = typer.Argument(
        ...,
        help="The input NIfTI file.",
        exists=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(
        Path("."),
        "-o",
        "--output",
        help="Existing directory; a <name>_slices directory is created inside it.",
    ),
    axis: AxisOption = typer.Option(
        AxisOption.GUESS,
        "-a",
        "--axis",
        case_sensitive=False,
        help="Axis to slice along. 'guess' picks time for 4D and the largest voxel size for 3D.",
    ),
    thickness: int = typer.Option(
        1,
        "-t",
        "--thickness",
        min=1,
        help="Replicate each slice this many times along the sliced axis.",
    ),
    workers: int = typer.Option(
        4,
        "-w",
        "--workers",
        min=1,
        help="Number of threads used to write slices.",
    ),
    verbose: bool = typer.Option(
        False,
        "-v",
        "--verbose",
        help="Show detailed processing information.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """Split a NIfTI volume into slices along one axis."""
    from slicenii._pipeline_slice import run_slice_from_config

    _setup_logging(verbose)
    config = SliceConfig(
        input_path=input_path,
        output_dir=output,
        axis=axis,
        thickness=thickness,
        workers=workers,
        verbose=verbose,
    )
    _run_guarded(run_slice_from_config, config, verbose)


@combine_app.command()
def combine_main(
    reference: Path = typer.Option(
        ...,
        "-r",
        "--reference",
        help="The original NIfTI file, used for its header.",
    ),
    input_dir: Path = typer.Option(
        Path("."),
        "-i",
        "--input-dir",
        help="Directory containing the slice NIfTI files.",
    ),
    output: Path = typer.Option(
        Path("combined.nii"),
        "-o",
        "--output",
        help="Output NIfTI file name.",
    ),
    axis: AxisOption = typer.Option(
        AxisOption.GUESS,
        "-a",
        "--axis",
        case_sensitive=False,
        help="Axis the volume was sliced along. 'guess' also uses the slice count.",
    ),
    prefix: str = typer.Option(
        "*",
        "-s",
        "--start-string",
        help="Only combine files whose names start with this string ('*' matches all).",
    ),
    workers: int = typer.Option(
        4,
        "-w",
        "--workers",
        min=1,
        help="Number of threads used to read slices.",
    ),
    verbose: bool = typer.Option(
        False,
        "-v",
        "--verbose",
        help="Show detailed processing information.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """Combine NIfTI slices into one volume framed by a reference."""
    from slicenii._pipeline_combine import run_combine_from_config

    _setup_logging(verbose)
    config = CombineConfig(
        reference=reference,
        input_dir=input_dir,
        output=output,
        axis=axis,
        prefix=prefix,
        workers=workers,
        verbose=verbose,
    )
    _run_guarded(run_combine_from_config, config, verbose)
