"""Rich consoles shared by the slicenii and combinenii commands."""

from __future__ import annotations

import sys

from rich.console import Console

# Slice file names may carry non-ASCII subject labels and the progress
# spinners are Unicode; a Windows charmap stream cannot print either.
try:
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")
except (AttributeError, OSError):
    pass

console = Console()
# error messages embed file paths and shapes; keep them uncoloured
err_console = Console(stderr=True, highlight=False)
