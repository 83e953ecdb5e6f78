"""
palette-machine CLI utilities.

Shared helpers used across CLI modules.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer

from palette_machine._version import get_version
from palette_machine.core.ir import PaletteSpecYAML

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"palette-machine {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def load_spec_or_exit(project_dir: Path) -> PaletteSpecYAML:
    """Load palettespec.yaml (or defaults), exiting with code 1 on errors."""
    from palette_machine.core.palettespec_loader import PaletteSpecError, load_palettespec

    try:
        return load_palettespec(project_dir.resolve())
    except PaletteSpecError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def read_prior(path: Path | None) -> str | None:
    """Read a prior export, or None when no path was given."""
    if path is None:
        return None
    if not path.exists():
        typer.echo(f"Error: prior document not found: {path}", err=True)
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")
