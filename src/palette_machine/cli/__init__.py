"""
palette-machine CLI package.

- palette.py: palette grid inspection
- figma.py: Figma variables export and prior-document analysis
- utils.py: shared helpers

Top-level commands (init, validate, contrast) live here.
"""

from __future__ import annotations

from pathlib import Path

import typer

from palette_machine._version import get_version
from palette_machine.cli.figma import figma_app
from palette_machine.cli.palette import palette_app
from palette_machine.cli.utils import configure_logging, load_spec_or_exit, version_callback

__version__ = get_version()

app = typer.Typer(
    help="""palette-machine - OKLCH palettes and Figma variables

Command Types:
  • Project: init, validate
    → Operate on palettespec.yaml in the project directory

  • Inspection: palette show, palette clipped, contrast

  • Export: figma palette | light | dark | all, figma analyze
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """palette-machine main callback for global options."""
    configure_logging(verbose)


app.add_typer(palette_app, name="palette")
app.add_typer(figma_app, name="figma")


@app.command()
def init(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Overwrite existing palettespec.yaml"),
) -> None:
    """Create a palettespec.yaml with the default stops and hues."""
    from palette_machine.core.palettespec_loader import scaffold_palettespec

    project_dir = project_dir.resolve()
    project_dir.mkdir(parents=True, exist_ok=True)

    result = scaffold_palettespec(project_dir, overwrite=overwrite)
    if result:
        typer.echo(f"Created {result}")
        typer.echo("Edit palettespec.yaml then run: palette-machine figma all")
    else:
        typer.echo("palettespec.yaml already exists. Use --overwrite to replace.")


@app.command()
def validate(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
) -> None:
    """Validate palettespec.yaml."""
    from palette_machine.core.palettespec_loader import validate_palettespec

    spec = load_spec_or_exit(project_dir)
    result = validate_palettespec(spec)

    if result.errors:
        typer.echo(f"Errors ({len(result.errors)}):")
        for err in result.errors:
            typer.echo(f"  ✗ {err}")

    if result.warnings:
        typer.echo(f"Warnings ({len(result.warnings)}):")
        for warn in result.warnings:
            typer.echo(f"  ⚠ {warn}")

    if result.is_valid:
        typer.echo("PaletteSpec is valid.")
    else:
        typer.echo("PaletteSpec has errors.")
        raise typer.Exit(1)


@app.command()
def contrast(
    foreground: str = typer.Argument(..., help="Text color (hex or oklch())"),
    background: str = typer.Argument(..., help="Background color (hex or oklch())"),
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    algorithm: str | None = typer.Option(None, "--algorithm", "-a", help="APCA or WCAG"),
    threshold: float | None = typer.Option(None, "--threshold", "-t", help="Minimum passing contrast"),
) -> None:
    """Score the contrast of FOREGROUND text on BACKGROUND."""
    from palette_machine.core.color_math import css_color_to_hex
    from palette_machine.core.contrast import (
        ContrastAlgorithm,
        format_contrast,
        get_contrast,
        passes_threshold,
    )

    settings = load_spec_or_exit(project_dir).contrast
    try:
        algo = ContrastAlgorithm((algorithm or settings.algorithm).upper())
    except ValueError:
        typer.echo(f"Unknown algorithm: {algorithm}", err=True)
        raise typer.Exit(1)
    limit = settings.threshold if threshold is None else threshold

    fg_hex = css_color_to_hex(foreground)
    bg_hex = css_color_to_hex(background)
    value = get_contrast(fg_hex, bg_hex, algo, settings.direction)

    verdict = "passes" if passes_threshold(value, limit) else "fails"
    typer.echo(f"{algo.value} {format_contrast(value, algo)} ({verdict} {limit:g})")
    if not passes_threshold(value, limit):
        raise typer.Exit(1)


# =============================================================================
# Main Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = [
    "__version__",
    "app",
    "main",
    "palette_app",
    "figma_app",
    "version_callback",
]
