"""
Palette CLI commands.

Commands:
- palette show: Print the color grid as a table
- palette clipped: List cells outside the sRGB or P3 gamut
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from palette_machine.cli.utils import load_spec_or_exit

palette_app = typer.Typer(
    help="Inspect the generated color grid.",
    no_args_is_help=True,
)

console = Console()

CLIP_MARKER = "*"


class CellFormat(StrEnum):
    HEX = "hex"
    P3 = "p3"
    OKLCH = "oklch"


@palette_app.command("show")
def palette_show(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    format: CellFormat = typer.Option(CellFormat.HEX, "--format", "-f", help="Cell value: hex, p3 or oklch"),
    hue: list[str] | None = typer.Option(None, "--hue", help="Only show these hues (repeatable)"),
    grayscale: bool = typer.Option(False, "--grayscale", help="Preview swatches in grayscale"),
) -> None:
    """Print the palette grid; '*' marks colors clipped to the gamut."""
    from palette_machine.core.color_math import hex_to_grayscale
    from palette_machine.core.contrast import best_on_color
    from palette_machine.core.palette import build_palette

    spec = load_spec_or_exit(project_dir)
    hues = [h for h in spec.hues if not hue or h.name in hue]
    if not hues:
        typer.echo(f"No matching hues: {', '.join(hue or [])}", err=True)
        raise typer.Exit(1)

    palette = build_palette(hues, spec.stops)

    table = Table(title=f"Palette ({format.value})")
    table.add_column("Hue", style="bold")
    for stop in palette.stop_names:
        table.add_column(stop, justify="center")

    use_p3 = format == CellFormat.P3
    for row in palette:
        cells: list[Text | str] = [row.name]
        for cell in row.colors:
            swatch = cell.hex_for(use_p3)
            if grayscale:
                swatch = hex_to_grayscale(swatch)
            label = cell.oklch if format == CellFormat.OKLCH else swatch
            if cell.clipped_p3 if use_p3 else cell.clipped:
                label += CLIP_MARKER
            cells.append(Text(label, style=f"{best_on_color(swatch).lower()} on {swatch.lower()}"))
        table.add_row(*cells)

    console.print(table)
    console.print(f"\n[dim]{len(palette)} hue(s) x {len(palette.stop_names)} stop(s)[/dim]")


@palette_app.command("clipped")
def palette_clipped(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    p3: bool = typer.Option(False, "--p3", help="Check the Display P3 gamut instead of sRGB"),
) -> None:
    """List (hue, stop) cells that fall outside the gamut."""
    from palette_machine.core.palette import build_palette, clipped_cells

    spec = load_spec_or_exit(project_dir)
    clipped = clipped_cells(build_palette(spec.hues, spec.stops), p3=p3)
    gamut = "P3" if p3 else "sRGB"

    if not clipped:
        typer.echo(f"All colors are inside the {gamut} gamut.")
        return

    typer.echo(f"{len(clipped)} color(s) clipped to {gamut}:")
    for hue_name, stop in clipped:
        typer.echo(f"  --{hue_name}-{stop}")
