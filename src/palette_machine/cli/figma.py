"""
Figma variables CLI commands.

Commands:
- figma palette: Write palette.json
- figma light / figma dark: Write a semantic theme document
- figma all: Write palette.json, light.json and dark.json
- figma analyze: Summarize a previously exported document
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from palette_machine.cli.utils import load_spec_or_exit, read_prior

figma_app = typer.Typer(
    help="Export Figma variables documents.",
    no_args_is_help=True,
)


def _write(text: str, output: Path) -> None:
    from palette_machine.core.token_tree import count_tokens

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote {output} ({count_tokens(json.loads(text))} variables)")


@figma_app.command("palette")
def figma_palette(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file path"),
    prior: Path | None = typer.Option(None, "--prior", help="Previous palette.json for variable ids"),
) -> None:
    """Generate the flat palette document."""
    from palette_machine.core.figma_export import PALETTE_FILE, generate_figma_palette

    spec = load_spec_or_exit(project_dir)
    text = generate_figma_palette(spec, prior_text=read_prior(prior))
    _write(text, output or (project_dir / PALETTE_FILE))


def _semantic(mode: str, project_dir: Path, output: Path | None, prior: Path | None) -> None:
    from palette_machine.core.figma_export import EXPORT_FILES, generate_figma_semantic

    spec = load_spec_or_exit(project_dir)
    text = generate_figma_semantic(mode, spec, prior_text=read_prior(prior))
    _write(text, output or (project_dir / EXPORT_FILES[mode]))


@figma_app.command("light")
def figma_light(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file path"),
    prior: Path | None = typer.Option(None, "--prior", help="Previous light.json for variable ids"),
) -> None:
    """Generate the light theme document."""
    _semantic("light", project_dir, output, prior)


@figma_app.command("dark")
def figma_dark(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file path"),
    prior: Path | None = typer.Option(None, "--prior", help="Previous dark.json for variable ids"),
) -> None:
    """Generate the dark theme document."""
    _semantic("dark", project_dir, output, prior)


@figma_app.command("all")
def figma_all(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help="Output directory"),
    prior_palette: Path | None = typer.Option(None, "--prior-palette", help="Previous palette.json"),
    prior_light: Path | None = typer.Option(None, "--prior-light", help="Previous light.json"),
    prior_dark: Path | None = typer.Option(None, "--prior-dark", help="Previous dark.json"),
) -> None:
    """Generate palette.json, light.json and dark.json."""
    from palette_machine.core.figma_export import export_figma_files
    from palette_machine.core.token_tree import count_tokens

    spec = load_spec_or_exit(project_dir)
    priors = {
        key: text
        for key, text in (
            ("palette", read_prior(prior_palette)),
            ("light", read_prior(prior_light)),
            ("dark", read_prior(prior_dark)),
        )
        if text is not None
    }

    written = export_figma_files(spec, output_dir or project_dir, priors)
    for path in written.values():
        count = count_tokens(json.loads(path.read_text(encoding="utf-8")))
        typer.echo(f"Wrote {path} ({count} variables)")


def _looks_like_palette(text: str) -> bool:
    from palette_machine.core.figma_palette import PALETTE_MODE_NAME
    from palette_machine.core.token_tree import MODE_NAME_KEY

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return False
    if not isinstance(data, dict):
        return False
    extensions = data.get("$extensions")
    if isinstance(extensions, dict) and extensions.get(MODE_NAME_KEY) == PALETTE_MODE_NAME:
        return True
    return any(key.startswith("--") for key in data)


@figma_app.command("analyze")
def figma_analyze(
    file: Path = typer.Argument(..., help="Previously exported document"),
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    kind: str = typer.Option("auto", "--kind", "-k", help="Document kind: auto, palette or theme"),
) -> None:
    """Summarize a prior export and the migration maps it would produce."""
    from palette_machine.core.content_analyzer import analyze_palette_file, analyze_semantic_file
    from palette_machine.core.figma_export import migration_report

    if kind not in ("auto", "palette", "theme"):
        typer.echo(f"Unknown kind: {kind}", err=True)
        raise typer.Exit(1)

    spec = load_spec_or_exit(project_dir)
    text = read_prior(file)
    is_palette = kind == "palette" or (kind == "auto" and _looks_like_palette(text))

    if is_palette:
        analysis = analyze_palette_file(text)
        if not analysis.ok:
            typer.echo(f"Error: {analysis.error}", err=True)
            raise typer.Exit(1)
        report = migration_report(spec, palette_prior_text=text)
        typer.echo(f"Palette document: {analysis.color_count} colors")
        typer.echo(f"  Hues ({len(analysis.hues)}): {', '.join(analysis.hues)}")
        typer.echo(f"  Shades ({len(analysis.shades)}): {', '.join(analysis.shades)}")
        renamed = {k: v for k, v in (report.hue_mapping or {}).items() if k != v}
        for file_hue, machine_hue in renamed.items():
            typer.echo(f"  Hue {file_hue} -> {machine_hue}")
        shade_map = report.shade_map or {}
        duplicates = report.duplicate_sources
    else:
        analysis = analyze_semantic_file(
            text,
            spec.figma.exclusion_pattern,
            shade_group=spec.figma.naming.shade_group_name,
            intent_names=spec.figma.intents,
        )
        if not analysis.ok:
            typer.echo(f"Error: {analysis.error}", err=True)
            raise typer.Exit(1)
        report = migration_report(spec, theme_prior_text=text)
        typer.echo("Theme document:")
        typer.echo(f"  Intents: {', '.join(g.name for g in analysis.intents) or '-'}")
        typer.echo(f"  Hues: {', '.join(g.name for g in analysis.hues) or '-'}")
        typer.echo(f"  Grounds: {', '.join(analysis.grounds) or '-'}")
        if analysis.excluded:
            typer.echo(f"  Excluded: {', '.join(analysis.excluded)}")
        shade_map = report.theme_shade_map or {}
        duplicates = report.duplicate_theme_sources

    new_shades = [shade for shade, source in shade_map.items() if source == "new"]
    if new_shades:
        typer.echo(f"  New shades (no prior variable): {', '.join(new_shades)}")

    if duplicates:
        typer.echo(f"Duplicate migration sources ({len(duplicates)}):")
        for source, targets in duplicates.items():
            typer.echo(f"  ⚠ {source} <- {', '.join(targets)}")
