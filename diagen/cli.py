"""Click CLI with generate and scan subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from diagen.config import load_options
from diagen.errors import DiagenError
from diagen.pipeline import build_graph, run_pipeline
from diagen.scanner import discover_files

_INPUT_DIRS = click.argument(
    "input_dirs",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
_RECURSIVE = click.option("--recursive", "-r", is_flag=True, help="Descend into subdirectories")


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output")
def cli(verbose: bool):
    """diagen: Draw module dependency diagrams from Move sources."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@_INPUT_DIRS
@click.option("-o", "--output", "output_dir", type=click.Path(path_type=Path), default="diagrams", help="Output directory")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="JSON options file")
@click.option("--dot/--no-dot", "emit_text_format", default=None, help="Write .dot files")
@click.option("--pdf/--no-pdf", "emit_raster_image", default=None, help="Render .pdf files with Graphviz")
@click.option("--svg/--no-svg", "emit_vector_image", default=None, help="Render .svg files with Graphviz")
@click.option("--global/--no-global", "emit_global_graph", default=None, help="Also draw the entire graph")
@click.option("--jobs", "-j", "max_workers", type=click.IntRange(min=1), default=None, help="Parallel render workers")
@_RECURSIVE
def generate(
    input_dirs: tuple[Path, ...],
    output_dir: Path,
    config_path: Path | None,
    emit_text_format: bool | None,
    emit_raster_image: bool | None,
    emit_vector_image: bool | None,
    emit_global_graph: bool | None,
    max_workers: int | None,
    recursive: bool,
):
    """Generate forward and backward dependency diagrams per module."""
    try:
        options = load_options(
            config_path,
            emit_text_format=emit_text_format,
            emit_raster_image=emit_raster_image,
            emit_vector_image=emit_vector_image,
            emit_global_graph=emit_global_graph,
            max_workers=max_workers,
        )
        files = discover_files(input_dirs, recursive=recursive)
        if not files:
            raise click.ClickException("No .move files found.")

        click.echo(f"Generating diagrams for {len(files)} file(s) -> {output_dir}\n")
        result = run_pipeline(files, output_dir, options)
    except DiagenError as e:
        raise click.ClickException(str(e))

    if not result.files_created:
        click.echo("No outputs requested; pass --dot, --pdf or --svg.")
        return

    click.echo(
        f"\nDone! {result.modules_found} module(s), "
        f"created {len(result.files_created)} file(s) in {result.output_dir}"
    )
    if result.files_skipped:
        click.echo(f"Skipped {len(result.files_skipped)} file(s) without a module declaration")


@cli.command()
@_INPUT_DIRS
@_RECURSIVE
def scan(input_dirs: tuple[Path, ...], recursive: bool):
    """List modules with their dependencies and dependents."""
    try:
        graph = build_graph(discover_files(input_dirs, recursive=recursive))
    except DiagenError as e:
        raise click.ClickException(str(e))

    if not graph.inverse:
        click.echo("No modules found.")
        return

    for module in graph.modules():
        declared = module in graph.forward
        click.echo(click.style(module, fg="cyan" if declared else "yellow"))
        if declared:
            click.echo(f"  uses:    {', '.join(graph.forward[module]) or '-'}")
        else:
            click.echo(click.style("  (not declared in the input)", dim=True))
        click.echo(f"  used by: {', '.join(graph.inverse[module]) or '-'}")

    click.echo(f"\nSummary: {len(graph.forward)} declared, {len(graph.inverse)} total")


if __name__ == "__main__":
    cli()
