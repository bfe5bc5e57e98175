"""Pipeline orchestrator: scan -> build graph -> render global -> render per module."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Iterable

from diagen.analysis.dependency_graph import DependencyGraphBuilder
from diagen.errors import DiagenError, RenderError, RendererNotFoundError
from diagen.exporter import (
    GLOBAL_GRAPH_STEM,
    GraphvizRenderer,
    global_graph_dot,
    prepare_output_dir,
    subgraph_dot,
    write_outputs,
)
from diagen.models import (
    DiagramOptions,
    Direction,
    ModuleGraph,
    RenderResult,
    ScannedModule,
)
from diagen.scanner import BaseScanner, MoveScanner

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def run_scan(
    files: Iterable[Path],
    scanner: BaseScanner | None = None,
) -> tuple[list[ScannedModule], list[Path]]:
    """Stage 1: Scan every file. Returns (modules, files without a module)."""
    scanner = scanner or MoveScanner()
    modules: list[ScannedModule] = []
    skipped: list[Path] = []
    for path in files:
        module = scanner.scan_file(path)
        if module is None:
            skipped.append(path)
        else:
            modules.append(module)
    return modules, skipped


def build_graph(files: Iterable[Path], scanner: BaseScanner | None = None) -> ModuleGraph:
    """Stages 1-2: scan the files and fold them into forward/inverse maps."""
    modules, _ = run_scan(files, scanner)
    return DependencyGraphBuilder().build(modules)


def run_pipeline(
    files: Iterable[Path],
    output_dir: Path,
    options: DiagramOptions | None = None,
    renderer: GraphvizRenderer | None = None,
    progress: ProgressCallback | None = None,
) -> RenderResult:
    """Run the full diagram pipeline."""
    options = options or DiagramOptions()
    renderer = renderer or GraphvizRenderer()

    # Stage 0: the layout program must exist before any work is done
    if options.wants_images and not renderer.is_available():
        logger.error("Command not found: %s", renderer.command)
        raise RendererNotFoundError(renderer.command)

    # Stage 1: Scan
    files = list(files)
    if progress:
        progress("Scanning", 0, len(files))
    modules, skipped = run_scan(files)
    if progress:
        progress("Scanning", len(files), len(files))

    # Stage 2: Build graph
    builder = DependencyGraphBuilder()
    graph = builder.build(modules)

    prepare_output_dir(output_dir)
    result = RenderResult(
        output_dir=output_dir,
        modules_found=len(graph.forward),
        files_skipped=skipped,
    )

    # Stage 3: Global graph
    if options.emit_global_graph:
        result.files_created.extend(
            write_outputs(output_dir / GLOBAL_GRAPH_STEM, global_graph_dot(graph), options, renderer)
        )

    # Stage 4: Per-module forward and backward subgraphs
    jobs = [(module, Direction.FORWARD) for module in sorted(graph.forward)]
    jobs += [(module, Direction.BACKWARD) for module in sorted(graph.inverse)]

    def render_job(module: str, direction: Direction) -> list[Path]:
        subgraph = builder.derive_subgraph(graph.adjacency(direction), module, direction)
        out_stem = output_dir / f"{module}_{direction.value}"
        return write_outputs(out_stem, subgraph_dot(subgraph), options, renderer)

    if options.max_workers == 1:
        for i, (module, direction) in enumerate(jobs):
            if progress:
                progress("Rendering", i, len(jobs))
            result.files_created.extend(render_job(module, direction))
    else:
        result.files_created.extend(
            _render_concurrently(jobs, render_job, options.max_workers, progress)
        )

    if progress:
        progress("Rendering", len(jobs), len(jobs))

    return result


def _render_concurrently(
    jobs: list[tuple[str, Direction]],
    render_job: Callable[[str, Direction], list[Path]],
    max_workers: int,
    progress: ProgressCallback | None,
) -> list[Path]:
    """Render on a thread pool, wait for every job, then report all failures."""
    outputs: dict[int, list[Path]] = {}
    render_failures: list[tuple[Path, str]] = []
    other_errors: list[DiagenError] = []
    command = "dot"

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {pool.submit(render_job, *job): i for i, job in enumerate(jobs)}
        for done, future in enumerate(as_completed(futures)):
            if progress:
                progress("Rendering", done, len(jobs))
            try:
                outputs[futures[future]] = future.result()
            except RenderError as e:
                render_failures.extend(e.failures)
                command = e.command
            except DiagenError as e:
                other_errors.append(e)

    if other_errors:
        raise other_errors[0]
    if render_failures:
        raise RenderError(sorted(render_failures), command=command)

    return [path for i in sorted(outputs) for path in outputs[i]]
