"""Write diagram artifacts into the output directory."""

from __future__ import annotations

import logging
from pathlib import Path

from diagen.errors import OutputWriteError
from diagen.exporter.graphviz_renderer import GraphvizRenderer
from diagen.models import DiagramOptions

logger = logging.getLogger(__name__)

GLOBAL_GRAPH_STEM = "(EntireGraph)"


def prepare_output_dir(output_dir: Path) -> Path:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputWriteError(output_dir, str(e)) from e
    return output_dir


def write_outputs(
    out_stem: Path,
    dot_src: str,
    options: DiagramOptions,
    renderer: GraphvizRenderer,
) -> list[Path]:
    """Emit every artifact the options ask for; returns the paths written.

    ``out_stem`` has no extension, e.g. ``out/Signer_forward``.
    """
    written: list[Path] = []

    if options.emit_text_format:
        dot_path = _with_ext(out_stem, "dot")
        try:
            dot_path.write_text(dot_src, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(dot_path, str(e)) from e
        logger.info("Generated %s", dot_path)
        written.append(dot_path)

    for fmt in options.image_formats:
        written.append(renderer.render(dot_src, fmt, _with_ext(out_stem, fmt.value)))

    return written


def _with_ext(stem: Path, ext: str) -> Path:
    # Appends, never replaces an existing suffix.
    return stem.parent / f"{stem.name}.{ext}"
