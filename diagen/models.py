"""Data models for the diagen pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Direction(enum.Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class ImageFormat(enum.Enum):
    PDF = "pdf"
    SVG = "svg"


@dataclass
class ScannedModule:
    """Result from the scanner stage."""
    name: str
    dependencies: list[str] = field(default_factory=list)  # in source order, duplicates kept
    file_path: Path | None = None
    line_number: int = 1


@dataclass
class ModuleGraph:
    forward: dict[str, list[str]] = field(default_factory=dict)  # module -> [dependencies]
    inverse: dict[str, list[str]] = field(default_factory=dict)  # module -> [dependents]
    sources: dict[str, Path] = field(default_factory=dict)  # declared module -> file

    def adjacency(self, direction: Direction) -> dict[str, list[str]]:
        if direction is Direction.FORWARD:
            return self.forward
        return self.inverse

    def modules(self) -> list[str]:
        """Every module name mentioned anywhere, sorted."""
        return sorted(self.inverse)


@dataclass
class Subgraph:
    """Nodes and edges reached by one breadth-first traversal."""
    root: str
    direction: Direction
    nodes: list[str] = field(default_factory=list)
    edges: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class RenderResult:
    """Result from the exporter stage."""
    output_dir: Path
    files_created: list[Path] = field(default_factory=list)
    modules_found: int = 0
    files_skipped: list[Path] = field(default_factory=list)


class DiagramOptions(BaseModel):
    """Which artifacts a run produces. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    emit_text_format: bool = False
    emit_raster_image: bool = False
    emit_vector_image: bool = False
    emit_global_graph: bool = False
    max_workers: int = Field(default=1, ge=1)

    @property
    def image_formats(self) -> list[ImageFormat]:
        formats: list[ImageFormat] = []
        if self.emit_raster_image:
            formats.append(ImageFormat.PDF)
        if self.emit_vector_image:
            formats.append(ImageFormat.SVG)
        return formats

    @property
    def wants_images(self) -> bool:
        return bool(self.image_formats)
