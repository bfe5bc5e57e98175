"""Exceptions raised by the diagen pipeline."""

from __future__ import annotations

from pathlib import Path


class DiagenError(Exception):
    """Base class for every fatal diagen error."""


class ConfigError(DiagenError):
    pass


class RendererNotFoundError(DiagenError):
    def __init__(self, command: str):
        super().__init__(
            f"Command not found: {command}\n"
            "To install, `brew install graphviz` or `apt-get install graphviz`"
        )
        self.command = command


class InputReadError(DiagenError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path


class OutputWriteError(DiagenError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path


class RenderError(DiagenError):
    """The layout program failed for one or more artifacts."""

    def __init__(self, failures: list[tuple[Path, str]], command: str = "dot"):
        self.failures = failures
        self.command = command
        lines = []
        for path, stderr in failures:
            line = f"{command} failed to generate {path}"
            if stderr.strip():
                line += f": {stderr.strip()}"
            lines.append(line)
        super().__init__("\n".join(lines))

    @property
    def paths(self) -> list[Path]:
        return [path for path, _ in self.failures]
