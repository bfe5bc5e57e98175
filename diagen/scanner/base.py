"""Abstract base scanner."""

from __future__ import annotations

import abc
import fnmatch
import logging
from pathlib import Path
from typing import Iterable

from diagen.errors import InputReadError
from diagen.models import ScannedModule

logger = logging.getLogger(__name__)


class BaseScanner(abc.ABC):
    """Base class for module-language scanners."""

    extensions: tuple[str, ...]

    def __init__(self, skip_dirs: list[str] | None = None):
        self.skip_dirs = skip_dirs or [
            ".git", "build", "target", "node_modules",
        ]

    @abc.abstractmethod
    def scan_text(self, text: str, file_path: Path | None = None) -> ScannedModule | None:
        """Return the module declared in ``text``, or None if there is none."""

    def scan_file(self, file_path: Path) -> ScannedModule | None:
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(file_path, str(e)) from e
        logger.info("Processed %s", file_path)
        module = self.scan_text(text, file_path)
        if module is None:
            logger.info("Skipped %s: no module declaration found", file_path)
        return module

    def scan_files(self, paths: Iterable[Path]) -> list[ScannedModule]:
        modules: list[ScannedModule] = []
        for path in paths:
            module = self.scan_file(path)
            if module is not None:
                modules.append(module)
        return modules

    def discover(self, directory: Path, recursive: bool = False) -> list[Path]:
        """List the source files in a directory, sorted."""
        if not directory.is_dir():
            raise InputReadError(directory, "not a directory")
        candidates = directory.rglob("*") if recursive else directory.iterdir()
        files: list[Path] = []
        for path in candidates:
            if not path.is_file() or path.suffix not in self.extensions:
                continue
            if self._should_skip(path.relative_to(directory)):
                continue
            files.append(path)
        return sorted(files)

    def _should_skip(self, path: Path) -> bool:
        for part in path.parts[:-1]:
            for pattern in self.skip_dirs:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False
