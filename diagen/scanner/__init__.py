"""Scanner registry and dispatcher."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from diagen.models import ScannedModule
from diagen.scanner.base import BaseScanner
from diagen.scanner.move_scanner import MoveScanner


def discover_files(
    directories: Iterable[Path],
    recursive: bool = False,
    scanner: BaseScanner | None = None,
) -> list[Path]:
    """Collect source files from every directory, keeping directory order."""
    scanner = scanner or MoveScanner()
    files: list[Path] = []
    for directory in directories:
        files.extend(scanner.discover(directory, recursive=recursive))
    return files


def scan_files(paths: Iterable[Path], scanner: BaseScanner | None = None) -> list[ScannedModule]:
    """Scan files in order, dropping those without a module declaration."""
    scanner = scanner or MoveScanner()
    return scanner.scan_files(paths)


__all__ = [
    "BaseScanner",
    "MoveScanner",
    "discover_files",
    "scan_files",
]
