"""Move scanner using two regular expressions.

This is not a parser. The module name comes from the first line shaped like
``module Name {`` and dependencies from every ``use 0x1::Name;`` (or
``use 0x1::Name::...``) statement. Modules referenced only by full
qualification, e.g. ``0x1::Signer::address_of(s)`` with no ``use``, are not
reported.
"""

from __future__ import annotations

import re
from pathlib import Path

from diagen.models import ScannedModule
from diagen.scanner.base import BaseScanner

_MODULE_RE = re.compile(r"^module\s+(\w+)\s*\{", re.MULTILINE)
_USE_RE = re.compile(r"use 0x1::(\w+)\s*(;|:)", re.MULTILINE)


class MoveScanner(BaseScanner):
    extensions = (".move",)

    def scan_text(self, text: str, file_path: Path | None = None) -> ScannedModule | None:
        decl = _MODULE_RE.search(text)
        if decl is None:
            return None

        return ScannedModule(
            name=decl.group(1),
            dependencies=[m.group(1) for m in _USE_RE.finditer(text)],
            file_path=file_path,
            line_number=text.count("\n", 0, decl.start()) + 1,
        )
