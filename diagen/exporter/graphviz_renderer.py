"""Run Graphviz ``dot`` to turn DOT text into images."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from diagen.errors import OutputWriteError, RenderError
from diagen.models import ImageFormat

logger = logging.getLogger(__name__)


class GraphvizRenderer:
    """Pipes DOT source into the layout program and writes its output file.

    Anything with the same ``command``, ``is_available`` and ``render``
    can stand in for it, e.g. a fake in tests.
    """

    def __init__(self, command: str = "dot"):
        self.command = command

    def is_available(self) -> bool:
        return shutil.which(self.command) is not None

    def render(self, dot_src: str, fmt: ImageFormat, out_path: Path) -> Path:
        # communicate() drains stdout/stderr while writing stdin.
        try:
            proc = subprocess.run(
                [self.command, f"-T{fmt.value}", "-o", str(out_path)],
                input=dot_src,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise OutputWriteError(out_path, f"failed to run {self.command}: {e}") from e

        if proc.returncode != 0:
            raise RenderError([(out_path, proc.stderr or "")], command=self.command)

        logger.info("Generated %s", out_path)
        return out_path
