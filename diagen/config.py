"""Load DiagramOptions from a JSON file plus command-line overrides."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from diagen.errors import ConfigError
from diagen.models import DiagramOptions


def load_options(config_path: Path | None = None, **overrides) -> DiagramOptions:
    """Build options from ``config_path`` (if any), then apply non-None overrides."""
    data: dict = {}
    if config_path is not None:
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Cannot read config {config_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config {config_path} must contain a JSON object")

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return DiagramOptions.model_validate(data)
    except ValidationError as e:
        source = config_path or "options"
        raise ConfigError(f"Invalid configuration in {source}:\n{e}") from e
