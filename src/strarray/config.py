from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from strarray.constants import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    DEFAULT_LINE_WIDTH,
    JOIN_NEWLINE,
    JOIN_SEPARATORS,
    SORT_INCREASING,
    SORT_ORDERS,
)

_KNOWN_KEYS = {"line_width", "join", "sort_order", "keep_blank_lines"}


@dataclass(slots=True)
class StrArrayConfig:
    line_width: int = DEFAULT_LINE_WIDTH
    join: str = JOIN_NEWLINE
    sort_order: str = SORT_INCREASING
    keep_blank_lines: bool = True


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file must be a mapping: {path}")
    return loaded


def _resolve_config_path(path: Path | None, cwd: Path) -> Path | None:
    if path is not None:
        return path
    from_env = os.getenv(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    candidate = cwd / CONFIG_FILENAME
    return candidate if candidate.exists() else None


def parse_config(data: dict[str, Any]) -> StrArrayConfig:
    unknown = sorted(set(data).difference(_KNOWN_KEYS))
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

    line_width_raw = data.get("line_width", DEFAULT_LINE_WIDTH)
    if not isinstance(line_width_raw, int) or isinstance(line_width_raw, bool) or line_width_raw <= 0:
        raise ValueError("line_width must be a positive integer")

    join = str(data.get("join", JOIN_NEWLINE))
    if join not in JOIN_SEPARATORS:
        raise ValueError(f"join must be one of: {', '.join(sorted(JOIN_SEPARATORS))}")

    sort_order = str(data.get("sort_order", SORT_INCREASING))
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"sort_order must be one of: {', '.join(SORT_ORDERS)}")

    keep_blank_lines = data.get("keep_blank_lines", True)
    if not isinstance(keep_blank_lines, bool):
        raise ValueError("keep_blank_lines must be a boolean")

    return StrArrayConfig(
        line_width=line_width_raw,
        join=join,
        sort_order=sort_order,
        keep_blank_lines=keep_blank_lines,
    )


def load_config(path: Path | None = None, cwd: Path | None = None) -> StrArrayConfig:
    """Load CLI defaults; no config file means built-in defaults."""
    resolved = _resolve_config_path(path, cwd or Path.cwd())
    if resolved is None:
        return StrArrayConfig()
    if not resolved.exists():
        raise ValueError(f"Config file not found: {resolved}")
    return parse_config(_load_yaml(resolved))


__all__ = ["StrArrayConfig", "load_config", "parse_config"]
