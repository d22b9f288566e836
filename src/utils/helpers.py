"""Shared helpers for GTM report tooling."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

DEFAULT_WORKSPACE_ID = "1"

_WORKSPACE_ID_PATTERN = re.compile(r"workspace(\d+)")


def ensure_output_directory(path: str | Path, *, is_dir: bool = False) -> Path:
    """Create the directory that will hold `path` (or `path` itself when `is_dir`)."""
    target = Path(path)
    directory = target if is_dir else target.parent
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def safe_get(data: Any, key: str, default: Any = None) -> Any:
    """Convenience wrapper for dict.get that safely handles non-dict inputs."""
    return data.get(key, default) if isinstance(data, dict) else default


def workspace_id_from_filename(filename: str) -> str:
    """Return the digits following "workspace" in a file name, or the default id."""
    match = _WORKSPACE_ID_PATTERN.search(filename)
    return match.group(1) if match else DEFAULT_WORKSPACE_ID


def bool_label(value: bool) -> str:
    return "TRUE" if value else "FALSE"
