"""Filesystem helpers for CLI runs."""

import json
from pathlib import Path
from typing import Any


def ensure_exists(path: Path, what: str) -> None:
    """Fail early with a readable message when a required input file is missing."""
    if not path.exists():
        raise FileNotFoundError(f"{what} not found: {path}")


def write_json(path: Path, data: Any) -> Path:
    """Write `data` as pretty-printed UTF-8 JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    return path
