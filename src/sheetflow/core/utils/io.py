"""IO helpers for option profiles and JSON record output."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from ..errors import ExportError, SheetflowError

YAML_SUFFIXES = {".yaml", ".yml"}


def load_structured(path: str | Path) -> Any:
    """Parse a YAML or JSON file, chosen by suffix.

    Unreadable or malformed files raise :class:`SheetflowError` naming the path.
    """
    p = Path(path)
    try:
        data = p.read_text(encoding="utf-8")
        if p.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(data) or {}
        return json.loads(data)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise SheetflowError(f"Failed to read {p}: {exc}") from exc


def save_json(path: str | Path, payload: Any) -> Path:
    """Write merged records (or a mapping of them) as indented UTF-8 JSON."""
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ExportError(f"Failed to write {target}: {exc}") from exc
    return target
