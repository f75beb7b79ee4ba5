"""Parse-option profile resolution for SDK and CLI."""
from __future__ import annotations

from pathlib import Path
from typing import List

from sheetflow.core.errors import ExtractionError, SheetflowError
from sheetflow.core.models.options import ParseOptions
from sheetflow.core.utils.io import load_structured
from .config import SdkConfig
from .errors import ConfigError

OPTIONS_STEM = "options"
OPTIONS_EXTS = [".yaml", ".yml", ".json"]
KNOWN_KEYS = {"key_separator", "list_joiner", "fragment_strategy", "extract_key_values"}


def _options_dirs() -> List[Path]:
    # Project-local, then user-global.
    return [Path.cwd() / ".sheetflow", Path.home() / ".sheetflow"]


def find_options_file(config: SdkConfig | None = None) -> Path | None:
    if config and config.options_file:
        if not config.options_file.exists():
            raise ConfigError(f"Options file does not exist: {config.options_file}")
        return config.options_file
    for directory in _options_dirs():
        for ext in OPTIONS_EXTS:
            candidate = directory / f"{OPTIONS_STEM}{ext}"
            if candidate.exists():
                return candidate
    return None


def load_options_file(path: Path) -> ParseOptions:
    try:
        raw = load_structured(path)
    except SheetflowError as exc:
        raise ConfigError(str(exc)) from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Options file must contain an object: {path}")
    section = raw.get("parse", raw)
    if not isinstance(section, dict):
        raise ConfigError(f"'parse' section must be an object: {path}")

    unknown = set(section) - KNOWN_KEYS
    if unknown:
        raise ConfigError(f"Unknown option(s) in {path}: {', '.join(sorted(unknown))}")

    try:
        return ParseOptions(**section)
    except ExtractionError as exc:
        raise ConfigError(f"{exc} (in {path})") from exc


def load_options(config: SdkConfig | None = None) -> ParseOptions:
    path = find_options_file(config)
    if path is None:
        return ParseOptions()
    return load_options_file(path)
