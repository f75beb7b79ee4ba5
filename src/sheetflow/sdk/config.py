"""SDK configuration loader."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sheetflow.core import config as core_config
from .errors import ConfigError

try:  # Python 3.10 compatibility
    import tomllib  # type: ignore
except Exception:  # pragma: no cover
    import tomli as tomllib  # type: ignore

OUTPUT_FORMATS = {"print", "json", "excel"}


@dataclass
class SdkConfig:
    default_output_format: str = "print"
    default_output_dir: Optional[Path] = None
    options_file: Optional[Path] = None
    sheet_name: str = core_config.DEFAULT_SHEET_NAME


DEFAULT_CONFIG_PATH = Path.home() / ".sheetflow" / "config.toml"


def _load_toml(path: Path) -> dict:
    if not path.exists():
        return {}
    data = path.read_bytes()
    try:
        return tomllib.loads(data.decode("utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc


def _check_format(value: str) -> str:
    if value not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output format: {value}")
    return value


def load_config(path: Path | None = None) -> SdkConfig:
    cfg = SdkConfig()
    cfg_path = path or DEFAULT_CONFIG_PATH
    file_data = _load_toml(cfg_path)
    section = file_data.get("sheetflow", file_data) if isinstance(file_data, dict) else {}

    env_format = os.environ.get("SHEETFLOW_OUTPUT_FORMAT")
    env_out_dir = os.environ.get("SHEETFLOW_OUTPUT_DIR")
    env_options = os.environ.get("SHEETFLOW_OPTIONS_FILE")

    cfg.default_output_format = _check_format(
        env_format or section.get("default_output_format") or cfg.default_output_format
    )

    out_dir_val = env_out_dir or section.get("default_output_dir")
    if out_dir_val:
        cfg.default_output_dir = Path(out_dir_val).expanduser()

    options_val = env_options or section.get("options_file")
    if options_val:
        cfg.options_file = Path(options_val).expanduser()

    cfg.sheet_name = section.get("sheet_name", cfg.sheet_name)
    return cfg


def merge_cli_overrides(
    config: SdkConfig,
    output_format: str | None = None,
    options_file: Path | None = None,
    sheet_name: str | None = None,
) -> SdkConfig:
    updated = SdkConfig(
        default_output_format=config.default_output_format,
        default_output_dir=config.default_output_dir,
        options_file=config.options_file,
        sheet_name=config.sheet_name,
    )
    if output_format:
        updated.default_output_format = _check_format(output_format)
    if options_file:
        updated.options_file = options_file.expanduser()
    if sheet_name:
        updated.sheet_name = sheet_name
    return updated
