"""SheetFlow CLI entrypoint."""
from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import List, Optional

import typer

from sheetflow.core.errors import SheetflowError
from sheetflow.core.models import ParseResult
from sheetflow.core.utils.io import save_json
from sheetflow.core.utils.logging import set_verbosity
from sheetflow.sdk.client import SheetflowClient
from sheetflow.sdk.config import DEFAULT_CONFIG_PATH, SdkConfig, load_config, merge_cli_overrides
from sheetflow.sdk.errors import SdkError

app = typer.Typer(add_completion=False, help="SheetFlow CLI")


class Context:
    def __init__(self) -> None:
        self.config: SdkConfig | None = None
        self.verbose = False

    def load(self) -> SdkConfig:
        if self.config is None:
            self.config = load_config()
        return self.config


# --- utility helpers ---

def _handle_exc(err: Exception) -> None:
    """Print a concise error and exit non-zero."""
    typer.echo(f"Error: {err}", err=True)
    raise typer.Exit(code=1)


def _toml_str(value: object) -> str:
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def _results_to_obj(files: List[Path], results: List[ParseResult]) -> object:
    if len(results) == 1:
        return results[0].records
    # Keyed by the path as given; two inputs may share a file name.
    return {str(path): result.records for path, result in zip(files, results)}


def _excel_targets(results: List[ParseResult], output_path: Path | None, cfg: SdkConfig) -> List[Path]:
    total = len(results)
    if output_path and output_path.suffix.lower() == ".xlsx":
        if total == 1:
            return [output_path]
        return [output_path.with_name(f"{output_path.stem}_{idx}{output_path.suffix}") for idx in range(1, total + 1)]

    if output_path and not output_path.suffix:
        base_dir = output_path
    else:
        base_dir = cfg.default_output_dir or Path.cwd()
    stems = [Path(result.meta.get("source", f"doc{idx}")).stem for idx, result in enumerate(results, start=1)]
    counts = Counter(stems)
    return [
        base_dir / (f"{stem}_{idx}.xlsx" if counts[stem] > 1 else f"{stem}.xlsx")
        for idx, stem in enumerate(stems, start=1)
    ]


def _emit(
    client: SheetflowClient,
    files: List[Path],
    results: List[ParseResult],
    cfg: SdkConfig,
    output_path: Path | None,
) -> None:
    output_format = cfg.default_output_format
    if output_format == "print":
        typer.echo(json.dumps(_results_to_obj(files, results), indent=2, ensure_ascii=False))
    elif output_format == "json":
        if output_path:
            save_json(output_path, _results_to_obj(files, results))
            typer.echo(f"Wrote {output_path}")
        else:
            typer.echo(json.dumps(_results_to_obj(files, results), indent=2, ensure_ascii=False))
    elif output_format == "excel":
        for result, target in zip(results, _excel_targets(results, output_path, cfg)):
            written = client.export_excel(result, target)
            typer.echo(f"Wrote {written} ({len(result.records)} rows)")
    else:  # pragma: no cover - rejected by config
        _handle_exc(SdkError(f"Unsupported output format: {output_format}"))


# --- CLI commands ---


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
) -> None:
    if ctx.obj is None:
        ctx.obj = Context()
    ctx.obj.verbose = verbose
    set_verbosity(verbose)


@app.command()
def init(
    ctx: typer.Context,
    default_output_format: str = typer.Option("print", "--default-output-format", help="print|json|excel"),
    default_output_dir: Optional[Path] = typer.Option(None, "--default-output-dir", help="Default output directory"),
    options_file: Optional[Path] = typer.Option(None, "--options-file", help="Parse options file (YAML/JSON)"),
    sheet_name: str = typer.Option("Data", "--sheet-name", help="Worksheet name"),
) -> None:
    try:
        merge_cli_overrides(SdkConfig(), output_format=default_output_format)
    except SdkError as exc:
        _handle_exc(exc)
    cfg_dir = DEFAULT_CONFIG_PATH.parent
    cfg_dir.mkdir(parents=True, exist_ok=True)
    lines = ["[sheetflow]"]
    lines.append(f"default_output_format = {_toml_str(default_output_format)}")
    if default_output_dir:
        lines.append(f"default_output_dir = {_toml_str(default_output_dir)}")
    if options_file:
        lines.append(f"options_file = {_toml_str(options_file)}")
    lines.append(f"sheet_name = {_toml_str(sheet_name)}")
    DEFAULT_CONFIG_PATH.write_text("\n".join(lines) + "\n", encoding="utf-8")
    typer.echo(f"Wrote TOML config to {DEFAULT_CONFIG_PATH}")


@app.command()
def convert(
    ctx: typer.Context,
    files: List[Path] = typer.Argument(..., help="Word documents (.docx) or JSON/text files"),
    output_format: Optional[str] = typer.Option(None, "--output-format", help="print|json|excel"),
    output_path: Optional[Path] = typer.Option(None, "--output-path", help="Output file (or directory for excel)"),
    options_file: Optional[Path] = typer.Option(None, "--options-file", help="Parse options file (YAML/JSON)"),
    sheet_name: Optional[str] = typer.Option(None, "--sheet-name", help="Worksheet name for excel output"),
) -> None:
    context: Context = ctx.obj
    try:
        cfg = merge_cli_overrides(
            context.load(),
            output_format=output_format,
            options_file=options_file,
            sheet_name=sheet_name,
        )
        client = SheetflowClient(config=cfg)
        results = client.parse_files(files)
        _emit(client, files, results, cfg, output_path)
    except (SdkError, SheetflowError) as exc:
        _handle_exc(exc)


if __name__ == "__main__":  # pragma: no cover
    app()
