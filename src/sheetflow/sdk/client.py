"""Python client for SheetFlow."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from sheetflow.core.extraction.engine import aparse_source, parse_source, parse_text
from sheetflow.core.models import FileSource, ParseOptions, ParseResult
from .cli.excel_exporter import export_records_to_excel
from .config import SdkConfig, load_config
from .options import load_options


class SheetflowClient:
    def __init__(self, config: SdkConfig | None = None, options: ParseOptions | None = None) -> None:
        self.config = config or load_config()
        self.options = load_options(self.config).merged(options)

    # --- public methods ---
    def parse_text(self, text: str, name: str = "inline", document: bool = False) -> ParseResult:
        return parse_text(text, document=document, options=self.options, name=name)

    def parse_file(self, path: str | Path) -> ParseResult:
        return parse_source(FileSource(Path(path)), options=self.options)

    def parse_files(self, files: Iterable[str | Path]) -> List[ParseResult]:
        return [self.parse_file(path) for path in files]

    async def aparse_file(self, path: str | Path) -> ParseResult:
        return await aparse_source(FileSource(Path(path)), options=self.options)

    def export_excel(self, result: ParseResult, path: str | Path) -> Path:
        return export_records_to_excel(result.records, path, sheet_name=self.config.sheet_name)
