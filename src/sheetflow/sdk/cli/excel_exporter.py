"""Spreadsheet export for merged record sets."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from sheetflow.core import config
from sheetflow.core.errors import ExportError
from sheetflow.core.normalize.merge import schema_union

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill("solid", fgColor="E6E6E6")
HEADER_ALIGNMENT = Alignment(horizontal="center")
FLOAT_FORMAT = "0.00"


def format_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (list, tuple)):
        value = ", ".join("" if v is None else str(v) for v in value)
    if isinstance(value, (int, float)):
        return value
    # Control characters are not allowed in the sheet XML.
    return ILLEGAL_CHARACTERS_RE.sub("", str(value)).strip()


def _column_widths(headers: List[str], rows: List[List[Any]]) -> List[int]:
    widths = []
    for idx, header in enumerate(headers):
        longest = max([len(header)] + [len(str(row[idx])) for row in rows])
        widths.append(min(longest + 2, config.MAX_COLUMN_WIDTH))
    return widths


def _append_text_row(ws, values: List[Any]) -> None:
    ws.append(values)
    for cell in ws[ws.max_row]:
        # openpyxl turns "=..." into a formula; record values are plain text.
        if isinstance(cell.value, str) and cell.value.startswith("="):
            cell.data_type = "s"


def build_workbook(records: Sequence[Dict[str, Any]], sheet_name: str = config.DEFAULT_SHEET_NAME) -> Workbook:
    """Lay ``records`` out as one sheet: header row, then one row per record."""
    if not isinstance(records, (list, tuple)) or not records:
        raise ExportError("Invalid or empty data array")
    if not all(isinstance(record, dict) for record in records):
        raise ExportError("Every exported record must be a mapping")

    keys = schema_union(records)
    if not keys:
        raise ExportError("No data to export")
    headers = [format_cell(key) for key in keys]
    rows = [[format_cell(record.get(key)) for key in keys] for record in records]

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    _append_text_row(ws, headers)
    for row in rows:
        _append_text_row(ws, row)

    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT

    for row_cells in ws.iter_rows(min_row=2):
        for cell in row_cells:
            if isinstance(cell.value, float):
                cell.number_format = FLOAT_FORMAT

    for idx, width in enumerate(_column_widths(headers, rows), start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width
    return wb


def export_records_to_excel(
    records: Sequence[Dict[str, Any]],
    path: str | Path,
    sheet_name: str = config.DEFAULT_SHEET_NAME,
) -> Path:
    wb = build_workbook(records, sheet_name)
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        wb.save(target)
    except OSError as exc:
        raise ExportError(f"Failed to write workbook {target}: {exc}") from exc
    return target
