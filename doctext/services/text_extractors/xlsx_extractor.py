"""
XLSX Text Extractor.

Flattens every worksheet of a zip-based Excel workbook into text using
openpyxl: cells of a row joined by spaces, rows joined by newlines.
"""
import io
import json
from datetime import date, datetime, time
from typing import Any, Iterable, List

from openpyxl import load_workbook
from openpyxl.cell.rich_text import CellRichText

from .base import BaseTextExtractor, ExtractionMethod
from ...core.logging_config import get_logger

logger = get_logger(__name__)


def cell_to_text(value: Any) -> str:
    """
    Stringify a cell value.

    Scalars are used directly. Structured values (formulas, rich text) are
    read through their ``text``, ``result`` or ``rich_text`` attribute, and
    anything else is serialized generically.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, CellRichText):
        return str(value).strip()
    for attr in ("text", "result", "rich_text"):
        inner = getattr(value, attr, None)
        if inner is not None:
            return cell_to_text(inner)
    return json.dumps(value, default=str, ensure_ascii=False)


def rows_to_text(rows: Iterable[Iterable[Any]]) -> str:
    """Join non-empty cells with spaces and non-empty rows with newlines."""
    lines = []
    for row in rows:
        cells = [cell_to_text(value) for value in row]
        cells = [cell for cell in cells if cell]
        if cells:
            lines.append(" ".join(cells))
    return "\n".join(lines)


class XLSXExtractor(BaseTextExtractor):
    """Extractor for XLSX files."""

    def __init__(self):
        super().__init__("xlsx", "Excel")

    def methods(self) -> List[ExtractionMethod]:
        return [ExtractionMethod("openpyxl", self._extract_workbook)]

    def get_error_message(self) -> str:
        return "Excel file has no extractable content (empty sheets or formatting only)"

    def _extract_workbook(self, file_bytes: bytes) -> str:
        # data_only returns cached formula results instead of formula strings
        workbook = load_workbook(io.BytesIO(file_bytes), data_only=True, rich_text=True)
        try:
            sheets = []
            for worksheet in workbook.worksheets:
                sheet_text = rows_to_text(worksheet.iter_rows(values_only=True))
                if sheet_text:
                    sheets.append(sheet_text)
            logger.debug(f"Read {len(workbook.worksheets)} worksheets, {len(sheets)} with content")
            return "\n".join(sheets)
        finally:
            workbook.close()
