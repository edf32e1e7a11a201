"""
XLS Text Extractor.

Reads legacy binary Excel (.xls) workbooks with xlrd. Each sheet becomes a
header-less grid of rows in which empty cells are '', then is flattened the
same way as modern workbooks.
"""
from typing import Any, List

import xlrd

from .base import BaseTextExtractor, ExtractionMethod
from .xlsx_extractor import rows_to_text
from ...core.logging_config import get_logger

logger = get_logger(__name__)


def _cell_value(cell: xlrd.sheet.Cell, datemode: int) -> Any:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
        return ""
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_DATE:
        try:
            return xlrd.xldate.xldate_as_datetime(cell.value, datemode)
        except (xlrd.xldate.XLDateError, ValueError, OverflowError):
            return cell.value
    return cell.value


def sheet_to_rows(sheet: xlrd.sheet.Sheet, datemode: int) -> List[List[Any]]:
    """Convert a sheet to an array of rows of cell values."""
    return [
        [_cell_value(cell, datemode) for cell in sheet.row(row_index)]
        for row_index in range(sheet.nrows)
    ]


class XLSExtractor(BaseTextExtractor):
    """Extractor for XLS (old Excel format) files."""

    def __init__(self):
        super().__init__("xls", "Legacy Excel")

    def methods(self) -> List[ExtractionMethod]:
        return [ExtractionMethod("xlrd", self._extract_workbook)]

    def get_error_message(self) -> str:
        return "Legacy Excel file has no extractable content"

    def _extract_workbook(self, file_bytes: bytes) -> str:
        book = xlrd.open_workbook(file_contents=file_bytes, on_demand=True)
        try:
            sheets = []
            for sheet_index in range(book.nsheets):
                sheet = book.sheet_by_index(sheet_index)
                sheet_text = rows_to_text(sheet_to_rows(sheet, book.datemode))
                if sheet_text:
                    sheets.append(sheet_text)
            return "\n".join(sheets)
        finally:
            book.release_resources()
