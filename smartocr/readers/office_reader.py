"""
Office document readers: Word (python-docx) and Excel (openpyxl).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from docx import Document
from openpyxl import load_workbook

from smartocr.readers.base import TextReader

logger = logging.getLogger(__name__)


class DocxReader(TextReader):
    """Paragraph text followed by table rows (cells tab-separated)."""

    def extract(self, path: Path) -> str:
        document = Document(str(path))
        parts = [para.text for para in document.paragraphs if para.text.strip()]

        for table in document.tables:
            for row in table.rows:
                row_text = "\t".join(cell.text.strip() for cell in row.cells)
                if row_text.strip():
                    parts.append(row_text)

        return "\n".join(parts)


def cell_to_str(value: Any) -> str:
    """Render a cell value; whole floats lose their trailing ``.0``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class XlsxReader(TextReader):
    """
    One ``Sheet: <name>`` section per worksheet, rows tab-separated.

    Formulas are read as their cached values. Legacy .xls workbooks are
    not supported by openpyxl and are therefore not registered.
    """

    def extract(self, path: Path) -> str:
        workbook = load_workbook(filename=path, read_only=True, data_only=True)
        try:
            sections = []
            for sheet in workbook.worksheets:
                rows = []
                for row in sheet.iter_rows(values_only=True):
                    cells = [cell_to_str(value) for value in row]
                    if any(cell.strip() for cell in cells):
                        rows.append("\t".join(cells).rstrip("\t"))
                sections.append(f"Sheet: {sheet.title}\n" + "\n".join(rows))
                logger.debug("Sheet %s: %d row(s)", sheet.title, len(rows))
        finally:
            workbook.close()

        return "\n\n".join(sections)
