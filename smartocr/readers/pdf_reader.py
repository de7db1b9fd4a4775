"""
PDF reader using PyMuPDF (fitz).

Text comes from each page's text layer. Pages without one (scans) are
rendered and passed to the OCR engine when a fallback engine is given.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import fitz  # PyMuPDF

from smartocr.exceptions import ExtractionError
from smartocr.ocr.engine import TesseractEngine
from smartocr.readers.base import TextReader

logger = logging.getLogger(__name__)

# PDF text layers often drop the space between a date and the reading after it:
# "2 Dec 20244957.7900" -> "2 Dec 2024 4957.7900"
DATE_READING_PATTERN = re.compile(r"(\d{1,2}\s+[A-Za-z]{3}\s+\d{4})(\d{4}\.\d{2,4})")


def fix_date_spacing(text: str) -> str:
    return DATE_READING_PATTERN.sub(r"\1 \2", text)


class PDFReader(TextReader):
    """
    Extracts text from PDFs.

    Usage:
        reader = PDFReader(ocr_engine=engine)
        text = reader.extract(Path("statement.pdf"))
    """

    def __init__(self, ocr_engine: TesseractEngine | None = None):
        self.ocr_engine = ocr_engine

    def extract(self, path: Path) -> str:
        doc = fitz.open(path)
        try:
            pages = [self._page_text(page) for page in doc]
            logger.debug("PDF %s: %d page(s)", path.name, len(pages))
        finally:
            doc.close()

        return fix_date_spacing("\n".join(pages).strip())

    def _page_text(self, page: fitz.Page) -> str:
        text = page.get_text("text").strip()
        if text or self.ocr_engine is None:
            return text

        logger.debug("Page %d has no text layer; running OCR", page.number)
        try:
            image = self.ocr_engine.render_page_to_image(page)
            return self.ocr_engine.recognize_image(image)
        except ExtractionError as e:
            logger.warning("OCR fallback skipped for page %d: %s", page.number, e)
            return ""
